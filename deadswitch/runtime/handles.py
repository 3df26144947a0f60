from typing import TYPE_CHECKING, Type

from deadswitch.lang.contract import Contract
from deadswitch.lang.function import Function
from deadswitch.lang.type_address import Address
from deadswitch.utils.inspection import get_qualified_name

if TYPE_CHECKING:
    from deadswitch.runtime.runtime import Runtime


class FunctionHandle:
    def __init__(self,
                 runtime: 'Runtime',
                 clazz: Type[Contract],
                 function: Function,
                 receiver_address: Address = None):
        self._hdl_runtime = runtime
        self._hdl_class = clazz
        self._hdl_function = function
        self._hdl_receiver_address = receiver_address

    def __call__(self, *args, **kwargs):
        unexpected = [k for k in kwargs if k not in ("sender", "value")]
        if len(unexpected) > 0:
            raise AssertionError(f"Unexpected named argument '{unexpected[0]}'")
        f = self._hdl_function
        if not f.nof_required_arguments <= len(args) <= len(f.argument_types):
            raise AssertionError(f"Expected {f.nof_required_arguments} to {len(f.argument_types)} positional "
                                 f"arguments, but got {len(args)}")
        arguments = list(args)
        for i in range(0, len(arguments)):
            # unwrap object handles to addresses
            if isinstance(arguments[i], ObjectHandle):
                arguments[i] = arguments[i]._hdl_address
        value = kwargs.get("value", 0)

        if f.is_view:
            if value != 0:
                raise AssertionError(f"Cannot attach value to view function '{f.name}'")
            return self._hdl_runtime.query_function(self._hdl_receiver_address, f.name, arguments, kwargs.get("sender"))

        if "sender" not in kwargs:
            raise AssertionError("Expected named argument 'sender'")
        sender_account = kwargs["sender"]
        if f.is_constructor:
            address = self._hdl_runtime.deploy_contract(self._hdl_class, f.name, sender_account, arguments, value)
            return ObjectHandle(self._hdl_runtime, self._hdl_class, address)
        return self._hdl_runtime.call_function(self._hdl_class, self._hdl_receiver_address, f.name, sender_account,
                                               arguments, value)


class ObjectHandle:
    def __init__(self, runtime: 'Runtime', clazz: Type[Contract], address: Address):
        self._hdl_runtime = runtime
        self._hdl_class = clazz
        self._hdl_class_name = get_qualified_name(clazz)
        self._hdl_address = address

    def __getattr__(self, item):
        if item.startswith("_hdl_"):
            # normal read
            return super().__getattribute__(item)
        elif item in self._hdl_class.contract_functions:
            f = self._hdl_class.contract_functions[item]
            if f.is_constructor:
                raise AttributeError(f"Cannot call constructor function '{item}' on object handle (use class handle instead)")
            if f.is_private:
                raise AttributeError(f"Member {item} of {self._hdl_class_name} is private")
            return FunctionHandle(self._hdl_runtime, self._hdl_class, f, self._hdl_address)
        elif item == "address":
            return self._hdl_address
        elif item == "balance":
            return self._hdl_runtime.balance_of(self._hdl_address)
        elif item in self._hdl_class.contract_fields and self._hdl_class.contract_fields[item].is_public:
            return self._hdl_runtime.get_field_value(self._hdl_address, item)
        else:
            raise AttributeError(f"Class {self._hdl_class_name} does not have member {item}")

    def __repr__(self):
        return f"ObjectHandle({self._hdl_class.__name__} at {self._hdl_address!r})"


class ClassHandle:
    def __init__(self, runtime: 'Runtime', clazz: Type[Contract]):
        assert(issubclass(clazz, Contract))
        self._hdl_runtime = runtime
        self._hdl_class = clazz
        self._hdl_class_name = get_qualified_name(clazz)

    def __getattr__(self, item):
        if item.startswith("_hdl_"):
            # normal read
            return super().__getattribute__(item)
        elif item in self._hdl_class.contract_functions:
            f = self._hdl_class.contract_functions[item]
            if not f.is_constructor:
                raise AttributeError(f"Member {item} is not a constructor function of {self._hdl_class_name}")
            if f.is_private:
                raise AttributeError(f"Member {item} of {self._hdl_class_name} is private")
            return FunctionHandle(self._hdl_runtime, self._hdl_class, f)
        else:
            raise AttributeError(f"Class {self._hdl_class_name} does not have member {item}")
