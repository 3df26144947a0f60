import inspect
from typing import Type, List, Dict


def get_and_resolve_type_hints(cls: Type, item) -> Dict[str, Type]:
    annotations = inspect.get_annotations(item)
    types = {}
    for t in annotations:
        if isinstance(annotations[t], str):
            # try to resolve references of the class to itself
            if cls.__name__ == annotations[t]:
                types[t] = cls
                continue
        types[t] = annotations[t]
    return types


def get_member_names_no_superclass(cls: Type, include_fields: bool, include_functions: bool) -> List['str']:
    """
    Returns: All non-internal functions and field names on this class, excluding items defined in its superclass.
    """
    members = []
    dct = cls.__dict__
    if include_functions:
        members = members + [c for c in dct if not c.startswith('_') and inspect.isfunction(dct[c])]
    if include_fields:
        annotations = inspect.get_annotations(cls)
        members = members + [c for c in annotations if not c.startswith('__') and not c.endswith('__')]
    return members


def get_member_names_up_to(cls: Type, base: Type, include_fields: bool, include_functions: bool) -> List['str']:
    """
    Returns: Member names declared on cls and on all its superclasses strictly below base (in MRO order, no duplicates).
    """
    members = []
    for klass in cls.__mro__:
        if klass is base or not issubclass(klass, base):
            continue
        for m in get_member_names_no_superclass(klass, include_fields, include_functions):
            if m not in members:
                members.append(m)
    return members


def get_qualified_name(klass: Type):
    # https://stackoverflow.com/questions/2020014/get-fully-qualified-class-name-of-an-object-in-python
    module = klass.__module__
    if module == 'builtins':
        return klass.__qualname__  # avoid outputs like 'builtins.str'
    return module + '.' + klass.__qualname__
