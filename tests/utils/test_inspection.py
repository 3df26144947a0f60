from unittest import TestCase

from deadswitch.utils.inspection import get_qualified_name, get_member_names_no_superclass, \
    get_member_names_up_to, get_and_resolve_type_hints


class SuperClass:
    z: int

    def h(self):
        pass


class ClassWithAttributes(SuperClass):

    x: int
    y: str


class ClassWithFunctions(SuperClass):

    def f(self):
        pass

    def g(self) -> 'ClassWithFunctions':
        pass

    def _hidden(self):
        pass


class TestInspection(TestCase):

    def test_get_member_names_attributes(self):
        names = get_member_names_no_superclass(ClassWithAttributes, include_fields=True, include_functions=False)
        self.assertEqual(sorted(names), ['x', 'y'])

    def test_get_member_names_functions(self):
        names = get_member_names_no_superclass(ClassWithFunctions, include_fields=False, include_functions=True)
        self.assertEqual(sorted(names), ['f', 'g'])

    def test_get_member_names_up_to(self):
        names = get_member_names_up_to(ClassWithFunctions, object, include_fields=True, include_functions=True)
        self.assertEqual(sorted(names), ['f', 'g', 'h', 'z'])

    def test_resolve_self_reference(self):
        hints = get_and_resolve_type_hints(ClassWithFunctions, ClassWithFunctions.g)
        self.assertIs(hints['return'], ClassWithFunctions)

    def test_get_qualified_name(self):
        qualified_name = get_qualified_name(ClassWithFunctions)
        self.assertIn('test_inspection.ClassWithFunctions', qualified_name)
        self.assertEqual(get_qualified_name(int), 'int')
