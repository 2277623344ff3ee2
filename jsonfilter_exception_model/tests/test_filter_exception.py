import unittest

from jsonfilter_exception_model.exception import FilterError, TypeMismatchException, MissingValueException, \
    MalformedPathException, InvalidFilterException, InvalidValueException, FilterDepthExceededException


class BaseExceptionTest(unittest.TestCase):
    """Base test class for common exception testing behavior"""

    exception_class = None  # Will be set in subclasses

    def setUp(self):
        # Skip tests in this base class
        if self.__class__ == BaseExceptionTest:
            self.skipTest("Base class")

    def test_inheritance(self):
        """Test that the exception inherits from FilterError"""
        self.assertTrue(issubclass(self.exception_class, FilterError))
        self.assertTrue(issubclass(self.exception_class, Exception))

    def test_basic_instantiation(self):
        """Test that exception can be instantiated with just a message"""
        message = "Test error message"
        exc = self.exception_class(message)
        self.assertEqual(exc.message, message)
        self.assertEqual(str(exc), message)

    def test_raise_and_catch_as_filter_error(self):
        """Test that exception can be raised and caught through the base class"""
        message = "Test error message"
        try:
            raise self.exception_class(message)
        except FilterError as e:
            self.assertIsInstance(e, self.exception_class)
            self.assertEqual(e.message, message)


class TestTypeMismatchException(BaseExceptionTest):
    exception_class = TypeMismatchException

    def test_with_all_details(self):
        exc = TypeMismatchException("Type mismatch", expected_kind="number",
                                    actual_kind="string", operator="GreaterThan")
        self.assertEqual(exc.expected_kind, "number")
        self.assertEqual(exc.actual_kind, "string")
        self.assertEqual(exc.operator, "GreaterThan")
        self.assertEqual(str(exc), "Type mismatch (operator=GreaterThan, expected=number, actual=string)")

    def test_with_kinds_only(self):
        exc = TypeMismatchException("Type mismatch", expected_kind="array", actual_kind="object")
        self.assertIsNone(exc.operator)
        self.assertEqual(str(exc), "Type mismatch (expected=array, actual=object)")


class TestMissingValueException(BaseExceptionTest):
    exception_class = MissingValueException

    def test_with_operator_and_path(self):
        exc = MissingValueException("No value", operator="StartsWith", path="user.name")
        self.assertEqual(exc.operator, "StartsWith")
        self.assertEqual(exc.path, "user.name")
        self.assertEqual(str(exc), "No value (operator=StartsWith, path=user.name)")


class TestMalformedPathException(BaseExceptionTest):
    exception_class = MalformedPathException

    def test_with_path_and_position(self):
        exc = MalformedPathException("Bad index", "tags[x]", 4)
        self.assertEqual(exc.path, "tags[x]")
        self.assertEqual(exc.position, 4)
        self.assertEqual(str(exc), "Bad index (path='tags[x]', position=4)")


class TestInvalidFilterException(BaseExceptionTest):
    exception_class = InvalidFilterException

    def test_with_cause(self):
        cause = KeyError("path")
        exc = InvalidFilterException("Missing field", cause=cause)
        self.assertIs(exc.cause, cause)
        self.assertEqual(str(exc), f"Missing field (cause={cause})")


class TestInvalidValueException(BaseExceptionTest):
    exception_class = InvalidValueException

    def test_with_value_type(self):
        exc = InvalidValueException("Not JSON", "set")
        self.assertEqual(exc.value_type, "set")
        self.assertEqual(str(exc), "Not JSON (value_type=set)")


class TestFilterDepthExceededException(BaseExceptionTest):
    exception_class = FilterDepthExceededException

    def test_with_max_depth(self):
        exc = FilterDepthExceededException("Too deep", 8)
        self.assertEqual(exc.max_depth, 8)
        self.assertEqual(str(exc), "Too deep (max_depth=8)")


if __name__ == '__main__':
    unittest.main()
