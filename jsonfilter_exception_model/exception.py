class FilterError(Exception):
    """
    Base class for every error raised while building, decoding or evaluating a filter.

    A path that does not resolve is not an error; only operators that need a
    value turn absence into ``MissingValueException``.

    Attributes:
        message -- explanation of the error
    """

    def __init__(self, message):
        self.message = message
        super().__init__(self.message)

    def __str__(self):
        return self.message


class TypeMismatchException(FilterError):
    """
    Exception raised when the resolved value's kind is incompatible with the
    operator, e.g. ``GreaterThan`` applied to a string.
    """

    def __init__(self, message, expected_kind=None, actual_kind=None, operator=None):
        self.expected_kind = expected_kind
        self.actual_kind = actual_kind
        self.operator = operator
        super().__init__(message)

    def __str__(self):
        details = []
        if self.operator is not None:
            details.append(f"operator={self.operator}")
        if self.expected_kind is not None:
            details.append(f"expected={self.expected_kind}")
        if self.actual_kind is not None:
            details.append(f"actual={self.actual_kind}")

        if details:
            return f"{self.message} ({', '.join(details)})"
        return self.message


class MissingValueException(FilterError):
    """
    Exception raised when a strict operator (numeric, string, array or object
    family) needs a value but the filter path resolved to nothing.
    """

    def __init__(self, message, operator=None, path=None):
        self.operator = operator
        self.path = path
        super().__init__(message)

    def __str__(self):
        details = []
        if self.operator is not None:
            details.append(f"operator={self.operator}")
        if self.path is not None:
            details.append(f"path={self.path}")

        if details:
            return f"{self.message} ({', '.join(details)})"
        return self.message


class MalformedPathException(FilterError):
    """
    Exception raised when a path expression does not follow the path grammar.
    """

    def __init__(self, message, path=None, position=None):
        self.path = path
        self.position = position
        super().__init__(message)

    def __str__(self):
        details = []
        if self.path is not None:
            details.append(f"path={self.path!r}")
        if self.position is not None:
            details.append(f"position={self.position}")

        if details:
            return f"{self.message} ({', '.join(details)})"
        return self.message


class InvalidFilterException(FilterError):
    """
    Exception raised when a serialized filter cannot be decoded, or an operator
    is built with an operand of the wrong shape.
    """

    def __init__(self, message, cause: Exception = None):
        self.cause = cause
        super().__init__(message)

    def __str__(self):
        if self.cause is not None:
            return f"{self.message} (cause={self.cause})"
        return self.message


class InvalidValueException(FilterError):
    """
    Exception raised when a document or operand holds a Python value outside
    the JSON value model (null, bool, number, string, array, object).
    """

    def __init__(self, message, value_type=None):
        self.value_type = value_type
        super().__init__(message)

    def __str__(self):
        if self.value_type is not None:
            return f"{self.message} (value_type={self.value_type})"
        return self.message


class FilterDepthExceededException(FilterError):
    """
    Exception raised when nested And/Or filters go deeper than the configured limit.
    """

    def __init__(self, message, max_depth=None):
        self.max_depth = max_depth
        super().__init__(message)

    def __str__(self):
        if self.max_depth is not None:
            return f"{self.message} (max_depth={self.max_depth})"
        return self.message

