from enum import Enum


class OperatorFamily(Enum):
    NUMERIC = "numeric"
    STRING = "string"
    GENERIC = "generic"
    ARRAY = "array"
    OBJECT = "object"
    LOGICAL = "logical"


class OperatorType(Enum):
    """Operator variants; the value is the tag used in the serialized form."""
    GREATER_THAN = "GreaterThan"
    LESS_THAN = "LessThan"
    GREATER_OR_EQUAL = "GreaterOrEqual"
    LESS_OR_EQUAL = "LessOrEqual"

    EQUALS = "Equals"
    NOT_EQUAL = "NotEqual"

    STARTS_WITH = "StartsWith"
    ENDS_WITH = "EndsWith"
    CONTAINS = "Contains"

    ARRAY_CONTAINS = "ArrayContains"

    HAS_KEY = "HasKey"

    AND = "And"
    OR = "Or"

    def __str__(self):
        return self.value

    @property
    def family(self) -> OperatorFamily:
        return _FAMILIES[self]


_FAMILIES = {
    OperatorType.GREATER_THAN: OperatorFamily.NUMERIC,
    OperatorType.LESS_THAN: OperatorFamily.NUMERIC,
    OperatorType.GREATER_OR_EQUAL: OperatorFamily.NUMERIC,
    OperatorType.LESS_OR_EQUAL: OperatorFamily.NUMERIC,
    OperatorType.EQUALS: OperatorFamily.GENERIC,
    OperatorType.NOT_EQUAL: OperatorFamily.GENERIC,
    OperatorType.STARTS_WITH: OperatorFamily.STRING,
    OperatorType.ENDS_WITH: OperatorFamily.STRING,
    OperatorType.CONTAINS: OperatorFamily.STRING,
    OperatorType.ARRAY_CONTAINS: OperatorFamily.ARRAY,
    OperatorType.HAS_KEY: OperatorFamily.OBJECT,
    OperatorType.AND: OperatorFamily.LOGICAL,
    OperatorType.OR: OperatorFamily.LOGICAL,
}
