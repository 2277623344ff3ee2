"""Filter and operator value types, with their externally tagged JSON form."""
import json
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Iterable, Optional, Tuple

from jsonfilter_data_model.operator_type import OperatorFamily, OperatorType
from jsonfilter_data_model.value_kind import is_number, to_float, validate_json_value
from jsonfilter_engine.config import settings
from jsonfilter_engine.evaluation.filter_evaluator import default_filter_evaluator
from jsonfilter_exception_model.exception import (
    FilterDepthExceededException, FilterError, InvalidFilterException
)


@dataclass(frozen=True)
class Operator:
    """
    Base of every operator variant.

    Each variant carries its operand(s) and a class-level ``type`` tag. Once
    built, an operator is never mutated; it is safe to share across threads.
    """
    type: ClassVar[OperatorType]

    @property
    def family(self) -> OperatorFamily:
        return self.type.family

    def _operand_to_dict(self) -> Any:
        return self.operand

    def to_dict(self) -> Dict[str, Any]:
        """Externally tagged form, e.g. ``{"GreaterThan": 20.0}``."""
        return {self.type.value: self._operand_to_dict()}


@dataclass(frozen=True)
class NumericOperator(Operator):
    operand: float

    def __post_init__(self):
        if not is_number(self.operand):
            raise InvalidFilterException(
                f"{self.type} operand must be a number, got {type(self.operand).__name__}"
            )
        object.__setattr__(self, "operand", to_float(self.operand))


@dataclass(frozen=True)
class GreaterThan(NumericOperator):
    type: ClassVar[OperatorType] = OperatorType.GREATER_THAN


@dataclass(frozen=True)
class LessThan(NumericOperator):
    type: ClassVar[OperatorType] = OperatorType.LESS_THAN


@dataclass(frozen=True)
class GreaterOrEqual(NumericOperator):
    type: ClassVar[OperatorType] = OperatorType.GREATER_OR_EQUAL


@dataclass(frozen=True)
class LessOrEqual(NumericOperator):
    type: ClassVar[OperatorType] = OperatorType.LESS_OR_EQUAL


@dataclass(frozen=True)
class ValueOperator(Operator):
    """Operator whose operand is any JSON value."""
    operand: Any

    def __post_init__(self):
        try:
            validate_json_value(self.operand)
        except FilterError as e:
            raise InvalidFilterException(f"{self.type} operand must be a JSON value", cause=e)


@dataclass(frozen=True)
class Equals(ValueOperator):
    type: ClassVar[OperatorType] = OperatorType.EQUALS


@dataclass(frozen=True)
class NotEqual(ValueOperator):
    type: ClassVar[OperatorType] = OperatorType.NOT_EQUAL


@dataclass(frozen=True)
class ArrayContains(ValueOperator):
    type: ClassVar[OperatorType] = OperatorType.ARRAY_CONTAINS


@dataclass(frozen=True)
class StringOperator(Operator):
    operand: str

    def __post_init__(self):
        if not isinstance(self.operand, str):
            raise InvalidFilterException(
                f"{self.type} operand must be a string, got {type(self.operand).__name__}"
            )


@dataclass(frozen=True)
class StartsWith(StringOperator):
    type: ClassVar[OperatorType] = OperatorType.STARTS_WITH


@dataclass(frozen=True)
class EndsWith(StringOperator):
    type: ClassVar[OperatorType] = OperatorType.ENDS_WITH


@dataclass(frozen=True)
class Contains(StringOperator):
    type: ClassVar[OperatorType] = OperatorType.CONTAINS


@dataclass(frozen=True)
class HasKey(StringOperator):
    type: ClassVar[OperatorType] = OperatorType.HAS_KEY


@dataclass(frozen=True)
class LogicalOperator(Operator):
    """And/Or over nested filters; each nested path is resolved from the document root."""
    filters: Tuple["Filter", ...] = ()

    def __post_init__(self):
        filters = tuple(self.filters)
        for sub_filter in filters:
            if not isinstance(sub_filter, Filter):
                raise InvalidFilterException(
                    f"{self.type} accepts Filter instances only, got {type(sub_filter).__name__}"
                )
        object.__setattr__(self, "filters", filters)

    def _operand_to_dict(self) -> Any:
        return [sub_filter.to_dict() for sub_filter in self.filters]


@dataclass(frozen=True)
class And(LogicalOperator):
    type: ClassVar[OperatorType] = OperatorType.AND


@dataclass(frozen=True)
class Or(LogicalOperator):
    type: ClassVar[OperatorType] = OperatorType.OR


OPERATOR_CLASSES: Dict[OperatorType, type] = {
    cls.type: cls for cls in (
        GreaterThan, LessThan, GreaterOrEqual, LessOrEqual,
        Equals, NotEqual,
        StartsWith, EndsWith, Contains,
        ArrayContains,
        HasKey,
        And, Or,
    )
}


def operator_from_dict(data: Dict[str, Any], depth: int = 0) -> Operator:
    """
    Rebuild an operator from its externally tagged form.

    Raises:
        InvalidFilterException: If the tag is unknown, the object does not hold
            exactly one tag, or the operand has the wrong shape.
        FilterDepthExceededException: If nested filters exceed the configured depth.
    """
    if not isinstance(data, dict) or len(data) != 1:
        raise InvalidFilterException("Operator must be an object with exactly one variant tag")

    (tag, operand), = data.items()
    try:
        operator_type = OperatorType(tag)
    except ValueError as e:
        raise InvalidFilterException(f"Unknown operator variant: {tag!r}", cause=e)

    cls = OPERATOR_CLASSES[operator_type]
    if operator_type.family == OperatorFamily.LOGICAL:
        if not isinstance(operand, list):
            raise InvalidFilterException(f"{operator_type} operand must be a list of filters")
        return cls(tuple(Filter.from_dict(item, depth + 1) for item in operand))
    return cls(operand)


@dataclass(frozen=True)
class Filter:
    """
    A path paired with an operator.

    The path is not validated here; syntax problems surface when the filter
    is checked, where a malformed path behaves like a path that does not
    resolve. The path ``"."`` addresses the whole document.

    Attributes:
        path (str): Dotted/bracketed location inside the document, e.g. ``user.tags[0]``.
        operator (Operator): Predicate or logical combinator applied at ``path``.
    """
    path: str
    operator: Operator

    @staticmethod
    def new(path: str, operator: Operator) -> "Filter":
        return Filter(path=path, operator=operator)

    @staticmethod
    def all_of(filters: Iterable["Filter"]) -> "Filter":
        return Filter(path=".", operator=And(tuple(filters)))

    @staticmethod
    def any_of(filters: Iterable["Filter"]) -> "Filter":
        return Filter(path=".", operator=Or(tuple(filters)))

    def check(self, document: Any) -> bool:
        """
        Return whether ``document`` satisfies this filter.

        Raises:
            TypeMismatchException: The value at the path has the wrong kind for the operator.
            MissingValueException: A strict operator found nothing at the path.
            FilterDepthExceededException: Nested And/Or filters are too deep.
        """
        return default_filter_evaluator.check(self, document)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'path': self.path,
            'operator': self.operator.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any], depth: int = 0) -> "Filter":
        if depth > settings.max_filter_depth:
            raise FilterDepthExceededException("Serialized filter nesting is too deep", settings.max_filter_depth)
        if not isinstance(d, dict):
            raise InvalidFilterException(f"Filter must be an object, got {type(d).__name__}")
        try:
            path = d['path']
            operator_data = d['operator']
        except KeyError as e:
            raise InvalidFilterException("Filter is missing a required field", cause=e)
        if not isinstance(path, str):
            raise InvalidFilterException(f"Filter path must be a string, got {type(path).__name__}")
        return cls(path=path, operator=operator_from_dict(operator_data, depth))

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text: str) -> "Filter":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidFilterException("Filter is not valid JSON", cause=e)
        return cls.from_dict(data)
