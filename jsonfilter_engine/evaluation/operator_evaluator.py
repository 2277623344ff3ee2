"""
    Applies an operator to the value resolved at a filter's path.

    ┌────────────────────────────────────────────────────────────────────────────┐
    │                        OperatorEvaluator Dispatch                          │
    ├────────────────────────────────────────────────────────────────────────────┤
    │  family     │ needs value │ absent (NOT_FOUND)        │ wrong kind         │
    │─────────────┼─────────────┼───────────────────────────┼────────────────────│
    │  numeric    │ number      │ MissingValueException     │ TypeMismatch       │
    │  string     │ string      │ MissingValueException     │ TypeMismatch       │
    │  array      │ array       │ MissingValueException     │ TypeMismatch       │
    │  object     │ object      │ MissingValueException     │ TypeMismatch       │
    │  generic    │ any         │ Equals → False            │ n/a                │
    │             │             │ NotEqual → True           │                    │
    │  logical    │ ignored     │ re-check nested filters against the document │
    │             │             │ And: stop on first False, [] → True          │
    │             │             │ Or:  stop on first True,  [] → False         │
    │             │             │ any error propagates immediately             │
    └────────────────────────────────────────────────────────────────────────────┘
"""
import logging
from typing import Any, Callable, Dict, Optional

from jsonfilter_data_model.operator_type import OperatorFamily, OperatorType
from jsonfilter_data_model.value_kind import ValueKind, json_equals, kind_of, to_float
from jsonfilter_engine.path.path_resolver import NOT_FOUND
from jsonfilter_exception_model.exception import MissingValueException, TypeMismatchException

logger = logging.getLogger(__name__)

# (filter, document, depth) -> bool
NestedChecker = Callable[[Any, Any, int], bool]

_NUMERIC_COMPARISONS: Dict[OperatorType, Callable[[float, float], bool]] = {
    OperatorType.GREATER_THAN: lambda value, operand: value > operand,
    OperatorType.LESS_THAN: lambda value, operand: value < operand,
    OperatorType.GREATER_OR_EQUAL: lambda value, operand: value >= operand,
    OperatorType.LESS_OR_EQUAL: lambda value, operand: value <= operand,
}

_STRING_PREDICATES: Dict[OperatorType, Callable[[str, str], bool]] = {
    OperatorType.STARTS_WITH: lambda value, operand: value.startswith(operand),
    OperatorType.ENDS_WITH: lambda value, operand: value.endswith(operand),
    OperatorType.CONTAINS: lambda value, operand: operand in value,
}


class OperatorEvaluator:
    """Evaluates a single operator; logical operators delegate back through ``nested_checker``."""

    def __init__(self, nested_checker: NestedChecker):
        self._nested_checker = nested_checker
        self._family_handlers: Dict[OperatorFamily, Callable[..., bool]] = {
            OperatorFamily.NUMERIC: self._evaluate_numeric,
            OperatorFamily.STRING: self._evaluate_string,
            OperatorFamily.GENERIC: self._evaluate_generic,
            OperatorFamily.ARRAY: self._evaluate_array,
            OperatorFamily.OBJECT: self._evaluate_object,
            OperatorFamily.LOGICAL: self._evaluate_logical,
        }

    def evaluate(self, resolved: Any, operator, document: Any,
                 depth: int = 0, path: Optional[str] = None) -> bool:
        """
        Evaluate ``operator`` against ``resolved``.

        Args:
            resolved: Value located at the filter path, or ``NOT_FOUND``.
            operator: Operator variant to apply.
            document: The whole document; logical operators re-resolve their
                nested filters against it.
            depth: Nesting level of the filter owning ``operator``.
            path: Filter path, used only to describe errors.

        Raises:
            MissingValueException: A strict operator found no value.
            TypeMismatchException: The value kind does not suit the operator.
        """
        handler = self._family_handlers[operator.type.family]
        return handler(resolved, operator, document, depth, path)

    @staticmethod
    def _require(resolved: Any, operator, expected_kind: ValueKind, path: Optional[str]) -> Any:
        if resolved is NOT_FOUND:
            raise MissingValueException(
                f"{operator.type} requires a value but the path did not resolve",
                operator=operator.type, path=path
            )
        actual_kind = kind_of(resolved)
        if actual_kind != expected_kind:
            raise TypeMismatchException(
                f"{operator.type} cannot be applied to a {actual_kind} value",
                expected_kind=expected_kind, actual_kind=actual_kind, operator=operator.type
            )
        return resolved

    def _evaluate_numeric(self, resolved, operator, document, depth, path) -> bool:
        value = self._require(resolved, operator, ValueKind.NUMBER, path)
        return _NUMERIC_COMPARISONS[operator.type](to_float(value), operator.operand)

    def _evaluate_string(self, resolved, operator, document, depth, path) -> bool:
        value = self._require(resolved, operator, ValueKind.STRING, path)
        return _STRING_PREDICATES[operator.type](value, operator.operand)

    @staticmethod
    def _evaluate_generic(resolved, operator, document, depth, path) -> bool:
        if resolved is NOT_FOUND:
            # a missing field is simply not equal to anything
            return operator.type == OperatorType.NOT_EQUAL
        equal = json_equals(resolved, operator.operand)
        return not equal if operator.type == OperatorType.NOT_EQUAL else equal

    def _evaluate_array(self, resolved, operator, document, depth, path) -> bool:
        items = self._require(resolved, operator, ValueKind.ARRAY, path)
        return any(json_equals(item, operator.operand) for item in items)

    def _evaluate_object(self, resolved, operator, document, depth, path) -> bool:
        obj = self._require(resolved, operator, ValueKind.OBJECT, path)
        return operator.operand in obj

    def _evaluate_logical(self, resolved, operator, document, depth, path) -> bool:
        if operator.type == OperatorType.AND:
            for index, sub_filter in enumerate(operator.filters):
                if not self._nested_checker(sub_filter, document, depth + 1):
                    logger.debug("And short-circuited on sub-filter %d (%s)", index, sub_filter.path)
                    return False
            return True

        for index, sub_filter in enumerate(operator.filters):
            if self._nested_checker(sub_filter, document, depth + 1):
                logger.debug("Or short-circuited on sub-filter %d (%s)", index, sub_filter.path)
                return True
        return False
