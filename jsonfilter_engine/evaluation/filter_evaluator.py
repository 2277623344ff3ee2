"""Top-level check pipeline: resolve a filter's path, then apply its operator."""
import logging
from typing import Any, Optional

from jsonfilter_data_model.operator_type import OperatorFamily
from jsonfilter_engine.config import settings
from jsonfilter_engine.evaluation.operator_evaluator import OperatorEvaluator
from jsonfilter_engine.path.path_resolver import NOT_FOUND, PathResolver
from jsonfilter_exception_model.exception import FilterDepthExceededException

logger = logging.getLogger(__name__)


class FilterEvaluator:
    """
    Runs the full check pipeline for a filter.

    Holds no per-evaluation state, so one instance can be shared by any number
    of threads checking any number of documents.
    """

    def __init__(self, path_resolver: Optional[PathResolver] = None, max_depth: Optional[int] = None):
        self._path_resolver = path_resolver or PathResolver()
        self._operator_evaluator = OperatorEvaluator(nested_checker=self.check)
        self._max_depth = settings.max_filter_depth if max_depth is None else max_depth

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def check(self, filter_, document: Any, depth: int = 0) -> bool:
        if depth > self._max_depth:
            logger.debug("Filter on path %r exceeds max depth %d", filter_.path, self._max_depth)
            raise FilterDepthExceededException("Filter nesting is too deep", self._max_depth)

        # And/Or never look at the value at their own path
        if filter_.operator.type.family == OperatorFamily.LOGICAL:
            resolved = NOT_FOUND
        else:
            resolved = self._path_resolver.resolve(document, filter_.path)
        return self._operator_evaluator.evaluate(
            resolved, filter_.operator, document, depth=depth, path=filter_.path
        )


default_filter_evaluator = FilterEvaluator()
