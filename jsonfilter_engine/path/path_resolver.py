"""
    Locates the value addressed by a path expression inside a JSON document.

    ┌──────────────────────────────────────────────────────────────────────┐
    │                        PathResolver Workflow                         │
    └──────────────────────────────────────────────────────────────────────┘

    Input: document (JSON value) + path (str), e.g. "user.tags[1]"
           │
           ▼
    ┌─────────────────────────────────────┐     ┌──────────────────────────┐
    │  parse_path(path)  (lru cached)     │────►│  Malformed?              │
    │  "user.tags[1]" ──►                 │     │  raise                   │
    │    (KeyStep("user"),                │     │  MalformedPathException  │
    │     KeyStep("tags"),                │     │  resolve() maps it to    │
    │     IndexStep(1))                   │     │  NOT_FOUND               │
    │  "." ──► ()   (whole document)      │     └──────────────────────────┘
    └─────────────────────────────────────┘
           │
           ▼
    ┌─────────────────────────────────────┐     ┌──────────────────────────┐
    │  Fold steps left to right           │────►│  Step cannot apply?      │
    │  KeyStep   : dict and key present   │     │  (wrong kind, missing    │
    │  IndexStep : list and index < len   │     │   key, out of range)     │
    └─────────────────────────────────────┘     │  return NOT_FOUND        │
           │                                    └──────────────────────────┘
           ▼
    return located value (may itself be None, i.e. JSON null)
"""
import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Tuple, Union, List

from jsonfilter_engine.config import settings
from jsonfilter_exception_model.exception import MalformedPathException

logger = logging.getLogger(__name__)

ROOT_PATH = "."

# identifier followed by any number of bracketed suffixes; suffix contents are checked separately
_SEGMENT_PATTERN = re.compile(r"([^\[\]]*)((?:\[[^\[\]]*\])*)")
_INDEX_PATTERN = re.compile(r"\[([^\[\]]*)\]")


class _NotFound:
    """Sentinel for a path that does not resolve; distinct from JSON null (``None``)."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "NOT_FOUND"

    def __bool__(self):
        return False

    def __reduce__(self):
        return _NotFound, ()


NOT_FOUND = _NotFound()


@dataclass(frozen=True)
class KeyStep:
    key: str


@dataclass(frozen=True)
class IndexStep:
    index: int


PathStep = Union[KeyStep, IndexStep]


def _parse_segment(path: str, segment: str, offset: int) -> List[PathStep]:
    match = _SEGMENT_PATTERN.fullmatch(segment)
    if match is None:
        raise MalformedPathException("Unbalanced or misplaced bracket in path segment", path, offset)

    identifier, suffixes = match.group(1), match.group(2)
    if not identifier and not suffixes:
        raise MalformedPathException("Empty path segment", path, offset)

    steps: List[PathStep] = [KeyStep(identifier)] if identifier else []
    for index_match in _INDEX_PATTERN.finditer(suffixes):
        raw = index_match.group(1)
        if not (raw.isascii() and raw.isdigit()):
            raise MalformedPathException(
                f"Array index must be a non-negative integer, got {raw!r}",
                path,
                offset + len(identifier) + index_match.start()
            )
        steps.append(IndexStep(int(raw)))
    return steps


@lru_cache(maxsize=settings.path_cache_size)
def _parse_path_cached(path: str) -> Tuple[PathStep, ...]:
    if path == ROOT_PATH:
        return ()
    if not path:
        raise MalformedPathException("Path must not be empty", path, 0)

    steps: List[PathStep] = []
    offset = 0
    for segment in path.split("."):
        steps.extend(_parse_segment(path, segment, offset))
        offset += len(segment) + 1
    return tuple(steps)


def parse_path(path: str) -> Tuple[PathStep, ...]:
    """
    Parse a path expression into a tuple of access steps.

    Grammar: segments separated by ``.``; each segment is an identifier
    followed by zero or more ``[index]`` suffixes. The identifier may be
    omitted when a suffix follows (``[0]`` indexes the current node). The
    literal ``"."`` is the whole document and parses to an empty tuple.

    Raises:
        MalformedPathException: On an empty path or segment, a stray or
            unclosed bracket, or an index that is not a non-negative integer.
    """
    if not isinstance(path, str):
        raise MalformedPathException(f"Path must be a string, got {type(path).__name__}")
    return _parse_path_cached(path)


class PathResolver:
    """Resolves paths against documents; absence is returned as ``NOT_FOUND``, never raised."""

    def resolve(self, document: Any, path: str) -> Any:
        try:
            steps = parse_path(path)
        except MalformedPathException as e:
            logger.debug("Treating malformed path as not found: %s", e)
            return NOT_FOUND
        return self.resolve_steps(document, steps)

    def resolve_steps(self, document: Any, steps: Tuple[PathStep, ...]) -> Any:
        current = document
        for step in steps:
            current = self._apply_step(current, step)
            if current is NOT_FOUND:
                logger.debug("Path step %s did not resolve", step)
                return NOT_FOUND
        return current

    @staticmethod
    def _apply_step(node: Any, step: PathStep) -> Any:
        if isinstance(step, KeyStep):
            if isinstance(node, dict) and step.key in node:
                return node[step.key]
            return NOT_FOUND

        if isinstance(node, list) and step.index < len(node):
            return node[step.index]
        return NOT_FOUND
