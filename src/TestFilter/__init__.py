"""Selector-based test filtering for Robot Framework and pytest."""

from TestFilter.parsing.grammar import parse_filter, parse_filter_file
from TestFilter.pipeline.errors import FilterError, FilterFileError, ParseError
from TestFilter.selection.filter import PASS_FILTER, Filter
from TestFilter.selection.resolver import (
    SuiteSelection,
    resolve_selection,
    resolve_suite_selectors,
)
from TestFilter.selection.selector import (
    ALL,
    PathSelector,
    Selector,
    TagsSelector,
    UnionSelector,
    accepts,
    normalize,
)

__version__ = "0.1.0"

__all__ = [
    "ALL",
    "PASS_FILTER",
    "Filter",
    "FilterError",
    "FilterFileError",
    "ParseError",
    "PathSelector",
    "Selector",
    "SuiteSelection",
    "TagsSelector",
    "UnionSelector",
    "accepts",
    "normalize",
    "parse_filter",
    "parse_filter_file",
    "resolve_selection",
    "resolve_suite_selectors",
]
