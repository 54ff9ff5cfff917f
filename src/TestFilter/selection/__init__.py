"""Selection bounded context: selector algebra, filters and per-suite resolution."""

from TestFilter.selection.filter import PASS_FILTER, Filter, format_filter
from TestFilter.selection.filtering import filter_by_selection, suite_names
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
    canonical,
    format_selector,
    from_path,
    is_all,
    normalize,
    union,
)

__all__ = [
    "ALL",
    "PASS_FILTER",
    "Filter",
    "PathSelector",
    "Selector",
    "SuiteSelection",
    "TagsSelector",
    "UnionSelector",
    "accepts",
    "canonical",
    "filter_by_selection",
    "format_filter",
    "format_selector",
    "from_path",
    "is_all",
    "normalize",
    "resolve_selection",
    "resolve_suite_selectors",
    "suite_names",
    "union",
]
