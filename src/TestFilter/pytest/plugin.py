"""pytest plugin for selector-based test filtering.

Registered as a ``pytest11`` entry point. Activated via CLI options:

    pytest --test-filter="testauth::testlogin@smoke" tests/
    pytest --test-filter-file=smoke.filters tests/

Without either option the plugin is inactive and leaves collection alone.
Each test module is a suite; the group path is the enclosing classes and
the test name, and markers are the tags.
"""
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from TestFilter.pipeline.errors import FilterError
from TestFilter.pipeline.load import load_filters
from TestFilter.pytest.collector import selectable_from_item
from TestFilter.selection.filtering import filter_by_selection, suite_names
from TestFilter.selection.resolver import resolve_selection

logger = logging.getLogger("TestFilter.pytest")


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register CLI options for filtered test selection."""
    group = parser.getgroup("testfilter", "Selector-based test filtering")
    group.addoption(
        "--test-filter",
        action="append",
        default=[],
        metavar="EXPR",
        help="Filter expression [suites::]path[@tags]. May be repeated.",
    )
    group.addoption(
        "--test-filter-file",
        action="append",
        default=[],
        metavar="PATH",
        help="File with one filter expression per line. May be repeated.",
    )


@pytest.hookimpl(trylast=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item],
) -> None:
    """Deselect collected items that no filter selects.

    Runs after all other collection hooks (trylast=True) so we operate
    on the final filtered set.
    """
    expressions = config.getoption("--test-filter", default=None) or []
    files = config.getoption("--test-filter-file", default=None) or []
    if not expressions and not files:
        return  # Plugin disabled

    try:
        filters = load_filters(expressions, [Path(f) for f in files])
    except FilterError as exc:
        raise pytest.UsageError(str(exc)) from exc

    tests = [selectable_from_item(item) for item in items]
    selection = resolve_selection(suite_names(tests), filters)
    selected = set(filter_by_selection(tests, selection))

    deselected = [item for i, item in enumerate(items) if i not in selected]
    if deselected:
        config.hook.pytest_deselected(items=deselected)
    items[:] = [item for i, item in enumerate(items) if i in selected]

    logger.info(
        "[TEST-FILTER] stage=collect event=complete framework=pytest "
        "selected=%d deselected=%d",
        len(items),
        len(deselected),
    )
