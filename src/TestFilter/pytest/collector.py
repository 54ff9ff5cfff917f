"""Programmatic pytest collection and translation of items into selector terms."""
from __future__ import annotations

from pathlib import Path, PurePosixPath

import pytest

from TestFilter.shared.types import SelectableTest, selector_name

IGNORED_MARKERS = ("parametrize", "usefixtures")


class _CollectorPlugin:
    """Internal pytest plugin that captures collected items."""

    def __init__(self) -> None:
        self.items: list[pytest.Item] = []

    def pytest_collection_modifyitems(self, items: list[pytest.Item]) -> None:
        self.items.extend(items)
        items[:] = []  # Deselect all: collect only


def collect_tests(test_dir: str | Path) -> list[pytest.Item]:
    """Collect all pytest tests from a directory without running them.

    Uses pytest.main() with a plugin that intercepts collected items.
    Goes through the full pytest startup sequence (conftest parsing,
    plugin loading, etc.).
    """
    collector = _CollectorPlugin()
    pytest.main(
        [str(test_dir), "--collect-only", "-q", "--no-header"],
        plugins=[collector],
    )
    return collector.items


def selectable_from_item(item: pytest.Item) -> SelectableTest:
    """Describe a collected item in selector terms.

    The suite is the module file stem, the group path is the enclosing
    classes followed by the test's name without parametrize ids, and the
    tags are the item's marker names.
    """
    parts = item.nodeid.split("::")
    module = PurePosixPath(parts[0])
    classes = parts[1:-1]
    name = getattr(item, "originalname", None) or parts[-1].split("[", 1)[0]

    markers = [
        mark.name
        for mark in item.iter_markers()
        if mark.name not in IGNORED_MARKERS
    ]
    return SelectableTest(
        suite=selector_name(module.stem),
        path=tuple(selector_name(part) for part in (*classes, name)),
        tags=frozenset(selector_name(m) for m in markers),
        source=item.nodeid,
    )


def collect_selectable(test_dir: str | Path) -> list[SelectableTest]:
    """Collect tests and translate them in one call."""
    return [selectable_from_item(item) for item in collect_tests(test_dir)]
