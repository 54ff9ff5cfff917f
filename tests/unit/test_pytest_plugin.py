"""Tests for TestFilter.pytest.plugin."""
from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from TestFilter.pytest.plugin import pytest_addoption, pytest_collection_modifyitems


class _FakeOption:
    """Simple container returned by FakeParser.getgroup().addoption()."""

    def __init__(self, name: str, **kwargs: object) -> None:
        self.name = name
        self.kwargs = kwargs


class _FakeGroup:
    """Mimics the object returned by parser.getgroup()."""

    def __init__(self) -> None:
        self.options: list[_FakeOption] = []

    def addoption(self, name: str, **kwargs: object) -> None:
        self.options.append(_FakeOption(name, **kwargs))


class _FakeParser:
    """Minimal mock for pytest.Parser that records registered options."""

    def __init__(self) -> None:
        self.groups: dict[str, _FakeGroup] = {}

    def getgroup(self, name: str, description: str = "") -> _FakeGroup:
        if name not in self.groups:
            self.groups[name] = _FakeGroup()
        return self.groups[name]


class _FakeMark:
    def __init__(self, name: str) -> None:
        self.name = name


class TestPytestAddoption:
    def test_registers_all_expected_options(self) -> None:
        parser = _FakeParser()
        pytest_addoption(parser)  # type: ignore[arg-type]
        option_names = {o.name for o in parser.groups["testfilter"].options}
        assert option_names == {"--test-filter", "--test-filter-file"}

    def test_options_are_repeatable(self) -> None:
        parser = _FakeParser()
        pytest_addoption(parser)  # type: ignore[arg-type]
        for option in parser.groups["testfilter"].options:
            assert option.kwargs["action"] == "append"
            assert option.kwargs["default"] == []


class TestPytestCollectionModifyItems:
    def _make_config(self, **option_overrides: object) -> MagicMock:
        """Build a mock pytest.Config with getoption support."""
        defaults: dict[str, object] = {
            "--test-filter": [],
            "--test-filter-file": [],
        }
        defaults.update(option_overrides)

        config = MagicMock(spec=["getoption", "hook"])
        config.getoption = lambda key, default=None: defaults.get(key, default)
        config.hook = MagicMock()
        return config

    def _make_item(self, nodeid: str, *markers: str) -> MagicMock:
        item = MagicMock()
        item.nodeid = nodeid
        item.originalname = nodeid.split("::")[-1].split("[", 1)[0]
        item.iter_markers.return_value = [_FakeMark(m) for m in markers]
        return item

    def _make_items(self) -> list[MagicMock]:
        return [
            self._make_item("tests/test_auth.py::test_login", "smoke"),
            self._make_item("tests/test_auth.py::test_logout"),
            self._make_item("tests/test_api.py::TestUsers::test_get", "smoke"),
            self._make_item("tests/test_api.py::TestUsers::test_create[1]", "slow"),
            self._make_item("tests/test_api.py::TestUsers::test_create[2]", "slow"),
        ]

    def test_no_options_does_nothing(self) -> None:
        config = self._make_config()
        items = self._make_items()
        original_items = list(items)

        pytest_collection_modifyitems(config, items)

        assert items == original_items
        config.hook.pytest_deselected.assert_not_called()

    def test_tag_filter(self) -> None:
        config = self._make_config(**{"--test-filter": ["@smoke"]})
        items = self._make_items()

        pytest_collection_modifyitems(config, items)

        assert [i.nodeid for i in items] == [
            "tests/test_auth.py::test_login",
            "tests/test_api.py::TestUsers::test_get",
        ]

    def test_deselected_items_reported(self) -> None:
        config = self._make_config(**{"--test-filter": ["testauth::"]})
        items = self._make_items()

        pytest_collection_modifyitems(config, items)

        config.hook.pytest_deselected.assert_called_once()
        deselected = config.hook.pytest_deselected.call_args[1]["items"]
        assert len(deselected) == 3
        assert len(items) == 2

    def test_parametrized_variants_match_by_original_name(self) -> None:
        config = self._make_config(**{"--test-filter": ["TestUsers.testcreate"]})
        items = self._make_items()

        pytest_collection_modifyitems(config, items)

        assert len(items) == 2
        assert all("test_create" in i.nodeid for i in items)

    def test_filter_file_option(self, tmp_path: Path) -> None:
        filter_file = tmp_path / "smoke.filters"
        filter_file.write_text("testapi::@slow\n")
        config = self._make_config(**{"--test-filter-file": [str(filter_file)]})
        items = self._make_items()

        pytest_collection_modifyitems(config, items)

        assert len(items) == 2

    def test_invalid_filter_is_a_usage_error(self) -> None:
        config = self._make_config(**{"--test-filter": ["test_auth::"]})
        items = self._make_items()

        with pytest.raises(pytest.UsageError, match="<command line>:1:5"):
            pytest_collection_modifyitems(config, items)
        assert len(items) == 5
