from __future__ import annotations

from pathlib import Path

import pytest
from robot.api import ExecutionResult

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def sample_suite_path():
    return FIXTURES_DIR / "sample_suite"


@pytest.fixture
def sample_pytest_suite_path():
    return FIXTURES_DIR / "sample_pytest_suite"


@pytest.fixture
def executed_tests():
    """Return a reader for the names of tests that ran in an output dir."""

    def _read(output_dir: Path) -> list[str]:
        result = ExecutionResult(str(output_dir / "output.xml"))
        names: list[str] = []

        def walk(suite) -> None:
            names.extend(t.name for t in suite.tests)
            for child in suite.suites:
                walk(child)

        walk(result.suite)
        return sorted(names)

    return _read
