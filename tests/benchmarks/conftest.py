"""Fixtures for benchmark tests generating large synthetic filter sets."""
from __future__ import annotations

import pytest

from TestFilter.shared.types import SelectableTest


@pytest.fixture
def synthetic_expressions():
    """Generate 500 filter expressions over 20 suites and 10 tags."""
    expressions = []
    for i in range(500):
        suite = f"Suite{i % 20}"
        path = f"Group{i % 7}.Sub{i % 11}.Case{i}"
        tag = f"tag{i % 10}"
        if i % 5 == 0:
            expressions.append(f"@{tag}")
        elif i % 3 == 0:
            expressions.append(f"{path}@{tag}")
        else:
            expressions.append(f"{suite}::{path}")
    return expressions


@pytest.fixture
def synthetic_tests():
    """Generate 5000 selectable tests spread over 20 suites."""
    return [
        SelectableTest(
            suite=f"Suite{i % 20}",
            path=(f"Group{i % 7}", f"Sub{i % 11}", f"Case{i % 500}"),
            tags=frozenset({f"tag{i % 10}", f"tag{i % 13}"}),
        )
        for i in range(5000)
    ]
