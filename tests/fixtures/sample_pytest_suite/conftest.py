"""Shared fixtures for the sample pytest suite."""
from __future__ import annotations

import pytest


@pytest.fixture()
def sample_data() -> dict[str, object]:
    return {
        "users": [
            {"id": 1, "name": "Alice"},
            {"id": 2, "name": "Bob"},
        ],
        "orders": [{"id": 10, "user": 1}],
    }
