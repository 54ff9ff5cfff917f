from __future__ import annotations

from dataclasses import dataclass


def selector_name(name: str) -> str:
    """Reduce a suite, group, test or tag name to what filters can address.

    Filter names are alphanumeric only, so ``"Login Tests"`` becomes
    ``"LoginTests"`` and ``"test_login"`` becomes ``"testlogin"``.
    """
    return "".join(ch for ch in name if ch.isalnum())


@dataclass(frozen=True)
class SelectableTest:
    """What a selector needs to know about one test: where it is and its tags."""

    suite: str
    path: tuple[str, ...]
    tags: frozenset[str] = frozenset()
    source: str = ""

    @property
    def qualified_name(self) -> str:
        return ".".join((self.suite, *self.path))
