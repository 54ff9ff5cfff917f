"""Filter value object: a suite scope plus a selector."""
from __future__ import annotations

from dataclasses import dataclass, field

from TestFilter.selection.selector import ALL, Selector, format_selector, is_all


@dataclass(frozen=True)
class Filter:
    """Applies ``selector`` to the named ``suites``, or to every suite if empty."""

    suites: frozenset[str] = field(default_factory=frozenset)
    selector: Selector = ALL

    def __post_init__(self) -> None:
        if not isinstance(self.suites, frozenset):
            object.__setattr__(self, "suites", frozenset(self.suites))

    @property
    def is_universal(self) -> bool:
        return not self.suites

    def applies_to(self, suite: str) -> bool:
        return self.is_universal or suite in self.suites

    def __str__(self) -> str:
        return format_filter(self)


PASS_FILTER = Filter()


def format_filter(filter_: Filter) -> str:
    """Render ``filter_`` close to the expression syntax it was parsed from."""
    scope = ",".join(sorted(filter_.suites))
    body = "" if is_all(filter_.selector) else format_selector(filter_.selector)
    if scope:
        return f"{scope}::{body}"
    return body or "*"
