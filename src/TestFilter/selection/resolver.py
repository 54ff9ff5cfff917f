"""Combine filters from every source into one normalized selector per suite."""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from TestFilter.selection.filter import Filter
from TestFilter.selection.selector import (
    ALL,
    Selector,
    UnionSelector,
    accepts,
    format_selector,
    is_all,
    normalize,
)

logger = logging.getLogger(__name__)


def resolve_suite_selectors(
    all_suites: Iterable[str],
    filters: Sequence[Filter],
) -> dict[str, Selector]:
    """Map each suite to the normalized union of the selectors that apply to it.

    Without filters every suite maps to ``ALL``. Otherwise universal filters
    seed every suite in ``all_suites`` and suite-scoped filters add to the
    suites they name. A suite that no filter reaches is left out of the
    result, which means nothing in it is selected.
    """
    suites = list(dict.fromkeys(all_suites))
    if not filters:
        return {suite: ALL for suite in suites}

    universals = {f.selector for f in filters if f.is_universal}
    collected: dict[str, set[Selector]] = {}
    if universals:
        for suite in suites:
            collected[suite] = set(universals)

    for filter_ in filters:
        for suite in sorted(filter_.suites):
            collected.setdefault(suite, set()).add(filter_.selector)

    return {
        suite: normalize(UnionSelector(frozenset(selectors)))
        for suite, selectors in collected.items()
    }


@dataclass(frozen=True)
class SuiteSelection:
    """Resolved per-suite selectors for one run.

    Suites missing from ``selectors`` select nothing; this is different from
    a suite mapped to ``ALL``.
    """

    selectors: Mapping[str, Selector] = field(default_factory=dict)
    unfiltered: bool = False

    @property
    def suites(self) -> list[str]:
        return list(self.selectors)

    def selector_for(self, suite: str) -> Selector | None:
        return self.selectors.get(suite)

    def selects_suite(self, suite: str) -> bool:
        return suite in self.selectors

    def selects(self, suite: str, path: Sequence[str], tags: Iterable[str]) -> bool:
        selector = self.selectors.get(suite)
        if selector is None:
            return False
        return accepts(selector, path, tags)

    def describe(self) -> dict[str, str]:
        return {
            suite: format_selector(selector)
            for suite, selector in self.selectors.items()
        }


def resolve_selection(
    all_suites: Iterable[str],
    filters: Sequence[Filter],
) -> SuiteSelection:
    """Resolve ``filters`` against ``all_suites`` into a ``SuiteSelection``."""
    suites = list(dict.fromkeys(all_suites))
    selectors = resolve_suite_selectors(suites, filters)
    selection = SuiteSelection(selectors=selectors, unfiltered=not filters)

    logger.info(
        "[TEST-FILTER] stage=resolve event=complete "
        "filters=%d suites=%d selected_suites=%d",
        len(filters),
        len(suites),
        len(selectors),
    )
    for suite, selector in selectors.items():
        logger.debug(
            "[TEST-FILTER] stage=resolve suite=%s selector=%s all=%s",
            suite,
            format_selector(selector),
            is_all(selector),
        )
    return selection
