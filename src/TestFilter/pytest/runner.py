"""Programmatic pytest execution for the testfilter CLI."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import pytest

logger = logging.getLogger(__name__)


def build_pytest_args(
    suite_path: Path,
    filters: Sequence[str] = (),
    filter_files: Sequence[Path] = (),
    extra_args: list[str] | None = None,
) -> list[str]:
    """Build pytest arguments that activate the filter plugin."""
    args: list[str] = [str(suite_path)]
    args.extend(f"--test-filter={expr}" for expr in filters)
    args.extend(f"--test-filter-file={path}" for path in filter_files)

    # Extra args (from -- passthrough)
    if extra_args:
        args.extend(extra_args)
    return args


def run_pytest_with_filters(
    suite_path: Path,
    filters: Sequence[str] = (),
    filter_files: Sequence[Path] = (),
    extra_args: list[str] | None = None,
) -> int:
    """Run pytest with the filter plugin options set.

    Returns the pytest exit code.
    """
    args = build_pytest_args(suite_path, filters, filter_files, extra_args)

    logger.info(
        "[TEST-FILTER] stage=execute framework=pytest args=%s",
        " ".join(args),
    )

    return int(pytest.main(args))
