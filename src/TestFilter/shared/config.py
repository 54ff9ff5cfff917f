from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

FILTERS_ENV = "TESTFILTER_FILTERS"
FILES_ENV = "TESTFILTER_FILES"
OUTPUT_ENV = "TESTFILTER_OUTPUT"

GENERATED_FILTER_FILE = "testfilter.filters"
REPORT_FILE = "filter_report.json"


@dataclass(frozen=True)
class FilterConfig:
    """Configuration for a filtered test run."""

    filters: tuple[str, ...] = ()
    filter_files: tuple[Path, ...] = ()
    output_dir: Path = Path("./results")
    prune_empty_suites: bool = True

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> FilterConfig:
        """Build defaults from ``TESTFILTER_*`` environment variables.

        ``TESTFILTER_FILTERS`` holds semicolon separated expressions,
        ``TESTFILTER_FILES`` holds ``os.pathsep`` separated filter files and
        ``TESTFILTER_OUTPUT`` the output directory.
        """
        env = os.environ if environ is None else environ
        filters = tuple(
            expr.strip()
            for expr in env.get(FILTERS_ENV, "").split(";")
            if expr.strip()
        )
        files = tuple(
            Path(p) for p in env.get(FILES_ENV, "").split(os.pathsep) if p.strip()
        )
        output = env.get(OUTPUT_ENV, "")
        return cls(
            filters=filters,
            filter_files=files,
            output_dir=Path(output) if output else Path("./results"),
        )

    def extend(
        self,
        filters: list[str] | None = None,
        filter_files: list[Path] | None = None,
        output_dir: Path | None = None,
    ) -> FilterConfig:
        """Return a copy with command line values added on top."""
        return replace(
            self,
            filters=self.filters + tuple(filters or ()),
            filter_files=self.filter_files + tuple(filter_files or ()),
            output_dir=output_dir if output_dir is not None else self.output_dir,
        )

    @property
    def has_filters(self) -> bool:
        return bool(self.filters or self.filter_files)
