from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

from TestFilter.pipeline.errors import ExecutionError
from TestFilter.pipeline.load import load_filters
from TestFilter.selection.selector import is_all
from TestFilter.shared.config import GENERATED_FILTER_FILE, REPORT_FILE

MODIFIER = "TestFilter.execution.prerun_modifier.FilterPreRunModifier"


class ExecutionRunner:
    """Orchestrates Robot Framework execution with filters applied.

    Command line expressions are validated up front and written to a
    generated filter file in the output directory, because Robot Framework
    splits modifier arguments on ``:`` and expressions may contain ``::``.
    A filter file has no line for the empty expression, so when a filter
    selects everything no modifier is passed at all.
    """

    def __init__(
        self,
        suite_path: str | Path,
        filters: Sequence[str] = (),
        filter_files: Sequence[str | Path] = (),
        output_dir: str | Path = "./results",
    ) -> None:
        self._suite_path = Path(suite_path)
        self._expressions = list(filters)
        self._filter_files = [Path(f) for f in filter_files]
        self._output_dir = Path(output_dir)
        self._filters = load_filters(self._expressions, self._filter_files)
        self._selects_everything = any(
            f.is_universal and is_all(f.selector) for f in self._filters
        )

    @property
    def generated_filter_file(self) -> Path:
        return self._output_dir / GENERATED_FILTER_FILE

    def modifier_files(self) -> list[Path]:
        if self._selects_everything:
            return []
        files = list(self._filter_files)
        if self._expressions:
            files.insert(0, self.generated_filter_file)
        return files

    def write_filter_file(self) -> Path | None:
        """Write command line expressions to the generated filter file."""
        if not self._expressions or self._selects_everything:
            return None
        try:
            self._output_dir.mkdir(parents=True, exist_ok=True)
            self.generated_filter_file.write_text(
                "".join(f"{expr}\n" for expr in self._expressions),
                encoding="utf-8",
            )
        except OSError as exc:
            raise ExecutionError(
                f"Cannot write filter file {self.generated_filter_file}: {exc}"
            ) from exc
        return self.generated_filter_file

    def build_robot_args(self) -> list[str]:
        """Build robot CLI arguments; no modifier is needed without filters."""
        args: list[str] = ["--outputdir", str(self._output_dir)]
        files = self.modifier_files()
        if files:
            args.extend([
                "--prerunmodifier",
                ":".join([MODIFIER, *(str(f) for f in files)]),
            ])
        return args

    def execute(self, extra_args: list[str] | None = None) -> int:
        """Run robot.run_cli with built arguments. Returns exit code."""
        import robot

        self.write_filter_file()
        args = self.build_robot_args()
        if extra_args:
            args.extend(extra_args)
        args.append(str(self._suite_path))
        return robot.run_cli(args, exit=False)  # type: ignore[attr-defined]

    def generate_report(self, return_code: int) -> dict:
        """Generate filter_report.json with execution metadata."""
        report = {
            "return_code": return_code,
            "suite_path": str(self._suite_path),
            "filters": [str(f) for f in self._filters],
            "filter_files": [str(f) for f in self._filter_files],
            "universal_filters": sum(1 for f in self._filters if f.is_universal),
            "status": "pass" if return_code == 0 else "fail",
        }
        self._output_dir.mkdir(parents=True, exist_ok=True)
        report_path = self._output_dir / REPORT_FILE
        report_path.write_text(json.dumps(report, indent=2))
        return report
