"""Execute stage: run Robot Framework or pytest with filters applied."""
from __future__ import annotations

import logging
from pathlib import Path

from TestFilter.pipeline.errors import FilterError
from TestFilter.shared.config import FilterConfig

logger = logging.getLogger(__name__)


def run_execute(
    suite_path: Path,
    config: FilterConfig,
    extra_robot_args: list[str] | None = None,
) -> int:
    """Run the execution stage.

    Returns the Robot Framework exit code (0=pass, 1+=failures), or 2 if the
    filters could not be loaded or the run could not be prepared.
    """
    try:
        from TestFilter.execution.runner import ExecutionRunner

        runner = ExecutionRunner(
            suite_path=suite_path,
            filters=config.filters,
            filter_files=config.filter_files,
            output_dir=config.output_dir,
        )

        logger.info(
            "[TEST-FILTER] stage=execute event=start "
            "suite=%s filters=%d filter_files=%d",
            suite_path,
            len(config.filters),
            len(config.filter_files),
        )

        return_code = runner.execute(extra_args=extra_robot_args)
        runner.generate_report(return_code)

        logger.info(
            "[TEST-FILTER] stage=execute event=complete "
            "return_code=%d",
            return_code,
        )

        return return_code

    except FilterError as exc:
        logger.error(
            "[TEST-FILTER] stage=execute event=error error=%s",
            str(exc),
        )
        return 2


def run_execute_pytest(
    suite_path: Path,
    config: FilterConfig,
    extra_args: list[str] | None = None,
) -> int:
    """Run pytest on ``suite_path`` with the filter plugin options set."""
    try:
        from TestFilter.pipeline.load import load_filters
        from TestFilter.pytest.runner import run_pytest_with_filters

        # Fail on bad filters before pytest starts collecting.
        load_filters(config.filters, config.filter_files)
        return_code = run_pytest_with_filters(
            suite_path=suite_path,
            filters=config.filters,
            filter_files=config.filter_files,
            extra_args=extra_args,
        )
        logger.info(
            "[TEST-FILTER] stage=execute event=complete framework=pytest "
            "return_code=%d",
            return_code,
        )
        return return_code

    except FilterError as exc:
        logger.error(
            "[TEST-FILTER] stage=execute event=error error=%s",
            str(exc),
        )
        return 2
