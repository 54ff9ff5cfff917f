"""CLI entry points for selector-based test filtering."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from TestFilter.pipeline.errors import FilterError
from TestFilter.shared.config import FilterConfig

logger = logging.getLogger("TestFilter")


def _setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
    )


def _split_robot_passthrough(argv: list[str]) -> tuple[list[str], list[str]]:
    """Split argv at the first ``--`` into our arguments and runner arguments."""
    if "--" not in argv:
        return list(argv), []
    idx = argv.index("--")
    return argv[:idx], argv[idx + 1:]


def _add_filter_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--filter", dest="filters", action="append", default=[],
        metavar="EXPR", help="Filter expression [suites::]path[@tags]",
    )
    p.add_argument(
        "--filter-file", dest="filter_files", action="append", default=[],
        type=Path, metavar="PATH", help="Filter file, one expression per line",
    )
    p.add_argument(
        "--framework", choices=("robot", "pytest"), default="robot",
        help="Test framework of the suite",
    )


def _add_resolve_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "resolve", help="Show the normalized selector for every suite",
    )
    p.add_argument(
        "--suite", required=True, type=Path, action="append",
        help="Path to a suite file or directory",
    )
    _add_filter_arguments(p)
    p.set_defaults(func=_cmd_resolve)


def _add_check_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser("check", help="Validate filter files")
    p.add_argument("files", nargs="+", type=Path, help="Filter files to check")
    p.set_defaults(func=_cmd_check)


def _add_run_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser("run", help="Run the suite with filters applied")
    p.add_argument("--suite", required=True, type=Path, help="Path to the suite")
    p.add_argument(
        "--output-dir", type=Path, default=None,
        help="Output dir (default: $TESTFILTER_OUTPUT or ./results)",
    )
    _add_filter_arguments(p)
    p.set_defaults(func=_cmd_run)


def _config_from_args(args: argparse.Namespace) -> FilterConfig:
    return FilterConfig.from_env().extend(
        filters=args.filters,
        filter_files=args.filter_files,
        output_dir=getattr(args, "output_dir", None),
    )


def _cmd_resolve(args: argparse.Namespace) -> int:
    from TestFilter.pipeline.load import load_filters
    from TestFilter.selection.filtering import filter_by_selection, suite_names
    from TestFilter.selection.resolver import resolve_selection

    config = _config_from_args(args)
    try:
        filters = load_filters(config.filters, config.filter_files)
    except FilterError as exc:
        logger.error("[TEST-FILTER] Invalid filters: %s", exc)
        return 2

    if args.framework == "pytest":
        from TestFilter.pytest.collector import collect_selectable

        tests = [t for suite in args.suite for t in collect_selectable(suite)]
        universe = suite_names(tests)
    else:
        from TestFilter.parsing.suite_collector import RobotApiAdapter

        adapter = RobotApiAdapter()
        root = adapter.load_suite(*args.suite)
        tests = adapter.collect_tests(root)
        universe = adapter.suite_names(root)

    selection = resolve_selection(universe, filters)
    selected = [tests[i] for i in filter_by_selection(tests, selection)]

    descriptions = selection.describe()
    for suite in universe:
        count = sum(1 for t in selected if t.suite == suite)
        total = sum(1 for t in tests if t.suite == suite)
        logger.info(
            "%s: %s (%d/%d tests)",
            suite,
            descriptions.get(suite, "<nothing>"),
            count,
            total,
        )
    logger.info("[TEST-FILTER] Selected %d/%d tests", len(selected), len(tests))
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    from TestFilter.pipeline.load import read_filter_file

    status = 0
    for path in args.files:
        try:
            filters = read_filter_file(path)
        except FilterError as exc:
            logger.error("[TEST-FILTER] %s", exc)
            status = 2
            continue
        logger.info("%s: %d filters", path, len(filters))
        for filter_ in filters:
            logger.debug("  %s", filter_)
    return status


def _cmd_run(args: argparse.Namespace) -> int:
    config = _config_from_args(args)
    extra = getattr(args, "robot_passthrough", None)

    if args.framework == "pytest":
        from TestFilter.pipeline.execute import run_execute_pytest

        return run_execute_pytest(args.suite, config, extra_args=extra)

    from TestFilter.pipeline.execute import run_execute

    return run_execute(args.suite, config, extra_robot_args=extra)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="testfilter",
        description="Select tests by suite, group path and tags",
        epilog="Arguments after '--' are passed to robot or pytest.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    _add_resolve_parser(subparsers)
    _add_check_parser(subparsers)
    _add_run_parser(subparsers)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    our_args, passthrough = _split_robot_passthrough(
        sys.argv[1:] if argv is None else argv,
    )
    parser = build_parser()
    args = parser.parse_args(our_args)
    args.robot_passthrough = passthrough or None
    _setup_logging(getattr(args, "verbose", False))

    if not args.command:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
