"""Load filters from command line expressions and filter files."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from TestFilter.parsing.grammar import parse_filter, parse_filter_file
from TestFilter.pipeline.errors import FilterFileError
from TestFilter.selection.filter import Filter

logger = logging.getLogger(__name__)

COMMAND_LINE_SOURCE = "<command line>"


def read_filter_file(path: Path) -> list[Filter]:
    """Read and parse one filter file.

    Raises FilterFileError if the file cannot be read and ParseError if it
    contains a malformed line.
    """
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise FilterFileError(f"Cannot read filter file {path}: {exc}") from exc
    filters = parse_filter_file(str(path), text)
    logger.debug(
        "[TEST-FILTER] stage=load event=file_parsed path=%s filters=%d",
        path,
        len(filters),
    )
    return filters


def load_filters(
    expressions: Sequence[str] = (),
    filter_files: Sequence[Path] = (),
) -> list[Filter]:
    """Parse filter expressions, then filter files, into one list of filters.

    Expressions come first, in the given order, followed by each file's
    filters in file order. Errors abort loading; nothing is skipped.
    """
    filters = [parse_filter(COMMAND_LINE_SOURCE, expr) for expr in expressions]
    for path in filter_files:
        filters.extend(read_filter_file(Path(path)))

    logger.info(
        "[TEST-FILTER] stage=load event=filters_loaded "
        "expressions=%d files=%d filters=%d",
        len(expressions),
        len(filter_files),
        len(filters),
    )
    return filters
