"""Parser for filter expressions and filter files.

Filter expression grammar::

    filter      := [suite-list "::"] [path] ["@" tag-list]
    suite-list  := name ("," name)*
    path        := name ("." name)*
    tag-list    := name ("," name)*
    name        := one or more alphanumeric characters

``SuiteA,SuiteB::Login.Valid@smoke,fast`` selects the tests under group
path ``Login.Valid`` carrying ``smoke`` or ``fast`` in the two named suites.
Without a suite list the filter applies to every suite, without a path it
selects the whole suite, and without a tag list it does not look at tags.

A filter file holds one expression per line. ``#`` starts a comment that
runs to the end of the line; blank and comment-only lines are skipped.
"""
from __future__ import annotations

from TestFilter.pipeline.errors import ParseError
from TestFilter.selection.filter import Filter
from TestFilter.selection.selector import (
    ALL,
    PathSelector,
    Selector,
    TagsSelector,
)

COMMENT_CHAR = "#"


class _FilterParser:
    """Recursive-descent parser for a single filter expression."""

    def __init__(
        self,
        text: str,
        source_name: str,
        line: int = 1,
        column_offset: int = 0,
    ) -> None:
        self._text = text
        self._source_name = source_name
        self._line = line
        self._column_offset = column_offset
        self._pos = 0

    def parse(self) -> Filter:
        suites = self._suite_list()
        selector: Selector = self._path() if self._at_name() else ALL
        if self._peek() == "@":
            self._pos += 1
            selector = TagsSelector(frozenset(self._names("tag name")), selector)
        if self._pos < len(self._text):
            raise self._error(f"unexpected {self._text[self._pos]!r}")
        return Filter(suites=frozenset(suites), selector=selector)

    def _suite_list(self) -> list[str]:
        start = self._pos
        if not self._at_name():
            return []
        names = self._names("suite name")
        if self._text.startswith("::", self._pos):
            self._pos += 2
            return names
        if len(names) > 1:
            raise self._error("expected '::' after suite list")
        # A single name without '::' is the start of a path.
        self._pos = start
        return []

    def _path(self) -> Selector:
        names = [self._name("path element")]
        while self._peek() == ".":
            self._pos += 1
            names.append(self._name("path element"))
        selector: Selector = ALL
        for name in reversed(names):
            selector = PathSelector(name, selector)
        return selector

    def _names(self, what: str) -> list[str]:
        names = [self._name(what)]
        while self._peek() == ",":
            self._pos += 1
            names.append(self._name(what))
        return names

    def _name(self, what: str) -> str:
        start = self._pos
        while self._at_name():
            self._pos += 1
        if self._pos == start:
            found = self._peek()
            if found:
                raise self._error(f"expected {what}, found {found!r}")
            raise self._error(f"expected {what}, found end of input")
        return self._text[start:self._pos]

    def _at_name(self) -> bool:
        return self._pos < len(self._text) and self._text[self._pos].isalnum()

    def _peek(self) -> str:
        return self._text[self._pos] if self._pos < len(self._text) else ""

    def _error(self, message: str) -> ParseError:
        newlines = self._text.count("\n", 0, self._pos)
        line_start = self._text.rfind("\n", 0, self._pos) + 1
        column = self._pos - line_start + 1
        if not newlines:
            column += self._column_offset
        return ParseError(message, self._source_name, self._line + newlines, column)


def parse_filter(source_name: str, text: str) -> Filter:
    """Parse one filter expression.

    The whole of ``text`` must match the grammar; the empty expression is
    the filter that selects everything.

    Raises:
        ParseError: If ``text`` is not a valid filter expression.
    """
    return _FilterParser(text, source_name).parse()


def parse_filter_file(source_name: str, text: str) -> list[Filter]:
    """Parse the contents of a filter file into filters, in file order.

    Any malformed line fails the whole file; no partial result is returned.

    Raises:
        ParseError: On the first line that is not a valid filter expression.
    """
    filters: list[Filter] = []
    for lineno, raw_line in enumerate(text.split("\n"), start=1):
        content = raw_line.rstrip("\r").partition(COMMENT_CHAR)[0]
        expression = content.strip()
        if not expression:
            continue
        indent = len(content) - len(content.lstrip())
        parser = _FilterParser(
            expression, source_name, line=lineno, column_offset=indent,
        )
        filters.append(parser.parse())
    return filters
