"""Selector algebra: the tree that decides which tests of a suite run.

A selector is one of three node kinds:

* ``UnionSelector`` accepts a test when any child accepts it. The empty
  union is ``ALL`` and accepts everything.
* ``PathSelector`` matches the first element of a test's group path and
  hands the rest of the path to its inner selector.
* ``TagsSelector`` adds tag names to the set a test must intersect. Nested
  tag nodes widen that set, so ``@a(@b(x))`` behaves like ``@a,b(x)``.

``normalize`` rewrites any selector into a canonical form in which equal
selections compare equal, which is what lets filters from many sources be
merged per suite. Because nested tags widen, an ``ALL`` below tag nodes only
absorbs siblings carrying the same accumulated tags, so normalization works
on leaves with their tags pushed down.
"""
from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field


@dataclass(frozen=True)
class UnionSelector:
    """Accepts a test if any child accepts it."""

    children: frozenset[Selector] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not isinstance(self.children, frozenset):
            object.__setattr__(self, "children", frozenset(self.children))

    def __str__(self) -> str:
        return canonical(self)


ALL = UnionSelector()


@dataclass(frozen=True)
class PathSelector:
    """Matches one group-path element, then applies ``inner`` to the rest."""

    name: str
    inner: Selector = ALL

    def __str__(self) -> str:
        return canonical(self)


@dataclass(frozen=True)
class TagsSelector:
    """Restricts ``inner`` to tests carrying at least one of ``names``.

    An empty ``names`` set imposes no constraint.
    """

    names: frozenset[str]
    inner: Selector = ALL

    def __post_init__(self) -> None:
        if not isinstance(self.names, frozenset):
            object.__setattr__(self, "names", frozenset(self.names))

    def __str__(self) -> str:
        return canonical(self)


Selector = UnionSelector | PathSelector | TagsSelector


def is_all(selector: Selector) -> bool:
    return isinstance(selector, UnionSelector) and not selector.children


def union(*selectors: Selector) -> UnionSelector:
    """Build a union of ``selectors`` without normalizing it."""
    return UnionSelector(frozenset(selectors))


def from_path(*names: str, inner: Selector = ALL) -> Selector:
    """Build ``Path(n1, Path(n2, ... inner))`` from a dotted group path."""
    selector = inner
    for name in reversed(names):
        selector = PathSelector(name, selector)
    return selector


def canonical(selector: Selector) -> str:
    """Serialize ``selector`` deterministically.

    The serialization is independent of set iteration order and is used as
    the total order over selectors wherever a stable order is needed.
    """
    if isinstance(selector, UnionSelector):
        return "Union[{}]".format(
            ", ".join(sorted(canonical(child) for child in selector.children))
        )
    if isinstance(selector, PathSelector):
        return f"Path[{json.dumps(selector.name)}, {canonical(selector.inner)}]"
    if isinstance(selector, TagsSelector):
        return (
            f"Tags[{json.dumps(sorted(selector.names))}, "
            f"{canonical(selector.inner)}]"
        )
    raise TypeError(f"Not a selector: {selector!r}")


def sorted_selectors(selectors: Iterable[Selector]) -> list[Selector]:
    return sorted(selectors, key=canonical)


def format_selector(selector: Selector) -> str:
    """Render ``selector`` in a compact, filter-like notation for humans.

    ``*`` is ``ALL``, ``Foo.Bar`` a path, ``x@a,b`` a tag restriction and
    ``{x | y}`` a union. An empty tag set adds no ``@`` suffix.
    """
    if isinstance(selector, UnionSelector):
        if not selector.children:
            return "*"
        parts = sorted(format_selector(child) for child in selector.children)
        return "{" + " | ".join(parts) + "}"
    if isinstance(selector, PathSelector):
        if is_all(selector.inner):
            return selector.name
        return f"{selector.name}.{format_selector(selector.inner)}"
    if isinstance(selector, TagsSelector):
        if not selector.names:
            return format_selector(selector.inner)
        tags = ",".join(sorted(selector.names))
        if is_all(selector.inner):
            return f"@{tags}"
        return f"{format_selector(selector.inner)}@{tags}"
    raise TypeError(f"Not a selector: {selector!r}")


def accepts(
    selector: Selector,
    path: Sequence[str],
    tags: Iterable[str],
) -> bool:
    """Return True if ``selector`` selects a test with ``path`` and ``tags``."""
    return _accepts(selector, tuple(path), frozenset(tags), frozenset())


def _accepts(
    selector: Selector,
    path: tuple[str, ...],
    tags: frozenset[str],
    required: frozenset[str],
) -> bool:
    if isinstance(selector, UnionSelector):
        if not selector.children:
            return not required or not required.isdisjoint(tags)
        return any(
            _accepts(child, path, tags, required) for child in selector.children
        )
    if isinstance(selector, PathSelector):
        if not path or path[0] != selector.name:
            return False
        return _accepts(selector.inner, path[1:], tags, required)
    if isinstance(selector, TagsSelector):
        return _accepts(selector.inner, path, tags, required | selector.names)
    raise TypeError(f"Not a selector: {selector!r}")


def normalize(selector: Selector) -> Selector:
    """Rewrite ``selector`` into its canonical normal form.

    Tag sets are first pushed down to the leaves, so every ``ALL`` leaf
    becomes a (group path, accumulated tags) pair. Leaves that another leaf
    already covers are dropped and the rest are rebuilt with one ``Tags``
    node per tag set above a tree of paths merged by leading name.

    Normal form has no singleton or directly nested unions, no union
    containing ``ALL``, no nested or empty tag nodes, tag nodes above path
    nodes, and at most one entry per tag set and per leading path name in
    every union.
    """
    leaves: set[tuple[tuple[str, ...], frozenset[str]]] = set()
    _collect_leaves(selector, (), frozenset(), leaves)
    kept = [leaf for leaf in leaves if not any(
        other != leaf and _covers(other, leaf) for other in leaves
    )]

    groups: dict[frozenset[str], list[tuple[str, ...]]] = {}
    for path, names in kept:
        groups.setdefault(names, []).append(path)

    entries: set[Selector] = set()
    for names, paths in groups.items():
        entry = _build_paths(paths)
        if names:
            entries.add(TagsSelector(names, entry))
        elif isinstance(entry, UnionSelector) and entry.children:
            entries.update(entry.children)
        else:
            entries.add(entry)

    if len(entries) == 1:
        (only,) = entries
        return only
    return UnionSelector(frozenset(entries))


def _collect_leaves(
    selector: Selector,
    path: tuple[str, ...],
    names: frozenset[str],
    leaves: set[tuple[tuple[str, ...], frozenset[str]]],
) -> None:
    """Record every ALL leaf with the path and tags accumulated above it."""
    if isinstance(selector, UnionSelector):
        if not selector.children:
            leaves.add((path, names))
        for child in selector.children:
            _collect_leaves(child, path, names, leaves)
    elif isinstance(selector, PathSelector):
        _collect_leaves(selector.inner, (*path, selector.name), names, leaves)
    elif isinstance(selector, TagsSelector):
        _collect_leaves(selector.inner, path, names | selector.names, leaves)
    else:
        raise TypeError(f"Not a selector: {selector!r}")


def _covers(
    wider: tuple[tuple[str, ...], frozenset[str]],
    narrower: tuple[tuple[str, ...], frozenset[str]],
) -> bool:
    """True if every test ``narrower`` accepts is also accepted by ``wider``."""
    wide_path, wide_tags = wider
    narrow_path, narrow_tags = narrower
    if narrow_path[:len(wide_path)] != wide_path:
        return False
    # An untagged leaf accepts untagged tests, which no tag set covers.
    return not wide_tags or (bool(narrow_tags) and narrow_tags <= wide_tags)


def _build_paths(paths: Iterable[tuple[str, ...]]) -> Selector:
    """Merge group paths sharing a tag set into one tree of path nodes."""
    by_name: dict[str, list[tuple[str, ...]]] = {}
    for path in paths:
        if not path:
            return ALL
        by_name.setdefault(path[0], []).append(path[1:])

    merged = {
        PathSelector(name, _build_paths(rests)) for name, rests in by_name.items()
    }
    if len(merged) == 1:
        (only,) = merged
        return only
    return UnionSelector(frozenset(merged))
