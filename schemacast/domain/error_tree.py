"""Hierarchical, path-addressable collection of violation codes.

An ``ErrorTree`` mirrors the shape of the processed document: the root node
holds the codes raised by the value itself and each child holds the codes of
one property name or array index. Paths are dot-delimited (``guests.1.name``);
integer keys are stored as their decimal text.
"""

from __future__ import annotations

from typing import Iterable, Iterator

PATH_SEPARATOR = "."


class ErrorTree:
    """Violation codes attached at one node plus child nodes by key."""

    __slots__ = ("codes", "children")

    def __init__(self, codes: Iterable[str] = ()) -> None:
        self.codes: list[str] = []
        self.children: dict[str, ErrorTree] = {}
        self.extend(codes)

    def add(self, code: str) -> None:
        if code not in self.codes:
            self.codes.append(code)

    def extend(self, codes: Iterable[str]) -> None:
        for code in codes:
            self.add(code)

    def child(self, key: str | int) -> ErrorTree:
        """Return the child node for ``key``, creating it when missing."""

        name = str(key)
        node = self.children.get(name)
        if node is None:
            node = ErrorTree()
            self.children[name] = node
        return node

    def merge(self, key: str | int, subtree: ErrorTree) -> None:
        """Graft ``subtree`` under ``key`` without losing existing codes."""

        if subtree.is_empty():
            return
        target = self.child(key)
        target.extend(subtree.codes)
        for name, node in subtree.children.items():
            target.merge(name, node)

    def is_empty(self) -> bool:
        if self.codes:
            return False
        return all(node.is_empty() for node in self.children.values())

    def node(self, path: str | int) -> ErrorTree | None:
        """Walk ``path`` and return the node found there, if any."""

        current: ErrorTree | None = self
        text = str(path)
        if not text:
            return self
        for part in text.split(PATH_SEPARATOR):
            if current is None:
                return None
            current = current.children.get(part)
        return current

    def on(self, path: str | int) -> list[str] | None:
        """Return the codes recorded directly at ``path``, or None if there are none."""

        found = self.node(path)
        if found is None or not found.codes:
            return None
        return list(found.codes)

    def report(self, prefix: str = "") -> Iterator[tuple[str, list[str]]]:
        """Yield ``(path, codes)`` for every node with its own codes, depth first."""

        if self.codes:
            yield prefix, list(self.codes)
        for name, node in self.children.items():
            path = f"{prefix}{PATH_SEPARATOR}{name}" if prefix else name
            yield from node.report(path)

    def to_dict(self) -> dict[str, list[str]]:
        """Return a flat ``{path: codes}`` mapping in report order."""

        return {path: codes for path, codes in self.report()}

    def __iter__(self) -> Iterator[tuple[str, list[str]]]:
        return self.report()

    def __len__(self) -> int:
        return sum(len(codes) for _, codes in self.report())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ErrorTree):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"ErrorTree({self.to_dict()!r})"
