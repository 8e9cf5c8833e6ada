"""Hierarchical document sections and the transform walk over them.

A document is a tree of :class:`Section` nodes. The root is synthetic
(level 0) and stands for the whole file. Every other node is a Markdown
heading, with the body text that comes before its first subheading.

A transform is any callable ``transform(frontmatter, section)`` that
changes a section in place. It receives a read-only view of the
document's frontmatter. It stops the walk by raising an exception.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType
from typing import Any, Optional

__all__ = ["Section", "Transform", "new_root", "apply_transform"]


class Section:
    """A Markdown heading section and its body content."""

    __slots__ = ("_parent", "_title", "_level", "content", "_children")

    def __init__(
        self,
        title: str,
        level: int = 0,
        content: str = "",
        parent: Optional[Section] = None,
    ) -> None:
        self._parent = parent
        self._title = title
        self._level = level
        self.content = content
        self._children: list[Section] = []

    @property
    def parent(self) -> Optional[Section]:
        """The parent section, or None for the root."""
        return self._parent

    @property
    def title(self) -> str:
        return self._title

    @property
    def level(self) -> int:
        """Markdown heading depth; the root has level 0."""
        return self._level

    @property
    def is_root(self) -> bool:
        return self._parent is None

    @property
    def children(self) -> list[Section]:
        """A copy of the child sections, in document order."""
        return list(self._children)

    def __iter__(self) -> Iterator[Section]:
        return iter(list(self._children))

    def __repr__(self) -> str:
        return (
            f"Section(title={self._title!r}, level={self._level}, "
            f"children={len(self._children)})"
        )

    def create_child(self, title: str, level: int, content: str = "") -> Section:
        """Add a subsection at the given heading level and return it."""
        child = Section(title, level, content, parent=self)
        self._children.append(child)
        return child

    def append_content(self, fragment: str) -> None:
        self.content += fragment

    def prepend_content(self, fragment: str) -> None:
        self.content = fragment + self.content

    def reset_content(self) -> None:
        self.content = ""

    def path(self) -> list[str]:
        """Titles from the root down to this section."""
        titles: list[str] = []
        node: Optional[Section] = self
        while node is not None:
            titles.append(node.title)
            node = node.parent
        titles.reverse()
        return titles


Transform = Callable[[Mapping[str, Any], Section], None]


def new_root(title: str) -> Section:
    """Create the synthetic level-0 section that stands for a whole document."""
    return Section(title, 0)


def apply_transform(
    frontmatter: Optional[Mapping[str, Any]],
    root: Section,
    *args: Transform,
) -> None:
    """Apply the transforms, in order, to every section depth-first.

    Each section receives all transforms before its children are visited.
    The first exception raised by a transform stops the walk and propagates.
    """
    view: Mapping[str, Any] = MappingProxyType(copy.deepcopy(dict(frontmatter or {})))
    _walk(view, root, args)


def _walk(
    view: Mapping[str, Any], section: Section, transforms: tuple[Transform, ...]
) -> None:
    for transform in transforms:
        transform(view, section)
    for child in section.children:
        _walk(view, child, transforms)