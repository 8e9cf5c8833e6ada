"""Parsing Markdown into a section tree with YAML frontmatter.

:func:`parse_markdown` runs in four stages:

1. split YAML frontmatter (delimited by ``---`` lines) from the body;
2. parse the body as CommonMark;
3. locate each heading's line, level and plain-text title;
4. fold headings and the text between them into nested sections.

Each heading becomes a child of the nearest preceding section with a
lower level, so skipped levels (``#`` then ``###``) still nest.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Union

import yaml
from markdown_it import MarkdownIt
from markdown_it.token import Token

from chunky.section import Section, new_root

__all__ = ["ParseError", "parse_markdown", "splice_text", "parent_for_level"]

log = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled"

_MARKDOWN = MarkdownIt("commonmark")
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_FRONTMATTER_CLOSE = re.compile(r"^---[ \t]*\r?$", re.MULTILINE)


class ParseError(ValueError):
    """Raised when a document's frontmatter or structure cannot be parsed."""


@dataclass(frozen=True)
class _HeadingSpan:
    start: int
    end: int
    level: int
    title: str


def parse_markdown(
    markdown: Union[str, bytes], title: str = DEFAULT_TITLE
) -> tuple[Section, dict[str, Any]]:
    """Parse a Markdown document into a section tree and its frontmatter.

    The root section carries ``title``. The frontmatter is an empty dict
    when the document has none.
    """
    text = markdown.decode("utf-8") if isinstance(markdown, bytes) else markdown
    log.debug("starting document parse: title=%r size=%d", title, len(text))

    frontmatter, body = _split_frontmatter(text)
    spans = _extract_headings(body)
    log.debug("found %d headings", len(spans))

    root = _fold(body, spans, title)
    return root, frontmatter


def splice_text(src: str, start: int, stop: int) -> tuple[str, int]:
    """Return ``src[start:stop]`` with bounds clamped, and the next cursor."""
    start = max(start, 0)
    stop = min(stop, len(src))
    if stop <= start:
        return "", start
    return src[start:stop], stop


def parent_for_level(stack: Sequence[Section], target: int) -> int:
    """Index of the deepest section in ``stack`` whose level is below ``target``."""
    for index in reversed(range(len(stack))):
        if stack[index].level < target:
            return index
    raise ParseError("no valid parent section")


def _split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    first, _, rest = text.partition("\n")
    if first.rstrip("\r \t") != "---":
        return {}, text
    close = _FRONTMATTER_CLOSE.search(rest)
    if close is None:
        return {}, text

    raw = rest[: close.start()]
    body = rest[close.end():]
    if body.startswith("\n"):
        body = body[1:]

    try:
        data = yaml.safe_load(raw) if raw.strip() else None
    except yaml.YAMLError as err:
        raise ParseError(f"invalid frontmatter: {err}") from err
    if data is None:
        return {}, body
    if not isinstance(data, dict):
        raise ParseError("frontmatter must be a mapping")
    return data, body


def _line_bounds(text: str) -> list[tuple[int, int]]:
    """(start, end) offsets of every line, excluding its terminator."""
    bounds: list[tuple[int, int]] = []
    pos = 0
    for match in _LINE_BREAK.finditer(text):
        bounds.append((pos, match.start()))
        pos = match.end()
    bounds.append((pos, len(text)))
    return bounds


def _extract_headings(src: str) -> list[_HeadingSpan]:
    tokens = _MARKDOWN.parse(src)
    bounds = _line_bounds(src)
    spans: list[_HeadingSpan] = []
    for token, inline in zip(tokens, tokens[1:]):
        if token.type != "heading_open" or token.map is None:
            continue
        if not inline.content:
            continue
        start, end = bounds[token.map[0]]
        spans.append(
            _HeadingSpan(
                start=start,
                end=end,
                level=int(token.tag[1:]),
                title=_inline_text(inline.children or []),
            )
        )
    return spans


def _inline_text(children: Sequence[Token]) -> str:
    """Plain text of inline tokens, with formatting markers stripped."""
    parts: list[str] = []
    in_autolink = False
    for token in children:
        if token.type == "link_open" and token.markup == "autolink":
            in_autolink = True
        elif token.type == "link_close" and in_autolink:
            in_autolink = False
        elif in_autolink:
            continue
        elif token.type in ("text", "code_inline", "text_special"):
            parts.append(token.content)
        elif token.type == "image":
            parts.append(_inline_text(token.children or []))
    return "".join(parts)


def _fold(src: str, spans: Sequence[_HeadingSpan], title: str) -> Section:
    root = new_root(title)
    stack: list[Section] = [root]
    cursor = 0

    for index, span in enumerate(spans):
        if span.start > cursor:
            pre, cursor = splice_text(src, cursor, span.start)
            stack[-1].append_content(pre)

        try:
            parent_index = parent_for_level(stack, span.level)
        except ParseError as err:
            raise ParseError(
                f"invalid section stack at heading {index} ({span.title!r}): {err}"
            ) from err

        del stack[parent_index + 1:]
        child = stack[parent_index].create_child(span.title, span.level, "")
        stack.append(child)
        cursor = span.end

    if cursor < len(src):
        trailing, _ = splice_text(src, cursor, len(src))
        stack[-1].append_content(trailing)

    return root