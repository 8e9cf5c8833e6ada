"""Built-in section transforms.

Every factory here returns a callable ``transform(frontmatter, section)``
that edits ``section.content`` in place. All of them are idempotent.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from itertools import takewhile
from typing import Any

from markdown_it import MarkdownIt
from markdown_it.token import Token

from chunky.section import Section, Transform

__all__ = [
    "normalize_newlines_transform",
    "normalize_hard_wraps_transform",
    "prune_leading_blank_lines_transform",
    "prune_trailing_blank_lines_transform",
    "collapse_blank_lines_transform",
    "heading_prefix_transform",
    "heading_path_comment_transform",
]

_MARKDOWN = MarkdownIt("commonmark")
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_BLANK_RUN = re.compile(r"(?:\n[ \t]*){3,}", re.MULTILINE)
_WRAP = re.compile(r"\n([ \t]*)")
_PATH_PREFIX = "<!-- path:"

Span = tuple[int, int]


# --- shared helpers ---------------------------------------------------------


def _line_bounds(text: str) -> list[Span]:
    """(start, end) offsets of every line, excluding its terminator."""
    bounds: list[Span] = []
    pos = 0
    for match in _LINE_BREAK.finditer(text):
        bounds.append((pos, match.start()))
        pos = match.end()
    bounds.append((pos, len(text)))
    return bounds


def _line_start(bounds: list[Span], line: int, total: int) -> int:
    return bounds[line][0] if line < len(bounds) else total


def _apply_edits(text: str, edits: Iterable[tuple[int, int, str]]) -> str:
    """Replace the given (start, end, replacement) ranges, last first."""
    for start, end, repl in sorted(edits, key=lambda e: e[0], reverse=True):
        text = text[:start] + repl + text[end:]
    return text


def _merge_spans(spans: Iterable[Span]) -> list[Span]:
    merged: list[Span] = []
    for start, end in sorted(spans):
        if merged and start <= merged[-1][1]:
            last_start, last_end = merged[-1]
            merged[-1] = (last_start, max(last_end, end))
        else:
            merged.append((start, end))
    return merged


def _complement(exclude: list[Span], total: int) -> list[Span]:
    if total <= 0:
        return []
    out: list[Span] = []
    cursor = 0
    for start, end in exclude:
        if start > cursor:
            out.append((cursor, start))
        cursor = max(cursor, end)
    if cursor < total:
        out.append((cursor, total))
    return out


# --- newline normalisation --------------------------------------------------


def normalize_newlines_transform() -> Transform:
    """Convert every ``\\r\\n`` and ``\\r`` to ``\\n``."""

    def transform(_frontmatter: Mapping[str, Any], section: Section) -> None:
        section.content = section.content.replace("\r\n", "\n").replace("\r", "\n")

    return transform


# --- hard wraps -------------------------------------------------------------


def _paragraph_spans(src: str) -> list[Span]:
    tokens = _MARKDOWN.parse(src)
    bounds = _line_bounds(src)
    spans: list[Span] = []
    for token, inline in zip(tokens, tokens[1:]):
        if token.type != "paragraph_open" or token.map is None:
            continue
        first, last = token.map[0], token.map[1] - 1
        if first >= len(bounds) or last < first:
            continue
        last = min(last, len(bounds) - 1)
        start = _paragraph_start(src, bounds[first], inline)
        line_start, line_end = bounds[last]
        end = line_start + len(src[line_start:line_end].rstrip(" \t"))
        if end > start:
            spans.append((start, end))
    return spans


def _paragraph_start(src: str, bounds: Span, inline: Token) -> int:
    line_start, line_end = bounds
    first_text = inline.content.split("\n", 1)[0]
    if first_text:
        found = src.find(first_text, line_start, line_end)
        if found >= 0:
            return found
    line = src[line_start:line_end]
    return line_start + len(line) - len(line.lstrip(" \t"))


def _join_single_newlines(text: str) -> str:
    """Turn lone newlines (with following indentation) into one space.

    Newlines next to another newline form paragraph breaks and stay.
    """
    out: list[str] = []
    last = ""
    pos = 0
    for match in _WRAP.finditer(text):
        before = text[pos:match.start()]
        if before:
            out.append(before)
            last = before[-1]
        indent = match.group(1)
        following = text[match.end():match.end() + 1]
        if last == "\n" or following == "\n":
            out.append("\n" + indent)
            last = indent[-1] if indent else "\n"
        elif last != " ":
            out.append(" ")
            last = " "
        pos = match.end()
    out.append(text[pos:])
    return "".join(out)


def normalize_hard_wraps_transform() -> Transform:
    """Join hard-wrapped lines inside paragraphs; other blocks are untouched."""

    def transform(_frontmatter: Mapping[str, Any], section: Section) -> None:
        src = section.content
        if not src:
            return
        edits = []
        for start, end in _paragraph_spans(src):
            segment = src[start:end]
            joined = _join_single_newlines(segment)
            if joined != segment:
                edits.append((start, end, joined))
        if edits:
            section.content = _apply_edits(src, edits)

    return transform


# --- blank-line pruning -----------------------------------------------------


def _is_blank(line: str) -> bool:
    return not line.strip()


def prune_leading_blank_lines_transform(max_keep: int) -> Transform:
    """Remove leading blank lines, keeping at most ``max_keep`` of them."""

    def transform(_frontmatter: Mapping[str, Any], section: Section) -> None:
        if not section.content:
            return
        lines = section.content.split("\n")
        leading = sum(1 for _ in takewhile(_is_blank, lines))
        excess = leading - max_keep
        if excess > 0:
            section.content = "\n".join(lines[excess:])

    return transform


def prune_trailing_blank_lines_transform(max_keep: int) -> Transform:
    """Remove trailing blank lines, keeping at most ``max_keep`` of them."""

    def transform(_frontmatter: Mapping[str, Any], section: Section) -> None:
        if not section.content:
            return
        lines = section.content.split("\n")
        trailing = sum(1 for _ in takewhile(_is_blank, reversed(lines)))
        excess = trailing - max_keep
        if excess > 0:
            section.content = "\n".join(lines[: len(lines) - excess])

    return transform


# --- blank-line collapsing --------------------------------------------------


def _code_spans(src: str) -> list[Span]:
    """Ranges covering the content lines of fenced and indented code blocks."""
    bounds = _line_bounds(src)
    total = len(src)
    spans: list[Span] = []
    for token in _MARKDOWN.parse(src):
        if token.map is None:
            continue
        if token.type == "fence":
            first = token.map[0] + 1
            count = token.content.count("\n")
            if token.content and not token.content.endswith("\n"):
                count += 1
            last = min(first + count, token.map[1])
        elif token.type == "code_block":
            first, last = token.map
        else:
            continue
        if last > first:
            spans.append(
                (_line_start(bounds, first, total), _line_start(bounds, last, total))
            )
    return _merge_spans(spans)


def collapse_blank_lines_transform() -> Transform:
    """Collapse runs of three or more blank lines to two, outside code blocks."""

    def transform(_frontmatter: Mapping[str, Any], section: Section) -> None:
        src = section.content
        if not src:
            return
        edits = []
        for start, end in _complement(_code_spans(src), len(src)):
            segment = src[start:end]
            replaced = _BLANK_RUN.sub("\n\n", segment)
            if replaced != segment:
                edits.append((start, end, replaced))
        if edits:
            section.content = _apply_edits(src, edits)

    return transform


# --- headings ---------------------------------------------------------------


def heading_path_comment_transform() -> Transform:
    """Put ``<!-- path: Root / ... / Title -->`` on the first line of the content.

    Sections with blank content are skipped; a stale comment is replaced.
    """

    def transform(_frontmatter: Mapping[str, Any], section: Section) -> None:
        content = section.content
        if not content.strip():
            return
        comment = f"<!-- path: {' / '.join(section.path())} -->"
        lines = content.split("\n")
        if lines[0].startswith(_PATH_PREFIX):
            if lines[0] != comment:
                lines[0] = comment
                section.content = "\n".join(lines)
            return
        section.content = comment + "\n" + content

    return transform


def heading_prefix_transform() -> Transform:
    """Insert the section's own Markdown heading before its first non-comment line.

    Root sections are skipped; an existing matching heading is left alone.
    """

    def transform(_frontmatter: Mapping[str, Any], section: Section) -> None:
        if section.level == 0:
            return
        heading = "#" * section.level + " " + section.title
        content = section.content
        lines = content.split("\n")

        index = next(
            (
                i
                for i, line in enumerate(lines)
                if line.strip() and not line.strip().startswith("<!--")
            ),
            None,
        )
        if index is not None and lines[index].strip() == heading:
            return

        insert = heading + "\n\n"
        if index is None:
            section.content = content + insert
            return

        before = "\n".join(lines[:index])
        if before:
            before += "\n"
        section.content = before + insert + "\n".join(lines[index:])

    return transform