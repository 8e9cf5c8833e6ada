"""Token counting over strings and section trees."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Optional

from chunky.section import Section

__all__ = ["TokenCounter", "TokenizedSection", "Tokenizer", "make_tokenizer"]

TokenCounter = Callable[[str], int]


@dataclass(frozen=True)
class TokenizedSection:
    """A section annotated with token counts.

    ``content_tokens`` covers this node's own content only;
    ``subtree_tokens`` covers it plus every descendant. The caller who
    builds one by hand is responsible for keeping these consistent.
    """

    section: Section
    content_tokens: int
    subtree_tokens: int
    children: tuple[Optional[TokenizedSection], ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children or ()))

    def render(self) -> str:
        """Concatenate this node's content with all descendants, pre-order."""
        parts = [self.section.content]
        parts.extend(child.render() for child in self.children if child is not None)
        return "".join(parts)


class Tokenizer:
    """Counts tokens in strings and measures whole section trees."""

    def __init__(self, counter: TokenCounter) -> None:
        self._counter = counter

    def count(self, text: str) -> int:
        """Number of tokens in ``text``; errors from the counter propagate."""
        return self._counter(text)

    def tokenize(self, root: Section) -> TokenizedSection:
        """Build a tree of token counts mirroring the section tree."""
        content_tokens = self._counter(root.content)
        children: Sequence[TokenizedSection] = [
            self.tokenize(child) for child in root.children
        ]
        subtree = content_tokens + sum(c.subtree_tokens for c in children)
        return TokenizedSection(root, content_tokens, subtree, tuple(children))


def make_tokenizer(counter: TokenCounter) -> Tokenizer:
    """Create a tokenizer backed by the given counting function."""
    return Tokenizer(counter)