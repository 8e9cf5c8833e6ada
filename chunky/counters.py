"""Approximate token counters based on character and word counts."""

from __future__ import annotations

from itertools import groupby

from chunky.tokenizer import Tokenizer, make_tokenizer

__all__ = [
    "DEFAULT_CHARS_PER_TOKEN",
    "DEFAULT_WORDS_PER_TOKEN",
    "char_count_tokenizer",
    "word_count_tokenizer",
    "count_words",
]

DEFAULT_CHARS_PER_TOKEN = 4.0
DEFAULT_WORDS_PER_TOKEN = 1.0

# str.isspace() treats the ASCII information separators as whitespace;
# word splitting here does not.
_NOT_WHITESPACE = frozenset("\x1c\x1d\x1e\x1f")


def _is_space(ch: str) -> bool:
    return ch.isspace() and ch not in _NOT_WHITESPACE


def count_words(text: str) -> int:
    """Count runs of non-whitespace characters, using Unicode whitespace."""
    return sum(1 for is_space, _ in groupby(text, key=_is_space) if not is_space)


def char_count_tokenizer(chars_per_token: float = DEFAULT_CHARS_PER_TOKEN) -> Tokenizer:
    """Estimate tokens as code points divided by ``chars_per_token``.

    A ratio that is not greater than zero falls back to the default of 4.0.
    The result is truncated towards zero.
    """
    ratio = chars_per_token if chars_per_token > 0 else DEFAULT_CHARS_PER_TOKEN

    def counter(text: str) -> int:
        return int(len(text) / ratio)

    return make_tokenizer(counter)


def word_count_tokenizer(words_per_token: float = DEFAULT_WORDS_PER_TOKEN) -> Tokenizer:
    """Estimate tokens as whitespace-separated words divided by ``words_per_token``.

    A ratio that is not greater than zero falls back to the default of 1.0.
    The result is truncated towards zero.
    """
    ratio = words_per_token if words_per_token > 0 else DEFAULT_WORDS_PER_TOKEN

    def counter(text: str) -> int:
        return int(count_words(text) / ratio)

    return make_tokenizer(counter)