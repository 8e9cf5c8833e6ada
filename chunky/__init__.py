"""Parse Markdown into section trees, transform their content, and count tokens."""

__version__ = "0.1.0"

__all__ = ["counters", "parser", "section", "tokenizer", "transforms"]