# chunky

`chunky` turns a Markdown document into a tree of sections, one per heading.
You can then clean up each section with transforms and count the tokens in
every section and in every subtree.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Parsing

`chunky.parser.parse_markdown(markdown, title="Untitled")` accepts a `str` or
UTF-8 `bytes`. It returns `(root, frontmatter)`.

- YAML frontmatter between `---` lines at the top of the document is loaded
  into a dict. A document without frontmatter gives an empty dict.
- The root section (level 0) carries `title` and holds the text that comes
  before the first heading.
- Every heading becomes a child of the nearest earlier section with a lower
  level, so skipped levels (`#` then `###`) still nest under the `#`.
- Heading titles are plain text, with emphasis, code and link markup stripped.
- A section's content is the raw text after its heading line, up to the next
  heading. The heading line itself is not part of any content.

```python
from chunky.parser import parse_markdown

markdown = """---
title: Guide
---

Intro text.

# Chapter 1

Chapter text.

## Section 1.1

Section text.
"""

root, frontmatter = parse_markdown(markdown, "guide.md")
print(frontmatter["title"])            # Guide
chapter = root.children[0]
print(chapter.title, chapter.level)    # Chapter 1 1
print(chapter.children[0].path())      # ['guide.md', 'Chapter 1', 'Section 1.1']
```

`ParseError` (a `ValueError`) is raised when the frontmatter is not valid
YAML, or is not a mapping, or when a heading cannot be placed in the tree.

`splice_text(src, start, stop)` and `parent_for_level(stack, target)` are the
helpers the parser uses to build the tree. They are public as well.

## Working with sections

`chunky.section.new_root(title)` creates a root. A `Section` has read-only
`title`, `level`, `parent`, `is_root` and `children` (the last is a copy). It
also has a writable `content` string.

```python
from chunky.section import new_root

root = new_root("Document")
child = root.create_child("Intro", 1, "Hello")
child.append_content(" world")
child.prepend_content("> ")
print(child.content)   # > Hello world
print(child.path())    # ['Document', 'Intro']
child.reset_content()  # content is now ""
```

## Transforms

A transform is a callable that takes `(frontmatter, section)` and changes the
section in place. `apply_transform(frontmatter, root, *transforms)` walks the
tree depth-first in pre-order. At each section it applies every transform in
the order given, then it moves on to the children. Transforms receive a
read-only copy of the frontmatter. The first exception raised stops the walk
and propagates.

```python
from chunky.section import apply_transform
from chunky.transforms import (
    normalize_newlines_transform,
    normalize_hard_wraps_transform,
    collapse_blank_lines_transform,
    prune_leading_blank_lines_transform,
    prune_trailing_blank_lines_transform,
    heading_prefix_transform,
    heading_path_comment_transform,
)

apply_transform(
    frontmatter,
    root,
    normalize_newlines_transform(),
    normalize_hard_wraps_transform(),
    collapse_blank_lines_transform(),
    prune_leading_blank_lines_transform(0),
    prune_trailing_blank_lines_transform(1),
    heading_prefix_transform(),
    heading_path_comment_transform(),
)
```

Every built-in transform is idempotent. Running it a second time leaves the
content unchanged.

| Transform | Effect |
| --- | --- |
| `normalize_newlines_transform()` | Converts `\r\n` and `\r` to `\n` |
| `normalize_hard_wraps_transform()` | Joins hard-wrapped lines inside paragraphs; code blocks, lists and headings are left alone |
| `collapse_blank_lines_transform()` | Collapses runs of 3 or more blank lines to 2, outside code blocks |
| `prune_leading_blank_lines_transform(n)` | Keeps at most `n` leading blank lines |
| `prune_trailing_blank_lines_transform(n)` | Keeps at most `n` trailing blank lines |
| `heading_prefix_transform()` | Inserts the section's own `## Title` line before its first non-comment line (roots are skipped) |
| `heading_path_comment_transform()` | Puts a `<!-- path: A / B / C -->` comment on the first line, replacing a stale one; blank sections are skipped |

## Token counting

`chunky.tokenizer.make_tokenizer(counter)` wraps any function that maps a
string to a number of tokens. `Tokenizer.count(text)` calls that function.
`Tokenizer.tokenize(root)` returns a `TokenizedSection` tree. Each node has
`section`, `content_tokens`, `subtree_tokens` and `children`.
`TokenizedSection.render()` joins all the content of a subtree in document
order.

`chunky.counters` provides two estimating tokenizers. Both truncate towards
zero. A ratio of zero or less falls back to the default.

- `char_count_tokenizer(chars_per_token=4.0)` uses code points divided by the ratio.
- `word_count_tokenizer(words_per_token=1.0)` uses whitespace-separated words
  divided by the ratio. `count_words(text)` exposes the word count.

```python
from chunky.tokenizer import make_tokenizer
from chunky.counters import char_count_tokenizer, word_count_tokenizer

tok = word_count_tokenizer(1.0)
print(tok.count("hello, world!"))   # 2

tree = char_count_tokenizer(4.0).tokenize(root)
print(tree.content_tokens, tree.subtree_tokens)
print(tree.render())                # all section content, in document order

custom = make_tokenizer(len)
```

## What it does not do

`chunky` is a library only. It has no command-line program. It does not read
files from disk, and it does not split sections into size-limited chunks.
The built-in counters only estimate token counts. For counts that match a
particular model's tokenizer, pass your own counting function to
`make_tokenizer`.