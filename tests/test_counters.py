import pytest

from chunky.counters import char_count_tokenizer, count_words, word_count_tokenizer
from chunky.section import new_root


# --- character counting ----------------------------------------------------


def test_char_default_ratio():
    assert char_count_tokenizer().count("hello world!") == 3


def test_char_custom_ratio():
    assert char_count_tokenizer(2.0).count("hello test") == 5


def test_char_ratio_five():
    assert char_count_tokenizer(5.0).count("hello test") == 2


@pytest.mark.parametrize("ratio", [0, -1.5])
def test_char_invalid_ratio_uses_default(ratio):
    assert char_count_tokenizer(ratio).count("12345678") == 2


def test_char_empty():
    assert char_count_tokenizer().count("") == 0


@pytest.mark.parametrize(
    "text, expected",
    [
        ("test", 4),
        ("你好世界", 4),
        ("🌍🚀🎉", 3),
        ("Hi 你好 🌍", 7),
        ("مرحبا", 5),
        ("Привет", 6),
    ],
)
def test_char_unicode(text, expected):
    assert char_count_tokenizer(1.0).count(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [("   ", 3), ("\t\t\t", 3), ("\n\n\n", 3), (" \t\n ", 4)],
)
def test_char_whitespace(text, expected):
    assert char_count_tokenizer(1.0).count(text) == expected


def test_char_long_text():
    assert char_count_tokenizer().count("0123456789" * 100) == 250


def test_char_tokenize():
    root = new_root("root")
    root.content = "1234"
    root.create_child("child", 1, "123456")

    result = char_count_tokenizer(2.0).tokenize(root)

    assert result.content_tokens == 2
    assert result.subtree_tokens == 5
    assert len(result.children) == 1
    assert result.children[0].content_tokens == 3


@pytest.mark.parametrize(
    "ratio, text, expected",
    [
        (1.0, "12345", 5),
        (2.0, "12345", 2),
        (3.0, "123456789", 3),
        (4.0, "12345678", 2),
        (5.0, "1234567890", 2),
        (10.0, "12345678901234567890", 2),
    ],
)
def test_char_different_ratios(ratio, text, expected):
    assert char_count_tokenizer(ratio).count(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1", 0),
        ("12", 0),
        ("123", 1),
        ("1234", 1),
        ("12345", 1),
        ("123456", 2),
        ("1234567", 2),
        ("12345678", 2),
        ("123456789", 3),
    ],
)
def test_char_truncation(text, expected):
    assert char_count_tokenizer(3.0).count(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("!@#$%^&*()", 10),
        ("\"'`", 3),
        ("[]{}()<>", 8),
        ("+=×÷≠≈", 6),
        ("$€£¥", 4),
        ("→←↑↓", 4),
    ],
)
def test_char_special_characters(text, expected):
    assert char_count_tokenizer(1.0).count(text) == expected


# --- word counting ----------------------------------------------------------


def test_word_default_ratio():
    assert word_count_tokenizer().count("hello world") == 2


def test_word_custom_ratio():
    assert word_count_tokenizer(0.75).count("hello world test") == 4


def test_word_ratio_two():
    assert word_count_tokenizer(2.0).count("one two three four") == 2


@pytest.mark.parametrize("ratio", [0, -2.0])
def test_word_invalid_ratio_uses_default(ratio):
    assert word_count_tokenizer(ratio).count("hello world") == 2


def test_word_empty():
    assert word_count_tokenizer().count("") == 0


@pytest.mark.parametrize(
    "text, expected",
    [
        ("hello", 1),
        ("hello world", 2),
        ("the quick brown fox", 4),
        ("hello, world!", 2),
        ("test 123 456", 3),
        ("This is a test sentence.", 5),
    ],
)
def test_word_simple_text(text, expected):
    assert word_count_tokenizer().count(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("   ", 0),
        ("\t\t\t", 0),
        ("\n\n\n", 0),
        (" \t\n ", 0),
        ("  hello", 1),
        ("hello  ", 1),
        ("hello    world", 2),
        ("hello\n\nworld", 2),
        ("hello\t\tworld", 2),
    ],
)
def test_word_whitespace(text, expected):
    assert word_count_tokenizer().count(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Hello.", 1),
        ("Hello,", 1),
        ("Hello!", 1),
        ("Hello?", 1),
        ('"Hello"', 1),
        ("don't", 1),
        ("well-known", 1),
        ("Hello, world!", 2),
        ("(Hello)", 1),
        ("[Hello]", 1),
    ],
)
def test_word_punctuation(text, expected):
    assert word_count_tokenizer().count(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("你好 世界", 2),
        ("こんにちは 世界", 2),
        ("مرحبا بالعالم", 2),
        ("Привет мир", 2),
        ("Hello 世界", 2),
        ("Hello 🌍 world", 3),
        ("🌍🚀🎉", 1),
        ("🌍 🚀 🎉", 3),
    ],
)
def test_word_unicode(text, expected):
    assert word_count_tokenizer().count(text) == expected


def test_word_multiline():
    text = (
        "Line one has five words here\n"
        "Line two has five words too\n"
        "Line three now"
    )
    assert word_count_tokenizer().count(text) == 15


def test_word_code():
    code = 'func main() {\n    fmt.Println("Hello")\n}'
    assert word_count_tokenizer().count(code) == 5


def test_word_long_text():
    assert word_count_tokenizer().count(" ".join(["word"] * 1000)) == 1000


def test_word_tokenize():
    root = new_root("root")
    root.content = "one two three four"
    root.create_child("child", 1, "five six seven eight nine ten")

    result = word_count_tokenizer(2.0).tokenize(root)

    assert result.content_tokens == 2
    assert result.subtree_tokens == 5
    assert len(result.children) == 1
    assert result.children[0].content_tokens == 3


@pytest.mark.parametrize(
    "ratio, text, expected",
    [
        (1.0, "one two three", 3),
        (0.75, "one two three", 4),
        (2.0, "one two three four", 2),
        (1.5, "one two three", 2),
        (0.5, "one two", 4),
    ],
)
def test_word_different_ratios(ratio, text, expected):
    assert word_count_tokenizer(ratio).count(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("one", 0),
        ("one two", 0),
        ("one two three", 1),
        ("one two three four", 1),
        ("a b c d e", 1),
        ("a b c d e f", 2),
    ],
)
def test_word_truncation(text, expected):
    assert word_count_tokenizer(3.0).count(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        "https://example.com/path",
        "user@example.com",
        "v1.2.3",
        "2024-01-15",
        "2+2=4",
        "hello_world",
        "helloWorld",
        "HelloWorld",
    ],
)
def test_word_special_cases(text):
    assert word_count_tokenizer().count(text) == 1


@pytest.mark.parametrize(
    "text, expected",
    [
        ("hello world", 2),
        ("  hello  world  ", 2),
        ("one two three four five", 5),
        ("test\nwith\nnewlines", 3),
        ("test\twith\ttabs", 3),
    ],
)
def test_count_words_values(text, expected):
    assert count_words(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("a", 1),
        (" ", 0),
        ("\n", 0),
        ("\t", 0),
        ("\u200b", 1),
        ("hello\u00a0world", 2),
        ("hello\u2000world", 2),
    ],
)
def test_word_edge_cases(text, expected):
    assert word_count_tokenizer().count(text) == expected


def test_word_markdown():
    markdown = (
        "# Heading One\n\n"
        "This is a paragraph with **bold** and *italic* text.\n\n"
        "## Heading Two\n\n"
        "- List item one\n"
        "- List item two\n"
        "- List item three\n\n"
        "[Link text](https://example.com)\n\n"
        "```\ncode block\nwith multiple lines\n```"
    )
    assert word_count_tokenizer().count(markdown) == 36