import pytest

from mshell.words import (
    Token,
    TokenType,
    backslash_run,
    check_quotes,
    read_symbol,
    read_word,
    trailing_backslashes,
)


def test_backslash_run_counts_consecutive():
    assert backslash_run("a\\\\\\b", 1) == 3


def test_backslash_run_none():
    assert backslash_run("abc", 0) == 0


def test_backslash_run_at_end():
    assert backslash_run("ab", 2) == 0


@pytest.mark.parametrize(
    "value, expected",
    [("ab\\\\", 2), ("a\\b", 0), ("", 0), ("\\", 1)],
)
def test_trailing_backslashes(value, expected):
    assert trailing_backslashes(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ('"abc"', True),
        ('"abc', False),
        ("'a'", True),
        ("'abc", False),
        ('a\\"b', True),
        ('"a\\"', False),
        ("abc", True),
        ("'a\\'", True),
        ('"a"\'b', False),
    ],
)
def test_check_quotes(value, expected):
    assert check_quotes(value) is expected


def test_read_word_stops_at_space():
    assert read_word("echo hi", 0) == ("echo", 4)


def test_read_word_from_offset():
    assert read_word("echo hi", 5) == ("hi", 7)


def test_read_word_stops_at_pipe():
    assert read_word("ls|wc", 0) == ("ls", 2)


def test_read_word_keeps_quoted_space():
    line = 'a"b c"d e'
    assert read_word(line, 0) == ('a"b c"d', 7)


def test_read_word_escaped_space_is_part_of_word():
    line = "a\\ b c"
    assert read_word(line, 0) == ("a\\ b", 4)


def test_read_word_even_backslashes_do_not_escape():
    line = "a\\\\ b"
    assert read_word(line, 0) == ("a\\\\", 3)


def test_read_word_unterminated_quote_runs_to_end():
    line = 'a"bc'
    assert read_word(line, 0) == (line, len(line))


def test_read_word_escaped_quote_inside_quotes():
    line = 'x"a\\"b" z'
    word, end = read_word(line, 0)
    assert word == 'x"a\\"b"'
    assert line[end] == " "


def test_read_word_single_quotes_keep_separators():
    line = "'a|b';c"
    assert read_word(line, 0) == ("'a|b'", 5)


def test_read_word_empty_at_separator():
    assert read_word(">out", 0) == ("", 0)


@pytest.mark.parametrize(
    "line, token",
    [
        ("|", Token(TokenType.PIPE, "|")),
        ("||", Token(TokenType.PIPE, "||")),
        (";", Token(TokenType.SEMICOLON, ";")),
        (";;", Token(TokenType.SEMICOLON, ";;")),
        (">", Token(TokenType.REDIR_GREATER, ">")),
        (">>", Token(TokenType.DOUBLE_GREATER, ">>")),
        ("<", Token(TokenType.REDIR_LESSER, "<")),
        ("<<", Token(TokenType.DOUBLE_LESSER, "<<")),
    ],
)
def test_read_symbol(line, token):
    assert read_symbol(line + " x", 0) == (token, len(line))


def test_read_symbol_mixed_is_single():
    assert read_symbol("><", 0) == (Token(TokenType.REDIR_GREATER, ">"), 1)


def test_read_symbol_offset():
    assert read_symbol("a >> b", 2) == (Token(TokenType.DOUBLE_GREATER, ">>"), 4)


def test_read_symbol_rejects_word():
    with pytest.raises(ValueError):
        read_symbol("abc", 0)


def test_read_symbol_rejects_end():
    with pytest.raises(ValueError):
        read_symbol("a", 1)