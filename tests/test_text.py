import pytest

from glyphedit.model import Coordinate, Glyph
from glyphedit.text import (
    count_lines,
    is_operator,
    is_whitespace,
    is_word_char,
    join_lines,
    line_string,
    split_lines,
    sub_line,
    word_at,
)


def strings(lines):
    return [line_string(line, 0, len(line)) for line in lines]


def test_split_lines_on_newline():
    assert strings(split_lines("ab\ncd")) == ["ab", "cd"]


def test_split_lines_crlf():
    assert strings(split_lines("ab\r\ncd\r\n")) == ["ab", "cd"]


def test_carriage_return_swallows_next_character():
    assert strings(split_lines("a\rxb")) == ["a", "b"]


def test_empty_text_gives_one_empty_line():
    assert split_lines("") == [[]]
    assert count_lines("") == 0


def test_count_lines_matches_split():
    for text in ["a", "a\n", "a\nb", "\n\n"]:
        assert count_lines(text) == len(split_lines(text))


def test_split_uses_given_color():
    lines = split_lines("x", 5)
    assert lines == [[Glyph("x", 5)]]


@pytest.mark.parametrize("text", ["a\nb\n", "\n", "line one\n\tline two\n"])
def test_join_round_trip(text):
    assert join_lines(split_lines(text)) == text


def test_line_string_clamps_end():
    line = split_lines("hello")[0]
    assert line_string(line, 1, 100) == "ello"
    assert line_string(line, 1, 3) == "el"


def test_sub_line_copies_glyphs():
    line = split_lines("hello")[0]
    part = sub_line(line, 1, 3)
    part[0].char = "Z"
    assert line_string(line, 0, len(line)) == "hello"
    assert line_string(part, 0, len(part)) == "Zl"


def test_character_classes():
    assert is_word_char("_") and is_word_char("Q") and is_word_char("7")
    assert not is_word_char("-")
    assert is_whitespace("\t") and not is_whitespace("x")
    assert is_operator("=") and is_operator("^") and not is_operator("(")


def test_word_at_identifier():
    lines = split_lines("foo bar")
    assert word_at(lines, Coordinate(1, 0)) == ("foo", Coordinate(0, 0), Coordinate(3, 0))
    assert word_at(lines, Coordinate(5, 0)) == ("bar", Coordinate(4, 0), Coordinate(7, 0))


def test_word_at_whitespace_after_word_returns_word():
    lines = split_lines("foo bar")
    assert word_at(lines, Coordinate(3, 0)) == ("foo", Coordinate(0, 0), Coordinate(3, 0))


def test_word_at_clamps_past_end():
    lines = split_lines("foo bar")
    assert word_at(lines, Coordinate(50, 0))[0] == "bar"


def test_word_at_operators():
    lines = split_lines("a+=b")
    assert word_at(lines, Coordinate(1, 0)) == ("+=", Coordinate(1, 0), Coordinate(3, 0))


def test_word_at_leading_whitespace():
    lines = split_lines("\t  x")
    word, start, end = word_at(lines, Coordinate(0, 0))
    assert word == "\t  "
    assert (start, end) == (Coordinate(0, 0), Coordinate(3, 0))


def test_word_at_other_character():
    lines = split_lines("f(x)")
    assert word_at(lines, Coordinate(1, 0)) == ("(", Coordinate(1, 0), Coordinate(2, 0))


def test_word_at_whitespace_after_other_character():
    lines = split_lines("( x")
    assert word_at(lines, Coordinate(1, 0)) == ("", Coordinate(0, 0), Coordinate(1, 0))


def test_word_at_empty_line():
    lines = split_lines("a\n\nb")
    assert word_at(lines, Coordinate(0, 1)) == ("", Coordinate(0, 0), Coordinate(0, 0))