"""Conversions between plain text and glyph lines, and word lookup."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from glyphedit.model import DEFAULT_COLOR, Coordinate, Glyph, Line

_OPERATORS = frozenset("+-*/<>|&^!=")


def _split(text: str, color: int) -> list[Line]:
    lines: list[Line] = []
    buffer: Line = []
    chars = iter(text)
    for char in chars:
        if char in "\n\r":
            if char == "\r":
                # A carriage return always swallows the character after it.
                next(chars, None)
            lines.append(buffer)
            buffer = []
        else:
            buffer.append(Glyph(char, color))
    if buffer:
        lines.append(buffer)
    return lines


def split_lines(text: str, color: int = DEFAULT_COLOR) -> list[Line]:
    """Split text into glyph lines; the result always holds at least one line."""
    return _split(text, color) or [[]]


def count_lines(text: str) -> int:
    """Number of lines in text, counting an empty text as zero lines."""
    return len(_split(text, DEFAULT_COLOR))


def join_lines(lines: Sequence[Line]) -> str:
    """Join glyph lines into text, terminating every line with a newline."""
    return "".join(line_string(line, 0, len(line)) + "\n" for line in lines)


def line_string(line: Line, start: int, end: int) -> str:
    """Characters of line from start up to end, clamping end to the line length."""
    end = min(end, len(line))
    return "".join(glyph.char for glyph in line[start:end])


def sub_line(line: Line, start: int, end: int) -> Line:
    """A copy of the glyphs of line between start and end."""
    return [Glyph(glyph.char, glyph.color) for glyph in line[start:end]]


def is_word_char(char: str) -> bool:
    return char == "_" or ("A" <= char <= "Z") or ("a" <= char <= "z") or ("0" <= char <= "9")


def is_whitespace(char: str) -> bool:
    return char in (" ", "\t")


def is_operator(char: str) -> bool:
    return len(char) == 1 and char in _OPERATORS


def _region(line: Line, x: int, y: int, matches: Callable[[str], bool]) -> tuple[str, Coordinate, Coordinate]:
    x1 = next((i for i in range(x + 1, len(line)) if not matches(line[i].char)), len(line))
    x0 = next((i + 1 for i in range(x, -1, -1) if not matches(line[i].char)), 0)
    return line_string(line, x0, x1), Coordinate(x0, y), Coordinate(x1, y)


def word_at(lines: Sequence[Line], position: Coordinate) -> tuple[str, Coordinate, Coordinate]:
    """Find the word under position.

    Returns the word with its start and end coordinates. Words are runs of
    identifier characters, of operators or of whitespace; any other character
    forms a word on its own.
    """
    line = lines[position.y]
    y = position.y
    if not line:
        return "", Coordinate(0, 0), Coordinate(0, 0)

    x = min(position.x, len(line) - 1)
    char = line[x].char

    if is_word_char(char):
        return _region(line, x, y, is_word_char)
    if is_whitespace(char):
        left = " " if x == 0 else line[x - 1].char
        if is_whitespace(left):
            return _region(line, x, y, is_whitespace)
        if is_operator(left):
            return _region(line, x - 1, y, is_operator)
        if is_word_char(left):
            return _region(line, x - 1, y, is_word_char)
        return "", Coordinate(x - 1, y), Coordinate(x, y)
    if is_operator(char):
        return _region(line, x, y, is_operator)
    return char, Coordinate(x, y), Coordinate(x + 1, y)