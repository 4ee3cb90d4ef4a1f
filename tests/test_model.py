import pytest

from glyphedit.model import (
    NO_ORIGIN,
    Coordinate,
    Cursor,
    Glyph,
    LineSelectionItem,
    Palette,
    SelectionKind,
)


def test_coordinate_ordering_is_line_major():
    assert Coordinate(0, 2) > Coordinate(9, 1)
    assert Coordinate(3, 1) > Coordinate(2, 1)
    assert not (Coordinate(2, 1) > Coordinate(3, 1))


def test_equal_coordinates_compare_less():
    a = Coordinate(4, 4)
    b = Coordinate(4, 4)
    assert a == b
    assert a < b
    assert a <= b
    assert a >= b
    assert not (a > b)


@pytest.mark.parametrize(
    "a, b",
    [(Coordinate(1, 0), Coordinate(0, 1)), (Coordinate(0, 3), Coordinate(5, 3))],
)
def test_strict_ordering_consistent(a, b):
    assert a < b
    assert b > a
    assert b >= a
    assert a <= b
    assert not (b <= a)


def test_cursor_default_origin_is_unset():
    cursor = Cursor()
    assert cursor.selection_origin == NO_ORIGIN
    assert cursor.position == Coordinate(0, 0)


def test_cursor_copy_is_independent():
    cursor = Cursor(position=Coordinate(2, 3), main=True)
    clone = cursor.copy()
    clone.position.x = 7
    assert cursor.position == Coordinate(2, 3)
    assert clone.main is True
    assert clone.position == Coordinate(7, 3)


def test_shift_x_without_anchor_moves_only_position():
    cursor = Cursor(position=Coordinate(2, 0), selection_end=Coordinate(1, 0))
    cursor.shift_x(3)
    assert cursor.position == Coordinate(5, 0)
    assert cursor.selection_end == Coordinate(1, 0)
    assert cursor.selection_origin == NO_ORIGIN


def test_shift_x_with_anchor_moves_selection():
    cursor = Cursor(
        selection_start=Coordinate(1, 0),
        selection_end=Coordinate(4, 0),
        position=Coordinate(4, 0),
        selection_origin=Coordinate(1, 0),
    )
    cursor.shift_x(-1)
    assert cursor.position == Coordinate(3, 0)
    assert cursor.selection_start == Coordinate(0, 0)
    assert cursor.selection_end == Coordinate(3, 0)
    assert cursor.selection_origin == Coordinate(0, 0)


def test_palette_defaults_match_editor_colours():
    palette = Palette()
    assert palette.default == 0xFFF4F4F4
    assert palette.selection == 0x80A06020
    assert palette.search_highlight == 0x80002C4F


def test_glyph_is_mutable():
    glyph = Glyph("a", 1)
    glyph.char = "b"
    assert glyph == Glyph("b", 1)


def test_line_selection_item_defaults():
    item = LineSelectionItem()
    assert item.kind is SelectionKind.NONE
    assert item.start == item.end