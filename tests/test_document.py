import pytest

from glyphedit.document import Document
from glyphedit.layout import Layout
from glyphedit.model import BoxModeDirection, Coordinate, Cursor, LineSelectionItem, SelectionKind
from glyphedit.search import SearchResultGroups
from glyphedit.text import join_lines, split_lines


def make(text, *cursors):
    return Document(text=text, lines=split_lines(text), cursors=list(cursors))


def test_load_and_save_round_trip(tmp_path):
    path = tmp_path / "sample.txt"
    path.write_bytes(b"alpha\nbeta\n")
    document = Document.load(path)
    assert len(document.lines) == 2
    assert document.save() is False
    document.lines[0].pop()
    document.changed = True
    assert document.save() is True
    assert path.read_bytes().decode("latin-1") == join_lines(document.lines)
    assert document.changed is False


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Document.load(tmp_path / "missing.txt")


def test_add_cursor_keeps_order_and_last_flag():
    document = make("abcdef\nabc")
    for position in (Coordinate(5, 0), Coordinate(1, 0), Coordinate(3, 1)):
        document.add_cursor(Cursor(position=position))
    positions = [c.position for c in document.cursors]
    assert positions == sorted(positions, key=lambda p: (p.y, p.x))
    assert [c.last for c in document.cursors] == [False, False, True]
    assert document.last_added_cursor().position == Coordinate(3, 1)


def test_main_cursor_requires_cursors():
    with pytest.raises(IndexError):
        make("abc").main_cursor()


def test_erase_all_cursors_keeps_main():
    main = Cursor(position=Coordinate(2, 0), main=True)
    document = make("abcd", Cursor(), main)
    document.erase_all_cursors(exclude_main=True)
    assert document.cursors == [main]
    document.erase_all_cursors()
    assert document.cursors == []


def test_cursor_index():
    document = make("abcd", Cursor(position=Coordinate(1, 0)), Cursor(position=Coordinate(3, 0)))
    assert document.cursor_index(Cursor(position=Coordinate(3, 0))) == 1
    with pytest.raises(ValueError):
        document.cursor_index(Cursor(position=Coordinate(2, 0)))


def test_has_selection():
    selected = Cursor(selection_start=Coordinate(0, 0), selection_end=Coordinate(2, 0))
    document = make("abcd", selected, Cursor())
    assert document.has_selection(0)
    assert not document.has_selection(1)
    selected.disabled = True
    assert not document.has_selection(0)


def test_select_all_and_line():
    text = "abc\nde\nfghi"
    document = make(text, Cursor(main=True))
    document.select_all()
    cursor = document.cursors[0]
    last = len(document.lines) - 1
    assert cursor.selection_start == Coordinate(0, 0)
    assert cursor.selection_end == Coordinate(len(document.lines[last]), last)
    assert cursor.position == cursor.selection_end
    document.set_selection_line(1)
    assert cursor.selection_start == Coordinate(0, 1)
    assert cursor.selection_end == Coordinate(len("de"), 1)


def test_line_selections_for_cursor_and_search():
    text = "abc\ndefg\nhi"
    cursor = Cursor(selection_start=Coordinate(1, 0), selection_end=Coordinate(1, 2))
    document = make(text, cursor)
    middle = document.line_selections(1)
    assert middle == [LineSelectionItem(Coordinate(0, 1), Coordinate(len("defg"), 1), SelectionKind.SELECTION)]
    first = document.line_selections(0)
    assert first[0].start == Coordinate(1, 0)
    assert first[0].end == Coordinate(len("abc"), 0)

    groups = SearchResultGroups()
    groups.add_result(LineSelectionItem(Coordinate(0, 2), Coordinate(2, 2), SelectionKind.SEARCH))
    groups.update_groups()
    document.search.search_result = groups
    kinds = [item.kind for item in document.line_selections(2)]
    assert kinds == [SelectionKind.SELECTION, SelectionKind.SEARCH]


def test_is_coordinate_in_text():
    document = make("    foo")
    assert not document.is_coordinate_in_text(Coordinate(0, 0))
    assert not document.is_coordinate_in_text(Coordinate(2, 0))
    assert document.is_coordinate_in_text(Coordinate(5, 0))


def test_word_at_delegates():
    text = "foo bar"
    document = make(text)
    word, start, end = document.word_at(Coordinate(5, 0))
    assert word == "bar"
    assert start == Coordinate(text.index("bar"), 0)
    assert end == Coordinate(len(text), 0)


def test_adjust_cursors_same_line():
    document = make("abcdefg", Cursor(position=Coordinate(2, 0)), Cursor(position=Coordinate(5, 0)))
    document.adjust_cursors(0, -1, 0)
    assert document.cursors[1].position == Coordinate(5 + 1, 0)
    assert document.cursors[0].position == Coordinate(2, 0)


def test_remove_duplicate_cursors():
    document = make(
        "abc",
        Cursor(position=Coordinate(1, 0)),
        Cursor(position=Coordinate(1, 0)),
        Cursor(position=Coordinate(2, 0)),
    )
    document.remove_duplicate_cursors()
    assert [c.position for c in document.cursors] == [Coordinate(1, 0), Coordinate(2, 0)]


def test_disable_intersections_and_delete():
    selecting = Cursor(
        position=Coordinate(5, 0), selection_start=Coordinate(0, 0), selection_end=Coordinate(5, 0)
    )
    inside = Cursor(position=Coordinate(3, 0))
    outside = Cursor(position=Coordinate(1, 1))
    document = make("abcdefg\nxyz", selecting, inside, outside)
    document.disable_intersections(selecting)
    assert [c.disabled for c in document.cursors] == [False, True, False]
    document.delete_disabled_cursors()
    assert document.cursors == [selecting, outside]


def test_is_coordinate_in_selection():
    first = Cursor(position=Coordinate(1, 0))
    second = Cursor(position=Coordinate(4, 0), selection_start=Coordinate(2, 0), selection_end=Coordinate(6, 0))
    document = make("abcdefgh", first, second)
    assert document.is_coordinate_in_selection(Coordinate(3, 0)) is second
    assert document.is_coordinate_in_selection(Coordinate(1, 0)) is first
    assert document.is_coordinate_in_selection(Coordinate(1, 0), 1) is None
    with pytest.raises(ValueError):
        document.is_coordinate_in_selection(Coordinate(0, 0), 5)


def test_cursor_in_text():
    document = make("ab", Cursor(position=Coordinate(2, 0)), Cursor(position=Coordinate(4, 0)))
    assert document.cursors_in_text() == [0]
    assert document.cursors_not_in_text() == [1]


def test_check_line_lengths_tracks_longest():
    layout = Layout()
    document = make("ab\nabcd\na")
    document.check_line_lengths(layout, 0, 2)
    assert document.longest_lines == [1]
    assert document.longest_line_length == layout.distance(document.lines[1], 4)

    del document.lines[1][1:]
    document.check_line_lengths(layout, 0, 2)
    assert document.longest_lines == [0]
    assert document.longest_line_length == layout.distance(document.lines[0], 2)


def test_max_cursor_distance():
    layout = Layout()
    document = make("abc\nabcdef", Cursor(position=Coordinate(1, 0)), Cursor(position=Coordinate(5, 1)))
    assert document.max_cursor_distance(layout) == layout.distance(document.lines[1], 5)
    document.cursors[1].disabled = True
    assert document.max_cursor_distance(layout) == layout.distance(document.lines[0], 1)


def test_set_box_selection_down():
    layout = Layout()
    main = Cursor(position=Coordinate(0, 0), selection_origin=Coordinate(0, 0), main=True)
    document = make("abcd\nabcd\nabcd", main)
    x = layout.distance(document.lines[0], 2)
    document.set_box_selection(layout, 2, x)
    assert document.box_mode_dir == BoxModeDirection.DOWN
    assert [c.position for c in document.cursors] == [Coordinate(2, y) for y in range(3)]
    for y, cursor in enumerate(document.cursors):
        assert cursor.selection_start == Coordinate(0, y)
        assert cursor.selection_end == Coordinate(2, y)
    assert document.main_cursor() is main