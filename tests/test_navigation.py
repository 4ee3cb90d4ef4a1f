from glyphedit.document import Document
from glyphedit.editing import EditorCore
from glyphedit.model import NO_ORIGIN, BoxModeDirection, Coordinate, Cursor, MultiCursorMode
from glyphedit.navigation import NavigationMixin
from glyphedit.text import split_lines


class _Editor(NavigationMixin, EditorCore):
    pass


def _document(text, *positions):
    document = Document(text=text, lines=split_lines(text))
    for i, (x, y) in enumerate(positions):
        document.add_cursor(Cursor(position=Coordinate(x, y), main=(i == 0)))
    return document


def test_move_down_clamps_to_shorter_line():
    document = _document("hello\nhi", (4, 0))
    _Editor().move_down(document, False, False)
    assert document.cursors[0].position == Coordinate(len("hi"), 1)


def test_move_up_on_first_line_stays():
    document = _document("hello\nhi", (3, 0))
    _Editor().move_up(document, False, False)
    assert document.cursors[0].position == Coordinate(3, 0)


def test_move_down_on_last_line_stays():
    document = _document("hello\nhi", (1, 1))
    _Editor().move_down(document, False, False)
    assert document.cursors[0].position == Coordinate(1, 1)


def test_move_up_then_down_returns():
    document = _document("abc\nabc\nabc", (2, 1))
    editor = _Editor()
    editor.move_up(document, False, False)
    editor.move_down(document, False, False)
    assert document.cursors[0].position == Coordinate(2, 1)


def test_move_right_wraps_to_next_line():
    document = _document("hello\nhi", (5, 0))
    _Editor().move_right(document, False, False, False)
    assert document.cursors[0].position == Coordinate(0, 1)


def test_move_right_at_document_end_stays():
    document = _document("hello\nhi", (2, 1))
    _Editor().move_right(document, False, False, False)
    assert document.cursors[0].position == Coordinate(2, 1)


def test_move_right_ctrl_jumps_to_word_end():
    document = _document("foo bar", (0, 0))
    _Editor().move_right(document, True, False, False)
    assert document.cursors[0].position == Coordinate(len("foo"), 0)


def test_move_left_wraps_to_previous_line_end():
    document = _document("hello\nhi", (0, 1))
    _Editor().move_left(document, False, False, False)
    assert document.cursors[0].position == Coordinate(len("hello"), 0)


def test_move_left_ctrl_jumps_to_word_start():
    document = _document("foo bar", (7, 0))
    _Editor().move_left(document, True, False, False)
    assert document.cursors[0].position == Coordinate("foo bar".index("bar"), 0)


def test_move_left_then_right_returns():
    document = _document("abcdef", (3, 0))
    editor = _Editor()
    editor.move_left(document, False, False, False)
    editor.move_right(document, False, False, False)
    assert document.cursors[0].position == Coordinate(3, 0)


def test_shift_right_selects_character():
    document = _document("abc", (0, 0))
    _Editor().move_right(document, False, True, False)
    cursor = document.cursors[0]
    assert cursor.selection_start == Coordinate(0, 0)
    assert cursor.selection_end == Coordinate(1, 0)
    assert cursor.position == Coordinate(1, 0)
    assert document.has_selection(0)


def test_plain_move_clears_selection():
    document = _document("abc", (0, 0))
    editor = _Editor()
    editor.move_right(document, False, True, False)
    editor.move_right(document, False, False, False)
    cursor = document.cursors[0]
    assert cursor.selection_origin == NO_ORIGIN
    assert not document.has_selection(0)


def test_shift_down_selects_across_lines():
    document = _document("abc\nabc", (1, 0))
    _Editor().move_down(document, True, False)
    cursor = document.cursors[0]
    assert cursor.selection_start == Coordinate(1, 0)
    assert cursor.selection_end == Coordinate(1, 1)
    assert document.has_selection(0)


def test_home_goes_to_indentation_then_line_start():
    text = "    code"
    document = _document(text, (len(text), 0))
    editor = _Editor()
    editor.home(document, False, False)
    assert document.cursors[0].position == Coordinate(text.index("code"), 0)
    editor.home(document, False, False)
    assert document.cursors[0].position == Coordinate(0, 0)


def test_home_ctrl_goes_to_document_start():
    document = _document("abc\ndef", (2, 1))
    _Editor().home(document, True, False)
    assert document.cursors[0].position == Coordinate(0, 0)


def test_end_goes_to_line_end():
    document = _document("abc\ndefgh", (1, 1))
    _Editor().end(document, False, False)
    assert document.cursors[0].position == Coordinate(len("defgh"), 1)


def test_end_ctrl_goes_to_document_end():
    document = _document("abc\ndefgh", (1, 0))
    _Editor().end(document, True, False)
    assert document.cursors[0].position == Coordinate(len("defgh"), 1)


def test_end_shift_selects_to_line_end():
    document = _document("abcdef", (2, 0))
    _Editor().end(document, False, True)
    cursor = document.cursors[0]
    assert cursor.selection_start == Coordinate(2, 0)
    assert cursor.selection_end == Coordinate(len("abcdef"), 0)
    assert cursor.position == cursor.selection_end


def test_cursors_meeting_are_merged():
    document = _document("abcd", (1, 0), (3, 0))
    assert len(document.cursors) == 2
    _Editor().home(document, False, False)
    assert len(document.cursors) == 1
    assert document.cursors[0].position == Coordinate(0, 0)


def test_shift_alt_down_creates_box_selection():
    document = _document("abc\nabc\nabc", (1, 0))
    _Editor().move_down(document, True, True)
    assert document.cursor_multi_mode is MultiCursorMode.BOX
    assert document.box_mode_dir is BoxModeDirection.DOWN
    assert len(document.cursors) == 2
    assert [c.position.y for c in document.cursors] == [0, 1]
    assert len({c.position.x for c in document.cursors}) == 1


def test_shift_alt_up_on_first_line_adds_no_cursor():
    document = _document("abc\nabc", (1, 0))
    _Editor().move_up(document, True, True)
    assert document.cursor_multi_mode is MultiCursorMode.BOX
    assert len(document.cursors) == 1


def test_move_right_leaves_box_mode():
    document = _document("abc\nabc\nabc", (1, 0))
    editor = _Editor()
    editor.move_down(document, True, True)
    editor.move_right(document, False, False, False)
    assert document.cursor_multi_mode is MultiCursorMode.NORMAL
    assert len(document.cursors) == 1
    assert document.cursors[0].position == Coordinate(0, 1)


def test_movement_resets_blink():
    document = _document("abc", (0, 0))
    editor = _Editor()
    editor.move_right(document, False, False, False)
    assert editor.cursor_blink == 0