"""Cursor movement: arrow keys, Home and End, with selection and box modes."""

from __future__ import annotations

from glyphedit.document import Document
from glyphedit.layout import Layout
from glyphedit.model import (
    NO_ORIGIN,
    BoxModeDirection,
    Coordinate,
    Cursor,
    MultiCursorMode,
)


def _copy(coordinate: Coordinate) -> Coordinate:
    return Coordinate(coordinate.x, coordinate.y)


def _clear_selection(cursor: Cursor) -> None:
    cursor.selection_start = Coordinate(0, 0)
    cursor.selection_end = Coordinate(0, 0)
    cursor.selection_origin = _copy(NO_ORIGIN)


class NavigationMixin:
    """Cursor movement for an editor.

    Meant to be combined with a class that provides ``layout``,
    ``cursor_blink``, ``esc``, ``scroll_to_cursor`` and ``swap_lines``.
    """

    layout: Layout
    cursor_blink: int

    # Shared pieces

    def _finish_move(self, document: Document) -> None:
        self.scroll_to_cursor(document)  # type: ignore[attr-defined]
        self.cursor_blink = 0

    def _enter_box_mode(self, document: Document) -> tuple[Cursor, Coordinate]:
        """Switch to box mode anchored at the main cursor; return it and the moving corner."""
        if document.cursor_multi_mode is MultiCursorMode.NORMAL:
            self.esc(document)  # type: ignore[attr-defined]
        reference = document.main_cursor()
        if reference.selection_origin == NO_ORIGIN:
            reference.selection_origin = _copy(reference.position)
        document.cursor_multi_mode = MultiCursorMode.BOX

        if document.box_mode_dir is BoxModeDirection.UP:
            corner = document.cursors[0].position
        elif document.box_mode_dir is BoxModeDirection.DOWN:
            corner = document.cursors[-1].position
        else:
            corner = reference.position
        return reference, _copy(corner)

    def _box_select_to(self, document: Document, coordinate: Coordinate) -> None:
        distance = self.layout.distance(document.lines[coordinate.y], coordinate.x)
        document.set_box_selection(self.layout, coordinate.y, distance)

    @staticmethod
    def _order_selection(cursor: Cursor, upward: bool) -> None:
        """Set start/end from origin and position.

        ``upward`` picks the comparison the vertical moves use (``<``);
        horizontal moves use ``>``. The two differ when both are equal.
        """
        if upward:
            before = cursor.position < cursor.selection_origin
        else:
            before = not cursor.position > cursor.selection_origin
        if before:
            cursor.selection_start = _copy(cursor.position)
            cursor.selection_end = _copy(cursor.selection_origin)
        else:
            cursor.selection_start = _copy(cursor.selection_origin)
            cursor.selection_end = _copy(cursor.position)

    @staticmethod
    def _merge_overlaps(document: Document, cursor: Cursor, extend_end: bool, conditional: bool = False) -> None:
        """Fold cursors whose selections the moved caret ran into."""
        champion = cursor
        offset = 0
        while (other := document.is_coordinate_in_selection(champion.position, offset)) is not None:
            if other is champion:
                offset += 1
                continue
            if extend_end:
                take = not conditional or champion.selection_end > other.selection_end
                if take:
                    other.selection_end = _copy(champion.selection_end)
                    other.selection_origin = _copy(champion.selection_end)
            else:
                take = not conditional or champion.selection_start < other.selection_start
                if take:
                    other.selection_start = _copy(champion.selection_start)
                    other.selection_origin = _copy(champion.selection_start)
            champion.disabled = True
            champion = other

    @staticmethod
    def _tidy(document: Document) -> None:
        document.delete_disabled_cursors()
        document.remove_duplicate_cursors()

    # Vertical

    def move_up(self, document: Document, shift: bool, alt: bool) -> None:
        if alt and not shift:
            self.swap_lines(document, True)  # type: ignore[attr-defined]
            return

        if (document.cursor_multi_mode is MultiCursorMode.BOX or alt) and shift:
            _, corner = self._enter_box_mode(document)
            line_index = corner.y - 1
            if line_index < 0:
                return
            distance = self.layout.distance(document.lines[corner.y], corner.x)
            document.set_box_selection(self.layout, line_index, distance)
        else:
            if document.cursor_multi_mode is MultiCursorMode.BOX:
                self.esc(document)  # type: ignore[attr-defined]
            for cursor in document.cursors:
                if cursor.position.y == 0:
                    continue
                if cursor.selection_origin == NO_ORIGIN and shift:
                    cursor.selection_end = _copy(cursor.position)
                    cursor.selection_origin = _copy(cursor.position)
                cursor.position.y -= 1
                cursor.position.x = min(cursor.position.x, len(document.lines[cursor.position.y]))
                if shift:
                    self._order_selection(cursor, upward=True)
                    self._merge_overlaps(document, cursor, extend_end=True)
                    continue
                _clear_selection(cursor)
            self._tidy(document)

        self._finish_move(document)

    def move_down(self, document: Document, shift: bool, alt: bool) -> None:
        if alt and not shift:
            self.swap_lines(document, False)  # type: ignore[attr-defined]
            return

        if (document.cursor_multi_mode is MultiCursorMode.BOX or alt) and shift:
            _, corner = self._enter_box_mode(document)
            line_index = corner.y + 1
            if line_index >= len(document.lines):
                return
            distance = self.layout.distance(document.lines[corner.y], corner.x)
            document.set_box_selection(self.layout, line_index, distance)
        else:
            if document.cursor_multi_mode is MultiCursorMode.BOX:
                self.esc(document)  # type: ignore[attr-defined]
            last_line = len(document.lines) - 1
            for cursor in document.cursors:
                if cursor.position.y == last_line:
                    continue
                if cursor.selection_origin == NO_ORIGIN and shift:
                    cursor.selection_start = _copy(cursor.position)
                    cursor.selection_origin = _copy(cursor.position)
                cursor.position.y += 1
                cursor.position.x = min(cursor.position.x, len(document.lines[cursor.position.y]))
                if shift:
                    self._order_selection(cursor, upward=True)
                    self._merge_overlaps(document, cursor, extend_end=False)
                    continue
                _clear_selection(cursor)
            self._tidy(document)

        self._finish_move(document)

    # Horizontal

    def move_right(self, document: Document, ctrl: bool, shift: bool, alt: bool) -> None:
        if (document.cursor_multi_mode is MultiCursorMode.BOX or alt) and shift:
            _, coord = self._enter_box_mode(document)
            if ctrl:
                if coord.x == len(document.lines[coord.y]) and coord.y < len(document.lines) - 1:
                    coord = Coordinate(0, coord.y + 1)
                _, _, word_end = document.word_at(coord)
                coord.x = coord.x + 1 if coord.x == word_end.x else word_end.x
            else:
                coord.x += 1
            self._box_select_to(document, coord)
        else:
            if document.cursor_multi_mode is MultiCursorMode.BOX:
                self.end(document, False, False)
            last_line = len(document.lines) - 1
            for cursor in document.cursors:
                if cursor.selection_origin == NO_ORIGIN and shift:
                    cursor.selection_start = _copy(cursor.position)
                    cursor.selection_origin = _copy(cursor.position)
                position = cursor.position
                if position.x == len(document.lines[position.y]):
                    if position.y == last_line:
                        continue
                    position.x = 0
                    position.y += 1
                    # Once a line has been wrapped, word jumps stop for the rest.
                    ctrl = False
                elif not ctrl:
                    position.x += 1

                if ctrl:
                    _, _, word_end = document.word_at(position)
                    position.x = position.x + 1 if position.x == word_end.x else word_end.x

                if shift:
                    self._order_selection(cursor, upward=False)
                    self._merge_overlaps(document, cursor, extend_end=False)
                    continue
                _clear_selection(cursor)
            self._tidy(document)

        self._finish_move(document)

    def move_left(self, document: Document, ctrl: bool, shift: bool, alt: bool) -> None:
        if (document.cursor_multi_mode is MultiCursorMode.BOX or alt) and shift:
            _, coord = self._enter_box_mode(document)
            if coord.x == 0 and coord.y == 0:
                return
            if ctrl:
                if coord.x == 0:
                    coord.y -= 1
                    coord.x = len(document.lines[coord.y])
                _, word_start, _ = document.word_at(coord)
                if coord.x == word_start.x:
                    if coord.x != 0:
                        coord.x -= 1
                        _, word_start, _ = document.word_at(coord)
                        coord.x = word_start.x
                else:
                    coord.x = word_start.x
            else:
                coord.x -= 1
            self._box_select_to(document, coord)
        else:
            if document.cursor_multi_mode is MultiCursorMode.BOX:
                self.end(document, False, False)
            for cursor in document.cursors:
                if cursor.selection_origin == NO_ORIGIN and shift:
                    cursor.selection_end = _copy(cursor.position)
                    cursor.selection_origin = _copy(cursor.position)
                position = cursor.position
                wrapped = False
                if position.x == 0 and position.y != 0:
                    position.y -= 1
                    position.x = len(document.lines[position.y])
                    wrapped = True
                elif not ctrl and position.x > 0:
                    position.x -= 1

                if ctrl and not wrapped:
                    _, word_start, _ = document.word_at(position)
                    if position.x == word_start.x:
                        if position.x != 0:
                            position.x -= 1
                            _, word_start, _ = document.word_at(position)
                            position.x = word_start.x
                    else:
                        position.x = word_start.x

                if shift:
                    self._order_selection(cursor, upward=False)
                    self._merge_overlaps(document, cursor, extend_end=True)
                    continue
                _clear_selection(cursor)
            self._tidy(document)

        self._finish_move(document)

    # Line ends

    def home(self, document: Document, ctrl: bool, shift: bool) -> None:
        """Go to the end of the indentation, or the line start when already there."""
        if document.cursor_multi_mode is MultiCursorMode.BOX:
            self.esc(document)  # type: ignore[attr-defined]

        for cursor in document.cursors:
            if cursor.disabled:
                continue
            if cursor.selection_origin == NO_ORIGIN and shift:
                cursor.selection_end = _copy(cursor.position)
                cursor.selection_origin = _copy(cursor.position)

            new_position = Coordinate(0, cursor.position.y)
            if not ctrl:
                word, _, word_end = document.word_at(new_position)
                if word and word[0] in (" ", "\t") and word_end != cursor.position:
                    new_position = word_end
            else:
                new_position.y = 0

            if shift:
                cursor.selection_end = _copy(cursor.selection_origin)
                cursor.position = _copy(new_position)
                cursor.selection_start = _copy(new_position)
                self._merge_overlaps(document, cursor, extend_end=True, conditional=True)
                continue

            cursor.position = _copy(new_position)
            _clear_selection(cursor)

        self._tidy(document)
        self._finish_move(document)

    def end(self, document: Document, ctrl: bool, shift: bool) -> None:
        """Go to the end of the line, or of the document with ctrl."""
        if document.cursor_multi_mode is MultiCursorMode.BOX:
            self.esc(document)  # type: ignore[attr-defined]

        for cursor in document.cursors:
            if cursor.disabled:
                continue
            if cursor.selection_origin == NO_ORIGIN and shift:
                cursor.selection_start = _copy(cursor.position)
                cursor.selection_origin = _copy(cursor.position)

            line_index = len(document.lines) - 1 if ctrl else cursor.position.y
            new_position = Coordinate(len(document.lines[line_index]), line_index)

            if shift:
                cursor.selection_start = _copy(cursor.selection_origin)
                cursor.position = _copy(new_position)
                cursor.selection_end = _copy(new_position)
                self._merge_overlaps(document, cursor, extend_end=False, conditional=True)
                continue

            cursor.position = _copy(new_position)
            _clear_selection(cursor)

        self._tidy(document)
        self._finish_move(document)