"""Text-changing operations of the editor: typing, deleting and line breaks."""

from __future__ import annotations

from collections.abc import Sequence

from glyphedit.commands import CommandType, SubCommand
from glyphedit.document import Document
from glyphedit.layout import FontMetrics, Layout
from glyphedit.model import (
    NO_ORIGIN,
    Coordinate,
    CursorInputMode,
    Glyph,
    InsertLineMode,
    Line,
    MultiCursorMode,
    Palette,
)
from glyphedit.text import sub_line

CURSOR_BLINK = 400


def _copy(coordinate: Coordinate) -> Coordinate:
    return Coordinate(coordinate.x, coordinate.y)


def _clear_selection(document: Document, index: int) -> None:
    cursor = document.cursors[index]
    cursor.selection_start = Coordinate(0, 0)
    cursor.selection_end = Coordinate(0, 0)
    cursor.selection_origin = _copy(NO_ORIGIN)


class EditorCore:
    """Edits documents through their cursors and records how to undo each edit."""

    def __init__(self, metrics: FontMetrics | None = None) -> None:
        self.metrics = metrics if metrics is not None else FontMetrics()
        self.layout = Layout(self.metrics)
        self.palette = Palette()
        self.changes = False
        self.cursor_blink = CURSOR_BLINK

    # Helpers

    def _each_cursor(self, document: Document):
        """Yield cursor indices while tolerating cursors removed along the way."""
        i = 0
        while i < len(document.cursors):
            yield i
            i += 1

    def _record_restore(self, document: Document, index: int) -> None:
        command = document.cmd_stack.get_command(document)
        cursor = document.cursors[index]
        command.add_sub_command(
            SubCommand(CommandType.RESTORE_CURSOR, cursor_copy=cursor.copy(), cursor_index=index)
        )

    def _collapse_outside_selection(self, document: Document, index: int) -> None:
        """Drop a selection lying past the end of its line, keeping an undo record."""
        self._record_restore(document, index)
        cursor = document.cursors[index]
        cursor.position.x = cursor.selection_start.x
        _clear_selection(document, index)

    def scroll_to_cursor(self, document: Document) -> None:
        if document.cursors:
            self.layout.scroll_to(document.lines, document.cursors[-1].position)

    # Deletion

    def delete_selection(self, document: Document, index: int) -> None:
        if not document.has_selection(index):
            return
        cursor = document.cursors[index]
        self.delete_lines(document, index, _copy(cursor.selection_start), _copy(cursor.selection_end))

    def delete_lines(self, document: Document, index: int, start: Coordinate, end: Coordinate) -> None:
        """Remove the text start..end; with index -1 no undo record is kept."""
        command = document.cmd_stack.get_command(document, CommandType.DELETE_LINES) if index != -1 else None
        start, end = _copy(start), _copy(end)
        lines = document.lines
        line = lines[start.y]
        removed: list[Line] = []
        y_offset = 0

        if end.y == start.y:
            if start.x > len(line):
                return
            end.x = min(end.x, len(line))
            removed.append(sub_line(line, start.x, end.x))
            del line[start.x : end.x]
            x_offset = end.x - start.x
        else:
            removed.append(sub_line(line, start.x, len(line)))
            del line[start.x :]
            middle = end.y - start.y - 1
            if middle > 0:
                removed.extend(lines[start.y + 1 : start.y + 1 + middle])
                del lines[start.y + 1 : start.y + 1 + middle]
            following = lines[start.y + 1]
            y_offset = middle + 1
            x_offset = 0 if end.x == -1 else end.x
            removed.append(sub_line(following, 0, x_offset))
            del following[:x_offset]
            line.extend(following)
            del lines[start.y + 1]

        if command is not None:
            document.adjust_cursors(index, x_offset, y_offset)
            cursor = document.cursors[index]
            sub = SubCommand(
                CommandType.INSERT_LINES,
                cursor_copy=cursor.copy(),
                cursor_index=index,
                lines=removed,
            )
            sub.no_move = start == cursor.position
            command.add_sub_command(sub)
            cursor.position = _copy(start)
            _clear_selection(document, index)

        self.changes = True

    # Line breaks

    def enter(self, document: Document) -> None:
        document.cmd_stack.get_command(document, CommandType.ENTER)
        self.changes = True
        document.cursor_multi_mode = MultiCursorMode.NORMAL
        for i in self._each_cursor(document):
            self.enter_at(document, i)
        document.cmd_stack.finish_command(document.cursors)
        self.scroll_to_cursor(document)
        self.cursor_blink = 0

    def enter_at(self, document: Document, index: int) -> None:
        command = document.cmd_stack.get_command(document, CommandType.ENTER)
        cursor = document.cursors[index]
        if cursor.disabled:
            return
        self.delete_selection(document, index)

        line = document.lines[cursor.position.y]
        new_line: Line = line[cursor.position.x :]
        del line[cursor.position.x :]

        document.adjust_cursors(index, cursor.position.x, -1)
        cursor.position.y += 1
        cursor.position.x = 0
        document.lines.insert(cursor.position.y, new_line)

        command.add_sub_command(SubCommand(CommandType.BACKSPACE, cursor_copy=cursor.copy(), cursor_index=index))
        self.changes = True

    # Backspace and delete

    def backspace(self, document: Document) -> None:
        document.cmd_stack.get_command(document, CommandType.BACKSPACE)
        if document.cursor_multi_mode is MultiCursorMode.BOX and not document.cursors_in_text():
            self.esc(document)
            return
        for i in self._each_cursor(document):
            self.backspace_at(document, i, True)
        document.cmd_stack.finish_command(document.cursors)

    def backspace_at(self, document: Document, index: int, delete_line: bool = True) -> None:
        command = document.cmd_stack.get_command(document, CommandType.BACKSPACE)
        cursor = document.cursors[index]
        in_text = document.cursor_in_text(index)
        if cursor.disabled:
            return

        if document.has_selection(index):
            if in_text:
                self.delete_selection(document, index)
            else:
                self._collapse_outside_selection(document, index)
        else:
            position = cursor.position
            if in_text:
                lines = document.lines
                line = lines[position.y]
                if position.x == 0 and position.y != 0 and delete_line:
                    above = lines[position.y - 1]
                    x = len(above)
                    above.extend(line)
                    del lines[position.y]
                    position.x = x
                    position.y -= 1
                    command.add_sub_command(
                        SubCommand(CommandType.ENTER, cursor_copy=cursor.copy(), cursor_index=index)
                    )
                    document.adjust_cursors(index, -x, 1)
                    self.changes = True
                elif not (position.y == 0 and position.x == 0) and not (position.x == 0 and not delete_line):
                    position.x -= 1
                    glyph = line.pop(position.x)
                    document.adjust_cursors(index, 1, 0)
                    if glyph.char == "\t":
                        sub = SubCommand(CommandType.TAB, cursor_copy=cursor.copy(), cursor_index=index)
                    else:
                        sub = SubCommand(
                            CommandType.ENTER_TEXT,
                            cursor_copy=cursor.copy(),
                            cursor_index=index,
                            character=glyph,
                        )
                    command.add_sub_command(sub)
                else:
                    return
            else:
                self._record_restore(document, index)
                if position.x != 0:
                    position.x -= 1
            self.changes = True
            document.remove_duplicate_cursors()

        self.scroll_to_cursor(document)
        self.cursor_blink = 0

    def delete(self, document: Document) -> None:
        document.cmd_stack.get_command(document, CommandType.DEL)
        if document.cursor_multi_mode is MultiCursorMode.BOX and not document.cursors_in_text():
            self.esc(document)
            return
        for i in self._each_cursor(document):
            self.delete_at(document, i, document.cursor_multi_mode is MultiCursorMode.NORMAL)
        document.cmd_stack.finish_command(document.cursors)

    def delete_at(self, document: Document, index: int, delete_line: bool = True) -> None:
        command = document.cmd_stack.get_command(document, CommandType.DEL)
        cursor = document.cursors[index]
        in_text = document.cursor_in_text(index)
        if cursor.disabled:
            return

        if document.has_selection(index):
            if in_text:
                self.delete_selection(document, index)
            else:
                self._collapse_outside_selection(document, index)
        else:
            position = cursor.position
            if in_text:
                line = document.lines[position.y]
                if position.x >= len(line) and delete_line:
                    if position.y == len(document.lines) - 1:
                        return
                    line.extend(document.lines[position.y + 1])
                    del document.lines[position.y + 1]
                    document.adjust_cursors(index, -position.x, 1)
                    sub = SubCommand(CommandType.ENTER, cursor_copy=cursor.copy(), cursor_index=index)
                    sub.no_move = True
                    command.add_sub_command(sub)
                elif position.x < len(line):
                    glyph = line.pop(position.x)
                    document.adjust_cursors(index, 1, 0)
                    sub = SubCommand(
                        CommandType.ENTER_TEXT,
                        cursor_copy=cursor.copy(),
                        cursor_index=index,
                        character=glyph,
                    )
                    sub.no_move = True
                    command.add_sub_command(sub)
                else:
                    return
            else:
                self._record_restore(document, index)
            self.changes = True

        self.scroll_to_cursor(document)
        self.cursor_blink = 0

    # Box mode

    def prepare_box_mode_for_input(self, document: Document) -> None:
        for i in self._each_cursor(document):
            self.prepare_box_mode_for_input_at(document, i)

    def prepare_box_mode_for_input_at(self, document: Document, index: int) -> None:
        """Clear the selection of cursor index and pad its line with spaces up to it."""
        command = document.cmd_stack.get_command(document)
        in_text = document.cursor_in_text(index)
        cursor = document.cursors[index]

        if document.has_selection(index):
            if in_text:
                self.delete_selection(document, index)
            else:
                self._collapse_outside_selection(document, index)

        if not in_text:
            line = document.lines[cursor.position.y]
            size = len(line)
            line.extend(Glyph(" ", self.palette.default) for _ in range(cursor.position.x - size))
            command.add_sub_command(
                SubCommand(
                    CommandType.DELETE,
                    cursor_copy=cursor.copy(),
                    cursor_index=index,
                    start=Coordinate(size, cursor.position.y),
                    end=_copy(cursor.position),
                )
            )

    # Typing

    def enter_text(self, document: Document, char: str, no_move: bool = False) -> None:
        document.cmd_stack.get_command(document, CommandType.ENTER_TEXT)
        for i in self._each_cursor(document):
            self.enter_text_at(document, char, i, no_move)
        document.cmd_stack.finish_command(document.cursors)

    def enter_text_at(self, document: Document, char: str, index: int, no_move: bool = False) -> None:
        command = document.cmd_stack.get_command(document, CommandType.ENTER_TEXT)
        self.changes = True
        cursor = document.cursors[index]
        if cursor.disabled:
            return

        selection = document.has_selection(index)
        insert = not selection and document.cursor_mode is CursorInputMode.INSERT
        in_text = document.cursor_in_text(index)

        if selection:
            if in_text:
                self.delete_selection(document, index)
            else:
                self.prepare_box_mode_for_input_at(document, index)
        if document.cursor_multi_mode is MultiCursorMode.BOX and not in_text:
            self.prepare_box_mode_for_input_at(document, index)

        line = document.lines[cursor.position.y]
        replaced = Glyph("\0", 0)
        x = cursor.position.x
        if x >= len(line):
            line.append(Glyph(char, self.palette.default))
        elif insert:
            replaced = line[x]
            line[x] = Glyph(char, replaced.color)
        else:
            line.insert(x, Glyph(char, self.palette.default))
            document.adjust_cursors(index, -1, 0)

        if not no_move:
            cursor.position.x += 1

        sub = SubCommand(CommandType.BACKSPACE, cursor_copy=cursor.copy(), cursor_index=index)
        if no_move:
            sub.type = CommandType.DEL
            sub.no_move = True
        if insert:
            sub.type = CommandType.ENTER_TEXT
            if not no_move:
                sub.cursor_copy.position.x -= 1
            sub.character = replaced
            sub.no_move = True
        command.add_sub_command(sub)

        self.scroll_to_cursor(document)
        self.cursor_blink = 0

    def insert_lines(
        self,
        document: Document,
        index: int,
        lines: Sequence[Line],
        mode: InsertLineMode = InsertLineMode.DEFAULT,
    ) -> None:
        """Insert lines at cursor index; mode decides where the cursor ends up."""
        cursor = document.cursors[index]
        first_line = document.lines[cursor.position.y]
        count = len(lines)

        command = document.cmd_stack.get_command(document, CommandType.INSERT_LINES)
        sub = SubCommand(CommandType.DELETE_LINES, cursor_copy=cursor.copy(), cursor_index=index)

        if document.cursor_multi_mode is MultiCursorMode.BOX:
            self.prepare_box_mode_for_input_at(document, index)

        position = cursor.position
        first_line[position.x : position.x] = sub_line(lines[0], 0, len(lines[0]))

        if count > 1:
            x_offset = position.x + len(lines[0])
            last = lines[-1]
            tail = first_line[x_offset:]
            del first_line[x_offset:]
            added = [sub_line(line, 0, len(line)) for line in lines[1:-1]]
            added.append(sub_line(last, 0, len(last)) + tail)
            document.lines[position.y + 1 : position.y + 1] = added

            document.adjust_cursors(index, x_offset, -(count - 1))

            if mode is InsertLineMode.DEFAULT:
                position.x = len(last)
                position.y += count - 1
            else:
                cursor.selection_start = _copy(position)
                cursor.selection_end = Coordinate(len(last), position.y + count - 1)
        else:
            x_offset = len(lines[0])
            document.adjust_cursors(index, -x_offset, 0)
            if mode is InsertLineMode.DEFAULT:
                position.x += x_offset
            else:
                cursor.selection_start = _copy(position)
                cursor.selection_end = Coordinate(position.x + x_offset, position.y)

        if mode is InsertLineMode.SELECTION_START:
            cursor.position = _copy(cursor.selection_start)
            cursor.selection_origin = _copy(cursor.selection_end)
            sub.start, sub.end = _copy(cursor.selection_start), _copy(cursor.selection_end)
        elif mode is InsertLineMode.SELECTION_END:
            cursor.position = _copy(cursor.selection_end)
            cursor.selection_origin = _copy(cursor.selection_start)
            sub.start, sub.end = _copy(cursor.selection_start), _copy(cursor.selection_end)
        elif mode is InsertLineMode.START:
            sub.start, sub.end = _copy(cursor.selection_start), _copy(cursor.selection_end)
            cursor.selection_start = Coordinate(0, 0)
            cursor.selection_end = Coordinate(0, 0)
        else:
            sub.start = _copy(sub.cursor_copy.position)
            sub.end = _copy(cursor.position)

        command.add_sub_command(sub)
        self.changes = True

    # Escape

    def esc(self, document: Document) -> None:
        """Keep only the main cursor, drop selections, search and the pending command."""
        document.erase_all_cursors(True)
        _clear_selection(document, 0)
        document.cursor_multi_mode = MultiCursorMode.NORMAL
        document.search.searching = False
        document.search.active_item = -1
        document.cmd_stack.current_command = None
        document.search.clear_results()