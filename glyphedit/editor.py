"""The text editor: open files, tabs, clipboard, line swapping and undo/redo."""

from __future__ import annotations

import math
from collections.abc import Iterable
from pathlib import Path

from glyphedit.commands import Command, CommandType, SubCommand
from glyphedit.document import Document
from glyphedit.editing import EditorCore
from glyphedit.layout import FontMetrics
from glyphedit.model import (
    NO_ORIGIN,
    BoxModeDirection,
    Coordinate,
    Cursor,
    CursorInputMode,
    Glyph,
    InsertLineMode,
    MultiCursorMode,
)
from glyphedit.navigation import NavigationMixin
from glyphedit.text import count_lines, line_string, split_lines

TAB_SIZE = 4


def _copy(coordinate: Coordinate) -> Coordinate:
    return Coordinate(coordinate.x, coordinate.y)


class TextEdit(NavigationMixin, EditorCore):
    """A set of open documents and every editing action that can be applied to them.

    A sub-command carries one flag, ``no_move``; for tab sub-commands it means
    "shift" (and "ignore selection"), for line swaps it means "up".
    """

    def __init__(self, metrics: FontMetrics | None = None) -> None:
        super().__init__(metrics)
        self.files: list[Document] = []
        self.active_path: Path | None = None
        self.clipboard = ""
        self.status_text = ""

    # Files

    @property
    def active_document(self) -> Document | None:
        return next((d for d in self.files if d.path == self.active_path), None)

    def add_file(self, path: str | Path) -> Document:
        """Open path, or reload it and make it active when it is already open."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Failed to add '{path}' to text-edit. File does not exist.")
        for document in self.files:
            if document.path == path:
                document.text = path.read_bytes().decode("latin-1")
                document.split(self.palette.default)
                self.active_path = path
                return document
        document = Document.load(path, self.palette.default)
        document.cursors = [Cursor(main=True, last=True)]
        self.files.append(document)
        self.active_path = path
        return document

    def replace_file(self, old_path: str | Path, new_path: str | Path) -> None:
        old_path, new_path = Path(old_path), Path(new_path)
        for document in self.files:
            if document.path == old_path:
                document.path = new_path
                if self.active_path == old_path:
                    self.active_path = new_path
                break

    def save_file(self, document: Document) -> None:
        if document.save():
            self.status_text = f"Item saved : {document.path}"

    def save_all_files(self) -> None:
        for document in self.files:
            self.save_file(document)

    def drop_paths(self, paths: Iterable[str | Path]) -> None:
        for path in paths:
            self.add_file(path)

    def active_file_info(self) -> tuple[int, int, int, int] | None:
        """Column, line (both from 1), text length and line count of the active file."""
        document = self.active_document
        if document is None or not document.cursors:
            return None
        position = document.main_cursor().position
        return position.x + 1, position.y + 1, len(document.text), len(document.lines)

    # Tabs

    @staticmethod
    def _shift_all(document: Document, offset: int) -> None:
        for cursor in document.cursors:
            cursor.shift_x(offset)

    def tab(self, document: Document, shift: bool) -> None:
        command = document.cmd_stack.get_command(document, CommandType.TAB)

        if document.cursor_multi_mode is MultiCursorMode.BOX:
            in_text = document.cursors_in_text()
            not_in_text = document.cursors_not_in_text()
            if not in_text:
                if shift:
                    self._shift_all(document, -TAB_SIZE)
                    if document.cursors_in_text():
                        while document.cursors_in_text():
                            self._shift_all(document, 1)
                        self._shift_all(document, -1)
                else:
                    self._shift_all(document, TAB_SIZE)
            else:
                all_whitespace = True
                if shift:
                    for index in in_text:
                        cursor = document.cursors[index]
                        pos = cursor.selection_start if document.has_selection(index) else cursor.position
                        if pos.x == 0 or pos.x > len(document.lines[pos.y]):
                            all_whitespace = False
                            break
                        if document.lines[pos.y][pos.x - 1].char not in (" ", "\t"):
                            all_whitespace = False
                            break

                if all_whitespace:
                    for index in in_text:
                        self.tab_at(document, shift, index)

                    first = document.cursors[in_text[0]]
                    selection = document.has_selection(in_text[0])
                    pos = first.selection_start if selection else first.position
                    x_dist = self.layout.distance(document.lines[pos.y], pos.x)

                    for index in not_in_text:
                        cursor = document.cursors[index]
                        self._record_restore(document, index)
                        new_x = self.layout.coordinate_x(document.lines[cursor.position.y], x_dist, True)
                        diff = new_x - (cursor.selection_start.x if selection else cursor.position.x)
                        cursor.position.x += diff
                        if selection:
                            cursor.selection_start.x += diff
                            cursor.selection_end.x += diff
                            cursor.selection_origin.x += diff

                    sub = SubCommand(CommandType.TAB_ALL_CURSORS, cursor_index=-1)
                    sub.no_move = not shift
                    command.clear_sub_commands()
                    command.add_sub_command(sub)
        else:
            for i in self._each_cursor(document):
                self.tab_at(document, shift, i)

        document.cmd_stack.finish_command(document.cursors)

    def _record_tab(self, document: Document, index: int, flag: bool) -> None:
        command = document.cmd_stack.get_command(document, CommandType.TAB)
        sub = SubCommand(CommandType.TAB, cursor_copy=document.cursors[index].copy(), cursor_index=index)
        sub.no_move = flag
        command.add_sub_command(sub)

    def _unindent_lines(self, document: Document, index: int) -> None:
        cursor = document.cursors[index]
        did_something = False
        for j in range(cursor.selection_start.y, cursor.selection_end.y + 1):
            line = document.lines[j]
            if not line:
                continue
            word, word_start, word_end = document.word_at(Coordinate(0, j))
            if not word or word[0] not in (" ", "\t"):
                continue
            new = _copy(self.layout.tab_alignment(document.lines, word_end))
            if new == word_end:
                new.x -= 1
            new.x = max(new.x, word_start.x)
            del line[new.x : word_end.x]
            document.adjust_cursor_if_in_text(cursor, j, new.x - word_end.x)
            did_something = True
        if did_something:
            self._record_tab(document, index, False)
        self.changes = True

    def tab_at(self, document: Document, shift: bool, index: int, ignore_selection: bool = False) -> None:
        """Indent (or with shift, unindent) at cursor index."""
        document.cmd_stack.get_command(document, CommandType.TAB)
        cursor = document.cursors[index]
        if cursor.disabled:
            return
        selection = document.has_selection(index)

        if shift:
            if selection and cursor.selection_start.y != cursor.selection_end.y:
                self._unindent_lines(document, index)
                return

            pos = _copy(cursor.selection_start if selection else cursor.position)
            line = document.lines[cursor.position.y]
            if pos.x == 0 or pos.x > len(line):
                return
            if line[pos.x - 1].char not in (" ", "\t"):
                return

            _, start, end = document.word_at(Coordinate(pos.x - 1, pos.y))
            if end != pos:
                if end > pos:
                    end = _copy(pos)
                else:
                    start = end
                    end = _copy(pos)

            new = _copy(self.layout.tab_alignment(document.lines, end))
            if new == end:
                new.x -= 1
            new.x = max(new.x, start.x)
            del line[new.x : end.x]

            offset = end.x - new.x
            cursor.position.x -= offset
            if selection:
                cursor.selection_origin.x -= offset
                cursor.selection_start.x -= offset
                cursor.selection_end.x -= offset
            document.adjust_cursors(index, offset, 0)
            self._record_tab(document, index, True)
            self.changes = True
        elif document.cursor_multi_mode is MultiCursorMode.BOX:
            self._record_tab(document, index, True)
            pos = cursor.selection_start if selection else cursor.position
            document.lines[pos.y].insert(pos.x, Glyph("\t", self.palette.default))
            cursor.position.x += 1
            if selection:
                cursor.selection_start.x += 1
                cursor.selection_end.x += 1
                cursor.selection_origin.x += 1
            self.changes = True
        else:
            if selection and not ignore_selection:
                if cursor.selection_start.y == cursor.selection_end.y:
                    self.delete_selection(document, index)
                    selection = document.has_selection(index)
                else:
                    for j in range(cursor.selection_start.y, cursor.selection_end.y + 1):
                        document.lines[j].insert(0, Glyph("\t", self.palette.default))
                        document.adjust_cursor_if_in_text(cursor, j, 1)
                    self._record_tab(document, index, True)
                    self.changes = True
                    return

            line = document.lines[cursor.position.y]
            if selection:
                line.insert(cursor.selection_start.x, Glyph("\t", self.palette.default))
                document.adjust_cursors(index, -1, 0)
                cursor.position.x += 1
                cursor.selection_start.x += 1
                cursor.selection_end.x += 1
                self._record_tab(document, index, True)
                self.changes = True
                return

            if document.cursor_mode is CursorInputMode.NORMAL:
                line.insert(cursor.position.x, Glyph("\t", self.palette.default))
                document.adjust_cursors(index, -1, 0)
            else:
                tab_width = TAB_SIZE * self.metrics.text_width(" ")
                current = self.layout.distance(line, cursor.position.x) + tab_width
                if tab_width > 0:
                    fraction = current / tab_width
                    current -= tab_width * (fraction - math.floor(fraction))
                new = Coordinate(self.layout.coordinate_x(line, current, False), cursor.position.y)
                self.delete_lines(document, index, _copy(cursor.position), new)
                line.insert(cursor.position.x, Glyph("\t", self.palette.default))

            cursor.position.x += 1
            cursor.selection_origin = _copy(NO_ORIGIN)
            command = document.cmd_stack.get_command(document, CommandType.TAB)
            command.add_sub_command(SubCommand(CommandType.BACKSPACE, cursor_copy=cursor.copy(), cursor_index=index))
            self.changes = True

        self.scroll_to_cursor(document)
        self.cursor_blink = 0

    # Clipboard

    def copy(self, document: Document, cut: bool) -> None:
        """Put the selections (or the current line) on the clipboard; with cut, remove them."""
        document.cmd_stack.get_command(document)
        parts: list[str] = []

        for i in self._each_cursor(document):
            cursor = document.cursors[i]
            if cursor.disabled:
                continue
            if document.has_selection(i):
                start, end = cursor.selection_start, cursor.selection_end
                if start.y == end.y:
                    parts.append(line_string(document.lines[start.y], start.x, end.x))
                else:
                    first = document.lines[start.y]
                    parts.append(line_string(first, start.x, len(first)))
                    for line in document.lines[start.y + 1 : end.y]:
                        parts.append(line_string(line, 0, len(line)))
                    parts.append(line_string(document.lines[end.y], 0, end.x))
                if cut:
                    self.delete_selection(document, i)
            elif len(document.cursors) == 1:
                y = cursor.position.y
                line = document.lines[y]
                text = line_string(line, 0, len(line))
                self._record_restore(document, i)
                if cut:
                    if y + 1 < len(document.lines):
                        self.delete_lines(document, i, Coordinate(0, y), Coordinate(0, y + 1))
                    else:
                        self.delete_lines(document, i, Coordinate(0, y), Coordinate(len(line), y))
                parts.append(text)
            elif cut:
                self.delete_at(document, i, True)

        self.clipboard = "\n".join(parts)
        document.cmd_stack.finish_command(document.cursors)

    def paste(self, document: Document) -> None:
        command = document.cmd_stack.get_command(document)
        if not self.clipboard:
            return

        clip_lines = split_lines(self.clipboard, self.palette.default)
        clip_count = count_lines(self.clipboard)
        num_cursors = len(document.cursors)

        if document.cursor_multi_mode is MultiCursorMode.BOX:
            self.prepare_box_mode_for_input(document)
            if num_cursors >= clip_count:
                last = num_cursors - 1
                for i in range(clip_count):
                    index = i if document.box_mode_dir is BoxModeDirection.DOWN else last - i
                    cursor = document.cursors[index]
                    clip = clip_lines[i]
                    line = document.lines[cursor.position.y]
                    line[cursor.position.x : cursor.position.x] = [Glyph(g.char, g.color) for g in clip]
                    command.add_sub_command(
                        SubCommand(
                            CommandType.DELETE_LINES,
                            cursor_copy=cursor.copy(),
                            cursor_index=index,
                            start=_copy(cursor.position),
                            end=Coordinate(cursor.position.x + len(clip), cursor.position.y),
                        )
                    )
                self.changes = True
                document.cmd_stack.finish_command(document.cursors)
                return

        for i in range(num_cursors):
            if i >= len(document.cursors):
                break
            if document.cursors[i].disabled:
                continue
            if document.has_selection(i):
                self.delete_selection(document, i)
            self.insert_lines(document, i, clip_lines)

        document.cmd_stack.finish_command(document.cursors)
        self.scroll_to_cursor(document)

    # Moving lines

    def swap_lines(self, document: Document, up: bool) -> None:
        """Move the current line (or selected lines) one line up or down."""
        command = document.cmd_stack.get_command(document, CommandType.SWAP_LINES)
        if len(document.cursors) > 1 and document.cursor_multi_mode is MultiCursorMode.NORMAL:
            document.erase_all_cursors(True)

        selection = document.has_selection(0)
        cursor = document.cursors[0]
        back = document.cursors[-1]
        box = document.cursor_multi_mode is MultiCursorMode.BOX and document.box_mode_dir is not BoxModeDirection.NONE
        step = -1 if up else 1

        if box:
            if up:
                line_to_move, destination = cursor.position.y - 1, back.position.y + 1
                if line_to_move == -1:
                    return
            else:
                line_to_move, destination = back.position.y + 1, cursor.position.y
                if line_to_move + 1 >= len(document.lines):
                    return
            moved = document.cursors
        else:
            if up:
                if selection:
                    line_to_move, destination = cursor.selection_start.y - 1, cursor.selection_end.y + 1
                else:
                    line_to_move, destination = cursor.position.y - 1, cursor.position.y + 1
                if line_to_move == -1:
                    return
            else:
                if selection:
                    line_to_move, destination = cursor.selection_end.y + 1, cursor.selection_start.y
                else:
                    line_to_move, destination = cursor.position.y, cursor.position.y + 2
                if line_to_move + 1 >= len(document.lines):
                    return
            moved = [cursor]

        for current in moved:
            current.position.y += step
            if selection:
                current.selection_start.y += step
                current.selection_end.y += step
                current.selection_origin.y += step
        if box:
            selection = True

        lines = document.lines
        lines.insert(destination, list(lines[line_to_move]))
        del lines[line_to_move + (1 if not up and selection else 0)]

        sub = SubCommand(CommandType.SWAP_LINES)
        sub.no_move = not up
        command.add_sub_command(sub)
        document.cmd_stack.finish_command(document.cursors)
        self.scroll_to_cursor(document)
        self.changes = True

    # History

    def undo(self, document: Document) -> None:
        stack = document.cmd_stack
        if stack.location == -1 or stack.location >= len(stack.commands):
            return
        command = stack.commands[stack.location]
        stack.command_in_process = True
        self.execute_command(document, command)
        stack.location -= 1
        stack.command_in_process = False

    def redo(self, document: Document) -> None:
        stack = document.cmd_stack
        if stack.location + 1 >= len(stack.commands):
            return
        stack.location += 1
        command = stack.commands[stack.location]
        stack.command_in_process = True
        self.execute_command(document, command)
        stack.command_in_process = False

    def _insert_mode_for(self, sub: SubCommand) -> InsertLineMode:
        saved = sub.cursor_copy
        if saved.selection_origin != NO_ORIGIN:
            if saved.selection_start == saved.position:
                return InsertLineMode.SELECTION_START
            return InsertLineMode.SELECTION_END
        if sub.no_move:
            return InsertLineMode.START
        return InsertLineMode.DEFAULT

    def _replay_restore(self, document: Document, command: Command, sub: SubCommand, old_cursors: list[Cursor]) -> None:
        index = sub.cursor_index
        document.cursors[index] = sub.cursor_copy.copy()
        stack = document.cmd_stack
        if command.type is CommandType.BACKSPACE:
            inverse = SubCommand(CommandType.BACKSPACE, cursor_copy=sub.cursor_copy.copy(), cursor_index=index)
            stack.get_command(document, CommandType.BACKSPACE).add_sub_command(inverse)
        elif command.type in (CommandType.DEL, CommandType.DELETE_LINES):
            inverse = SubCommand(CommandType.DEL, cursor_copy=sub.cursor_copy.copy(), cursor_index=index)
            stack.get_command(document, CommandType.DEL).add_sub_command(inverse)
        elif command.type is CommandType.NONE and document.cursor_multi_mode is MultiCursorMode.BOX:
            inverse = SubCommand(CommandType.RESTORE_CURSOR, cursor_copy=old_cursors[index].copy(), cursor_index=index)
            pending = stack.get_command(document)
            pending.type = CommandType.NONE
            pending.add_sub_command(inverse)

    def execute_command(self, document: Document, command: Command) -> None:
        """Apply the sub-commands of command in reverse, recording the inverse command."""
        stack = document.cmd_stack
        old_cursors = [c.copy() for c in document.cursors]

        document.box_mode_dir = command.box_mode_dir
        document.cursor_multi_mode = command.cursor_multi_mode
        document.cursors = [c.copy() for c in command.cursors]

        for sub in reversed(command.sub_commands):
            kind = sub.type
            index = sub.cursor_index
            if kind is CommandType.BACKSPACE:
                self.backspace_at(document, index, True)
            elif kind is CommandType.INSERT_LINES:
                self.insert_lines(document, index, sub.lines, self._insert_mode_for(sub))
                if document.cursor_multi_mode is MultiCursorMode.BOX:
                    document.cursors[index] = sub.cursor_copy.copy()
            elif kind is CommandType.DELETE_LINES:
                self.delete_lines(document, index, sub.start, sub.end)
            elif kind is CommandType.ENTER:
                self.enter_at(document, index)
                if sub.no_move:
                    document.cursors[index] = sub.cursor_copy.copy()
            elif kind is CommandType.ENTER_TEXT:
                previous = document.cursor_mode
                document.cursor_mode = (
                    CursorInputMode.NORMAL if command.type is CommandType.BACKSPACE else command.cursor_mode
                )
                if command.cursor_mode is CursorInputMode.INSERT:
                    document.cursors[index] = sub.cursor_copy.copy()
                self.enter_text_at(document, sub.character.char, index, sub.no_move)
                document.cursor_mode = previous
            elif kind is CommandType.DEL:
                self.delete_at(document, index, True)
            elif kind is CommandType.TAB:
                previous = document.cursor_mode
                document.cursor_mode = CursorInputMode.NORMAL
                self.tab_at(document, sub.no_move, index, sub.no_move)
                document.cursor_mode = previous
            elif kind is CommandType.TAB_ALL_CURSORS:
                self.tab(document, sub.no_move)
            elif kind is CommandType.RESTORE_CURSOR:
                self._replay_restore(document, command, sub, old_cursors)
            elif kind is CommandType.DELETE:
                self.delete_lines(document, -1, sub.start, sub.end)
            elif kind is CommandType.SWAP_LINES:
                self.swap_lines(document, sub.no_move)

        if stack.current_command is not None:
            stack.finish_command(document.cursors)