"""Undo/redo bookkeeping: commands made of sub-commands, kept on a stack."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from glyphedit.model import (
    BoxModeDirection,
    Coordinate,
    Cursor,
    CursorInputMode,
    Glyph,
    Line,
    MultiCursorMode,
)


class CommandType(Enum):
    NONE = "none"
    ENTER_TEXT = "enter_text"
    BACKSPACE = "backspace"
    DEL = "del"
    DELETE_LINES = "delete_lines"
    INSERT_LINES = "insert_lines"
    ENTER = "enter"
    TAB = "tab"
    TAB_ALL_CURSORS = "tab_all_cursors"
    RESTORE_CURSOR = "restore_cursor"
    DELETE = "delete"
    SWAP_LINES = "swap_lines"


class _EditorState(Protocol):
    box_mode_dir: BoxModeDirection
    cursor_mode: CursorInputMode
    cursor_multi_mode: MultiCursorMode


@dataclass
class SubCommand:
    """One step that reverses part of an edit.

    ``no_move``, ``shift``, ``ignore_selection`` and ``up`` are different
    names for the same single flag; which one applies depends on the type.
    """

    type: CommandType
    cursor_copy: Cursor = field(default_factory=Cursor)
    cursor_index: int = -1
    start: Coordinate = field(default_factory=lambda: Coordinate(-1, -1))
    end: Coordinate = field(default_factory=lambda: Coordinate(-1, -1))
    lines: list[Line] = field(default_factory=list)
    character: Glyph = field(default_factory=lambda: Glyph("\0", 0))
    flag: bool = False

    @property
    def no_move(self) -> bool:
        return self.flag

    @no_move.setter
    def no_move(self, value: bool) -> None:
        self.flag = value

    @property
    def shift(self) -> bool:
        return self.flag

    @shift.setter
    def shift(self, value: bool) -> None:
        self.flag = value

    @property
    def ignore_selection(self) -> bool:
        return self.flag

    @ignore_selection.setter
    def ignore_selection(self, value: bool) -> None:
        self.flag = value

    @property
    def up(self) -> bool:
        return self.flag

    @up.setter
    def up(self, value: bool) -> None:
        self.flag = value


@dataclass
class Command:
    """A group of sub-commands together with the editor state they apply to."""

    type: CommandType = CommandType.NONE
    cursors: list[Cursor] = field(default_factory=list)
    sub_commands: list[SubCommand] = field(default_factory=list)
    box_mode_dir: BoxModeDirection = BoxModeDirection.NONE
    cursor_mode: CursorInputMode = CursorInputMode.NORMAL
    cursor_multi_mode: MultiCursorMode = MultiCursorMode.NORMAL

    def add_sub_command(self, sub: SubCommand) -> None:
        self.sub_commands.append(sub)

    def clear_sub_commands(self) -> None:
        self.sub_commands.clear()


@dataclass
class CommandStack:
    """History of finished commands and the command currently being recorded."""

    command_in_process: bool = False
    current_command: Command | None = None
    location: int = -1
    commands: list[Command] = field(default_factory=list)

    def get_command(self, document: _EditorState, command_type: CommandType = CommandType.NONE) -> Command:
        """Return the command being recorded, starting one if there is none."""
        if self.current_command is not None:
            return self.current_command
        self.current_command = Command(
            type=command_type,
            box_mode_dir=document.box_mode_dir,
            cursor_mode=document.cursor_mode,
            cursor_multi_mode=document.cursor_multi_mode,
        )
        return self.current_command

    def finish_command(self, cursors: list[Cursor]) -> None:
        """Push the command being recorded onto the history.

        A command without sub-commands is dropped. Raises RuntimeError when no
        command is being recorded.
        """
        command = self.current_command
        if command is None:
            raise RuntimeError("no command is being recorded")

        if not command.sub_commands:
            self.current_command = None
            return

        count = len(self.commands)
        if self.command_in_process:
            self.commands[self.location] = command
        elif self.location == count - 1:
            self.commands.append(command)
            self.location += 1
        elif self.location < count:
            del self.commands[self.location + 1 :]
            self.commands.append(command)
            self.location += 1

        command.cursors = [cursor.copy() for cursor in cursors]
        self.current_command = None