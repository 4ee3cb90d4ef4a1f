"""An open file: its glyph lines, cursors, search state and undo history."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from glyphedit.commands import CommandStack
from glyphedit.layout import Layout
from glyphedit.model import (
    DEFAULT_COLOR,
    NO_ORIGIN,
    BoxModeDirection,
    Coordinate,
    Cursor,
    CursorInputMode,
    Line,
    LineSelectionItem,
    MultiCursorMode,
    SelectionKind,
)
from glyphedit.search import SearchDialog
from glyphedit.text import join_lines, split_lines, word_at


def _copy(coordinate: Coordinate) -> Coordinate:
    return Coordinate(coordinate.x, coordinate.y)


@dataclass
class Document:
    """A file being edited."""

    path: Path = field(default_factory=Path)
    text: str = ""
    lines: list[Line] = field(default_factory=lambda: [[]])
    is_open: bool = True
    changed: bool = False
    cursors: list[Cursor] = field(default_factory=list)
    longest_line_length: float = 0.0
    longest_lines: list[int] = field(default_factory=list)
    search: SearchDialog = field(default_factory=SearchDialog)
    cmd_stack: CommandStack = field(default_factory=CommandStack)
    box_mode_dir: BoxModeDirection = BoxModeDirection.NONE
    cursor_mode: CursorInputMode = CursorInputMode.NORMAL
    cursor_multi_mode: MultiCursorMode = MultiCursorMode.NORMAL

    # Loading and saving

    @classmethod
    def load(cls, path: str | Path, color: int = DEFAULT_COLOR) -> Document:
        """Read a file byte for byte into a new document."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"'{path}' does not exist")
        document = cls(path=path, text=path.read_bytes().decode("latin-1"))
        document.split(color)
        return document

    def split(self, color: int = DEFAULT_COLOR) -> None:
        self.lines = split_lines(self.text, color)

    def join(self) -> None:
        self.text = join_lines(self.lines)

    def save(self) -> bool:
        """Write the document if it changed; returns whether it was written."""
        if not self.changed:
            return False
        self.join()
        self.path.write_bytes(self.text.encode("latin-1", errors="replace"))
        self.changed = False
        return True

    # Cursors

    def main_cursor(self) -> Cursor:
        if not self.cursors:
            raise IndexError("document has no cursors")
        return next((c for c in self.cursors if c.main), self.cursors[0])

    def last_added_cursor(self) -> Cursor:
        if not self.cursors:
            raise IndexError("document has no cursors")
        return next((c for c in self.cursors if c.last), self.cursors[0])

    def add_cursor(self, cursor: Cursor) -> None:
        """Insert cursor in position order and mark it as the last added."""
        cursor.last = True
        for i in reversed(range(len(self.cursors))):
            current = self.cursors[i]
            if cursor.position > current.position:
                self.cursors.insert(i + 1, cursor)
                for earlier in self.cursors[: i + 1]:
                    earlier.last = False
                return
            current.last = False
        self.cursors.insert(0, cursor)

    def erase_all_cursors(self, exclude_main: bool = False) -> None:
        if exclude_main:
            kept = next((c for c in self.cursors if c.main), Cursor())
            self.cursors = [kept]
        else:
            self.cursors = []

    def cursor_index(self, cursor: Cursor) -> int:
        for i, other in enumerate(self.cursors):
            if other.position == cursor.position:
                return i
        raise ValueError("cursor is not in this document")

    def has_selection(self, index: int) -> bool:
        cursor = self.cursors[index]
        if cursor.disabled:
            return False
        start, end = cursor.selection_start, cursor.selection_end
        if start.y != end.y:
            return end.y > start.y
        return end.x > start.x

    def is_coordinate_in_selection(self, coordinate: Coordinate, offset: int = 0) -> Cursor | None:
        """First enabled cursor from offset on whose selection or caret holds coordinate."""
        if offset > len(self.cursors):
            raise ValueError("offset beyond the number of cursors")
        for cursor in self.cursors[offset:]:
            if cursor.disabled:
                continue
            inside = coordinate > cursor.selection_start and coordinate < cursor.selection_end
            if inside or coordinate == cursor.position:
                return cursor
        return None

    # Selections

    def selection_on_line(self, line_index: int, start: Coordinate, end: Coordinate) -> LineSelectionItem | None:
        """The part of the span start..end lying on line_index, or None."""
        if line_index == start.y:
            item_start = _copy(start)
        elif start.y <= line_index <= end.y:
            item_start = Coordinate(0, line_index)
        else:
            return None
        if line_index == end.y:
            item_end = _copy(end)
        else:
            item_end = Coordinate(len(self.lines[line_index]), line_index)
        return LineSelectionItem(item_start, item_end, SelectionKind.NONE)

    def line_selections(self, line_index: int) -> list[LineSelectionItem]:
        """Cursor selections and search hits that touch line_index."""
        selections: list[LineSelectionItem] = []
        for cursor in self.cursors:
            if cursor.selection_start == cursor.selection_end or cursor.disabled:
                continue
            item = self.selection_on_line(line_index, cursor.selection_start, cursor.selection_end)
            if item is not None:
                item.kind = SelectionKind.SELECTION
                selections.append(item)

        result = self.search.search_result
        if result is not None and result.group_exists(line_index):
            for hit in result.get_group(line_index):
                item = self.selection_on_line(line_index, hit.start, hit.end)
                if item is not None:
                    item.kind = hit.kind
                    selections.append(item)
        return selections

    def word_at(self, position: Coordinate) -> tuple[str, Coordinate, Coordinate]:
        return word_at(self.lines, position)

    def is_coordinate_in_text(self, position: Coordinate) -> bool:
        """False at the start of a line and within its leading whitespace."""
        if position.x == 0:
            return False
        word, _, end = self.word_at(Coordinate(0, position.y))
        if word[:1] in (" ", "\t") and position.x <= end.x:
            return False
        return True

    def adjust_cursor_if_in_text(self, cursor: Cursor, line_index: int, x_offset: int) -> None:
        """Shift the parts of cursor on line_index that lie past the indentation."""
        points = [cursor.position, cursor.selection_origin, cursor.selection_start, cursor.selection_end]
        if x_offset > 0:
            for point in points:
                point.x += x_offset
        for point in points:
            if line_index == point.y and self.is_coordinate_in_text(point):
                point.x += x_offset
        if x_offset > 0:
            for point in points:
                point.x -= x_offset

    def adjust_cursors(self, index: int, x_offset: int, y_offset: int) -> None:
        """Move the other cursors after an edit made at cursor index."""
        cursor = self.cursors[index]
        for j, other in enumerate(self.cursors):
            if j == index:
                continue
            if other.selection_start > cursor.selection_start:
                if other.selection_start.y == cursor.selection_start.y:
                    other.selection_start.x -= x_offset
                    if other.selection_end.y == cursor.selection_start.y:
                        other.selection_end.x -= x_offset
                else:
                    other.selection_start.y -= y_offset
                    other.selection_end.y -= y_offset
            if other.position > cursor.position:
                same_line = other.position.y == cursor.position.y
                if (same_line or y_offset > 0) and other.position.y - y_offset == cursor.position.y:
                    other.position.x -= x_offset
                other.position.y -= y_offset

    def remove_duplicate_cursors(self) -> None:
        seen: set[tuple[int, int]] = set()
        unique: list[Cursor] = []
        for cursor in self.cursors:
            key = (cursor.position.x, cursor.position.y)
            if key not in seen:
                seen.add(key)
                unique.append(cursor)
        self.cursors = unique

    def disable_intersections(self, cursor: Cursor) -> None:
        """Disable every other enabled cursor that overlaps the selection of cursor."""
        cursor.disabled = True
        start, end = cursor.selection_start, cursor.selection_end
        for other in self.cursors:
            if other.disabled:
                continue
            other.disabled = (
                (other.selection_start > start and other.selection_start < end)
                or (other.selection_end > start and other.selection_end < end)
                or (other.position >= start and other.position <= end)
            )
        cursor.disabled = False

    def delete_disabled_cursors(self) -> None:
        self.cursors = [c for c in self.cursors if not c.disabled]

    def set_selection(self, start: Coordinate, end: Coordinate, index: int = 0) -> None:
        """Select start..end with cursor index; an end of y -1 means the document end."""
        if start.y >= len(self.lines):
            return
        if end.y >= len(self.lines) or end.y == -1:
            last = len(self.lines) - 1
            end = Coordinate(len(self.lines[last]), last)
        cursor = self.cursors[index]
        cursor.selection_origin = _copy(start)
        cursor.selection_start = _copy(start)
        cursor.selection_end = _copy(end)
        cursor.position = _copy(end)

    def set_selection_line(self, line_index: int) -> None:
        if line_index >= len(self.lines):
            return
        self.set_selection(Coordinate(0, line_index), Coordinate(len(self.lines[line_index]), line_index), 0)

    def select_all(self) -> None:
        self.erase_all_cursors(True)
        self.cursor_multi_mode = MultiCursorMode.NORMAL
        self.set_selection(Coordinate(), Coordinate(-1, -1), 0)

    def cursor_in_text(self, index: int) -> bool:
        """Whether cursor index sits within the existing characters of its line."""
        cursor = self.cursors[index]
        if self.has_selection(index):
            start_line = len(self.lines[cursor.selection_start.y])
            if cursor.selection_start < cursor.selection_end:
                return cursor.selection_start.x <= start_line
            return cursor.selection_end.x <= start_line
        return cursor.position.x <= len(self.lines[cursor.position.y])

    def cursors_in_text(self) -> list[int]:
        return [i for i in range(len(self.cursors)) if self.cursor_in_text(i)]

    def cursors_not_in_text(self) -> list[int]:
        return [i for i in range(len(self.cursors)) if not self.cursor_in_text(i)]

    # Geometry

    def check_line_lengths(self, layout: Layout, first_line: int, last_line: int) -> None:
        """Update the record of the longest lines from lines first_line..last_line."""
        for i in range(first_line, last_line + 1):
            line = self.lines[i]
            length = layout.distance(line, len(line))
            count = len(self.longest_lines)
            if length > self.longest_line_length:
                self.longest_lines = [i]
                self.longest_line_length = length
            elif i in self.longest_lines:
                if length < self.longest_line_length:
                    self.longest_lines.remove(i)
                    if count == 1:
                        self.longest_line_length = 0.0
                        self.check_line_lengths(layout, 0, len(self.lines) - 1)
            elif length == self.longest_line_length:
                self.longest_lines.append(i)

    def max_cursor_distance(self, layout: Layout) -> float:
        return max(
            (layout.distance(self.lines[c.position.y], c.position.x) for c in self.cursors if not c.disabled),
            default=0.0,
        )

    def set_box_selection(self, layout: Layout, line_index: int, x_position: float) -> None:
        """Span a column selection from the main cursor's origin to line_index at x_position."""
        self.erase_all_cursors(True)
        origin = _copy(self.main_cursor().selection_origin)
        origin_distance = layout.distance(self.lines[origin.y], origin.x)

        if line_index > origin.y:
            self.box_mode_dir = BoxModeDirection.DOWN
            rows = range(origin.y + 1, line_index + 1)
        elif line_index < origin.y:
            self.box_mode_dir = BoxModeDirection.UP
            rows = range(origin.y - 1, line_index - 1, -1)
        else:
            self.box_mode_dir = BoxModeDirection.NONE
            rows = range(0)

        for i in rows:
            line = self.lines[i]
            cursor = Cursor(
                position=Coordinate(layout.coordinate_x(line, x_position, True), i),
                selection_origin=Coordinate(layout.coordinate_x(line, origin_distance, True), i),
            )
            direction = cursor.position.x - cursor.selection_origin.x
            if direction > 0:
                cursor.selection_start = _copy(cursor.selection_origin)
                cursor.selection_end = _copy(cursor.position)
            elif direction < 0:
                cursor.selection_start = _copy(cursor.position)
                cursor.selection_end = _copy(cursor.selection_origin)
            self.add_cursor(cursor)

        main = self.main_cursor()
        pos_x = layout.coordinate_x(self.lines[main.position.y], x_position, True)
        main.position.x = pos_x
        if pos_x > main.selection_origin.x:
            main.selection_start = _copy(main.selection_origin)
            main.selection_end = Coordinate(pos_x, main.position.y)
        elif pos_x < main.selection_origin.x:
            main.selection_end = _copy(main.selection_origin)
            main.selection_start = Coordinate(pos_x, main.position.y)
        else:
            main.selection_start = Coordinate(0, 0)
            main.selection_end = Coordinate(0, 0)


__all__ = ["Document", "NO_ORIGIN"]