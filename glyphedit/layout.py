"""Mapping between glyph positions and on-screen distances."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from glyphedit.model import Coordinate, Line

TAB_SIZE = 4.0


@dataclass
class FontMetrics:
    """Measures text. The default is a monospaced font; subclass for others."""

    char_width: float = 8.0
    line_height: float = 16.0

    def text_width(self, text: str) -> float:
        return len(text) * self.char_width


@dataclass
class Layout:
    """Geometry of the editing area: font, viewport size and scroll offsets."""

    metrics: FontMetrics = field(default_factory=FontMetrics)
    window_width: float = 350.0
    window_height: float = 196.0
    scroll_x: float = 0.0
    scroll_y: float = 0.0

    @property
    def space_size(self) -> float:
        return self.metrics.text_width(" ")

    @property
    def char_advance_y(self) -> float:
        return self.metrics.line_height

    @property
    def tab_width(self) -> float:
        return TAB_SIZE * self.space_size

    def distance(self, line: Line, x: int) -> float:
        """Horizontal distance from the line start to column x, tabs expanded.

        Columns past the end of the line count one space each.
        """
        tab = self.tab_width
        offset = 0.0
        pending = ""
        length = min(x, len(line))
        for glyph in line[:max(length, 0)]:
            if glyph.char == "\t":
                offset += tab
                if not pending:
                    continue
                offset += self.metrics.text_width(pending)
                fraction = offset / tab
                offset -= (fraction - math.floor(fraction)) * tab
                pending = ""
            else:
                pending += glyph.char
        if pending:
            offset += self.metrics.text_width(pending)
        extra = x - length
        if extra:
            offset += extra * self.space_size
        return offset

    def coordinate_y(self, lines: Sequence[Line], y_position: float) -> int:
        """Line index under a vertical position, clamped to the last line."""
        return min(int(y_position / self.char_advance_y), len(lines) - 1)

    def coordinate_x(self, line: Line, x_position: float, allow_past_line: bool = False) -> int:
        """Column nearest to a horizontal position within line."""
        length = 0.0
        for i, glyph in enumerate(line):
            if glyph.char == "\t":
                diff = self.distance(line, i + 1) - length
            else:
                diff = self.metrics.text_width(glyph.char)
            length += diff
            if length - diff / 2.0 > x_position:
                return i

        if not allow_past_line:
            return len(line)

        step = self.space_size
        if step <= 0:
            raise ValueError("space width must be positive")
        column = len(line)
        while True:
            length += step
            if length - step / 2.0 > x_position:
                return column
            column += 1

    def coordinate(
        self,
        lines: Sequence[Line],
        x_position: float,
        y_position: float,
        allow_past_line: bool = False,
    ) -> Coordinate:
        """Document coordinate under a point relative to the text origin."""
        y = self.coordinate_y(lines, y_position)
        return Coordinate(self.coordinate_x(lines[y], x_position, allow_past_line), y)

    def tab_alignment_distance(self, line: Line, x: int) -> float:
        """Distance of the tab stop before column x (never negative)."""
        dist = self.distance(line, x)
        tab = self.tab_width
        fraction = dist / tab
        fraction = 1.0 if fraction < 1.0 else fraction - math.floor(fraction)
        return max(dist - fraction * tab, 0.0)

    def tab_alignment(self, lines: Sequence[Line], position: Coordinate) -> Coordinate:
        """Column of the tab stop before position, on the same line."""
        line = lines[position.y]
        target = self.tab_alignment_distance(line, position.x)
        return Coordinate(self.coordinate_x(line, target, False), position.y)

    def scroll_to(self, lines: Sequence[Line], position: Coordinate) -> tuple[float, float]:
        """Scroll just enough to bring position into view; returns (scroll_x, scroll_y)."""
        advance = self.char_advance_y
        top = self.scroll_y
        bottom = top + self.window_height - advance * 2
        left = self.scroll_x
        right = left + self.window_width - 10.0

        cx = self.distance(lines[position.y], position.x)
        cy = position.y * advance

        if cy < top:
            self.scroll_y = cy
        elif cy > bottom:
            self.scroll_y = max(cy - self.window_height + advance * 2, 0.0)

        if cx < left:
            self.scroll_x = cx
        elif cx > right:
            self.scroll_x = max(cx - self.window_width + 10.0, 0.0)

        return self.scroll_x, self.scroll_y

    def line_number_width(self, total_lines: int) -> float:
        """Width of the line-number gutter for a document of total_lines lines."""
        return self.metrics.text_width(f" {total_lines} | ")