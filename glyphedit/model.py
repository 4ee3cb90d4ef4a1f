"""Core value types shared by the editor: coordinates, glyphs, cursors and modes."""

from __future__ import annotations

import copy as _copy
from dataclasses import dataclass, field
from enum import Enum, IntEnum

DEFAULT_COLOR = 0xFFF4F4F4


@dataclass
class Coordinate:
    """A column/line position inside a document.

    Ordering is line-major. Following the editor's conventions, ``<`` is the
    negation of ``>``, so two equal coordinates also compare as "less than".
    """

    x: int = 0
    y: int = 0

    def __gt__(self, other: Coordinate) -> bool:
        if self.y != other.y:
            return self.y > other.y
        return self.x > other.x

    def __lt__(self, other: Coordinate) -> bool:
        return not self.__gt__(other)

    def __ge__(self, other: Coordinate) -> bool:
        return self.__gt__(other) or self == other

    def __le__(self, other: Coordinate) -> bool:
        return self.__lt__(other) or self == other


NO_ORIGIN = Coordinate(-1, -1)


@dataclass
class Glyph:
    """A single character together with the colour it is drawn in."""

    char: str
    color: int = DEFAULT_COLOR


Line = list[Glyph]


@dataclass
class Cursor:
    """A caret with an optional selection."""

    selection_start: Coordinate = field(default_factory=Coordinate)
    selection_end: Coordinate = field(default_factory=Coordinate)
    position: Coordinate = field(default_factory=Coordinate)
    selection_origin: Coordinate = field(default_factory=lambda: Coordinate(-1, -1))
    disabled: bool = False
    main: bool = False
    last: bool = False

    def copy(self) -> Cursor:
        """Return an independent copy of this cursor."""
        return _copy.deepcopy(self)

    def shift_x(self, offset: int) -> None:
        """Move the caret horizontally, and the selection too if one is anchored."""
        self.position.x += offset
        if self.selection_origin != NO_ORIGIN:
            self.selection_origin.x += offset
            self.selection_start.x += offset
            self.selection_end.x += offset


class CursorInputMode(Enum):
    NORMAL = "normal"
    INSERT = "insert"


class MultiCursorMode(Enum):
    NORMAL = "normal"
    BOX = "box"


class BoxModeDirection(Enum):
    UP = "up"
    DOWN = "down"
    NONE = "none"


class InsertLineMode(Enum):
    DEFAULT = "default"
    START = "start"
    SELECTION_START = "selection_start"
    SELECTION_END = "selection_end"


class SelectionKind(IntEnum):
    NONE = 0
    SELECTION = 1
    SEARCH = 2
    SEARCH_ACTIVE = 3


@dataclass
class LineSelectionItem:
    """A highlighted span: a selection or a search hit."""

    start: Coordinate = field(default_factory=Coordinate)
    end: Coordinate = field(default_factory=Coordinate)
    kind: SelectionKind = SelectionKind.NONE


@dataclass
class Palette:
    """Colours (ARGB packed as 0xAABBGGRR) used to draw the editor."""

    default: int = DEFAULT_COLOR
    keyword: int = 0xFF0000F0
    number: int = 0xFF303030
    string: int = 0xFF9E5817
    comment: int = 0xFF0F5904
    line_number: int = 0xFFF0F0F0
    cursor: int = 0xFFF8F8F8
    cursor_insert: int = 0x80F8F8F8
    selection: int = 0x80A06020
    search_highlight: int = 0x80002C4F
    search_active: int = 0x80F7DA5D
    current_line: int = 0x40000000
    current_line_inactive: int = 0x40808080
    current_line_edge: int = 0x40A0A0A0