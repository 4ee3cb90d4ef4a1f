"""Multi-cursor text editing core: glyph lines, box selection, undo/redo and background search."""

__version__ = "0.1.0"