# glyphedit

The editing core of a code editor, with no screen attached. Text is held as lines
of coloured glyphs. Several cursors can be active at once, including box (column)
selections. Every edit is recorded on an undo/redo command stack. Each search runs
in a background thread.

## Install

```
pip install glyphedit
```

## Modules

- `glyphedit.model`: value types. `Coordinate` (column `x`, line `y`, ordered line
  first), `Glyph` (a character and its colour), `Cursor` (caret plus selection start,
  end and origin, with `copy()` and `shift_x()`), `LineSelectionItem`, `Palette`, and
  the enums `CursorInputMode`, `MultiCursorMode`, `BoxModeDirection`, `InsertLineMode`
  and `SelectionKind`.
- `glyphedit.text`: `split_lines`, `join_lines`, `count_lines`, `line_string` and
  `sub_line` convert between text and glyph lines. `word_at` finds the run of
  identifier characters, operators or whitespace under a position.
- `glyphedit.layout`: `FontMetrics` measures text. By default it assumes a monospaced
  font of 8 by 16 pixels; subclass it to use other measurements. `Layout` turns
  columns into pixel distances with 4-space tab stops, finds the column under a pixel
  position, computes tab alignment and scroll offsets (`scroll_to`), and sizes the
  line-number gutter.
- `glyphedit.document`: `Document` is one open file. It holds the path, text, lines,
  cursors, search state and command stack. `Document.load` reads a file byte for byte
  (each byte becomes one character). `save` writes the file only when it has changed.
  Its other methods manage cursors and selections, such as `add_cursor`,
  `select_all`, `set_box_selection` and `line_selections`.
- `glyphedit.commands`: `CommandType`, `SubCommand`, `Command` and `CommandStack`,
  which together record undoable edits.
- `glyphedit.search`: `search_lines` and `search_in_line` search lines, optionally
  case-sensitive or whole-word. `SearchDialog.search` runs a search in a thread, and
  `collect` gathers its hits into a `SearchResultGroups`, indexed per block of 1000
  lines. `next_result` and `previous_result` step through the hits.
- `glyphedit.editing`: `EditorCore` handles typing (`enter_text`, which honours
  insert/overwrite mode), `enter`, `backspace`, `delete`, `insert_lines`,
  `delete_lines` and `esc`.
- `glyphedit.navigation`: `NavigationMixin` provides the arrow keys, with or without
  shift, ctrl (word jumps) and alt (box selection or line swap), plus `home` and `end`.
- `glyphedit.editor`: `TextEdit` puts these parts together. It opens files
  (`add_file`, `drop_paths`), renames them (`replace_file`) and saves them
  (`save_file`, `save_all_files`). It also provides `tab`, `copy`, `paste`,
  `swap_lines`, `undo` and `redo`, and reports column, line, text length and line
  count through `active_file_info`.

## Example

```python
from glyphedit.editor import TextEdit
from glyphedit.layout import FontMetrics

editor = TextEdit(FontMetrics())
doc = editor.add_file("notes.txt")

editor.enter_text(doc, "x", False)
editor.undo(doc)
editor.redo(doc)

doc.changed = True
editor.save_file(doc)
print(editor.status_text)        # "Item saved : notes.txt"
print(editor.active_file_info()) # (column, line, text length, line count)
```

## What it does not do

- There is no window, no drawing and no keyboard or mouse handling. A front end
  calls the `TextEdit` methods that match each key and reads the lines, cursors and
  `line_selections` to draw the view.
- `copy` and `paste` use the string `TextEdit.clipboard`, not the system clipboard.
- There is no syntax highlighting. `Palette` has colours for keywords, numbers,
  strings and comments, but new glyphs always get the default colour.
- `save_file` does not mark a document as changed. A front end sets
  `Document.changed` after an edit, as the example shows.
- There is no command-line program.

## Tests

```
pip install "glyphedit[test]"
pytest
```