"""Text search over glyph lines, with results grouped by line blocks."""

from __future__ import annotations

import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from glyphedit.model import Coordinate, Line, LineSelectionItem, SelectionKind
from glyphedit.text import is_word_char, word_at

SEARCH_RESULT_GROUP_SIZE = 1000


class SearchResultGroups:
    """All search hits in order, plus an index of them per block of 1000 lines."""

    def __init__(self) -> None:
        self.groups: list[list[LineSelectionItem]] = [[]]
        self.result: list[LineSelectionItem] = []

    def get_group(self, line_index: int) -> list[LineSelectionItem]:
        """Hits whose span touches the block holding line_index."""
        group = line_index // SEARCH_RESULT_GROUP_SIZE
        if not 0 <= group < len(self.groups):
            raise IndexError(f"no search result group for line {line_index}")
        return self.groups[group]

    def group_exists(self, line_index: int) -> bool:
        return line_index // SEARCH_RESULT_GROUP_SIZE < len(self.groups)

    def add_result(self, item: LineSelectionItem) -> None:
        self.result.append(item)

    def update_groups(self) -> None:
        """Rebuild the per-block index from the list of hits."""
        self.groups = [[]]
        for item in self.result:
            start_group = item.start.y // SEARCH_RESULT_GROUP_SIZE
            end_group = item.end.y // SEARCH_RESULT_GROUP_SIZE
            while len(self.groups) <= end_group:
                self.groups.append([])
            for group in self.groups[start_group : end_group + 1]:
                group.append(item)

    def clear(self) -> None:
        self.groups = [[]]
        self.result = []

    def __len__(self) -> int:
        return len(self.result)

    def __getitem__(self, index: int) -> LineSelectionItem:
        return self.result[index]


class SearchState(Enum):
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"
    HAS_RESULT = "has_result"


@dataclass
class SearchInstance:
    """One background search and the results it collects."""

    search_term: str
    result: SearchResultGroups = field(default_factory=SearchResultGroups)
    state: SearchState = SearchState.RUNNING
    thread: threading.Thread | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def running(self) -> bool:
        return self.state is SearchState.RUNNING

    def stop(self, force: bool = False) -> None:
        """Ask a running search to stop; with force, mark it stopping regardless."""
        with self._lock:
            if force or self.state is SearchState.RUNNING:
                self.state = SearchState.STOPPING

    def finish(self) -> None:
        with self._lock:
            self.state = SearchState.HAS_RESULT if self.running else SearchState.STOPPED

    def join(self) -> None:
        if self.thread is not None:
            self.thread.join()


def _fold(char: str, case_sensitive: bool) -> str:
    if case_sensitive or not char.isascii():
        return char
    return char.lower()


def search_in_line(
    lines: Sequence[Line],
    case_sensitive: bool,
    term: str,
    start: Coordinate,
    offset: int = 0,
) -> Coordinate:
    """Match term[offset:] at start.

    Returns the coordinate just past the match, or start itself when the
    text there does not match.
    """
    line = lines[start.y]
    if start.x > len(line):
        return Coordinate(start.x, start.y)

    for matched, char in enumerate(term[offset:]):
        index = start.x + matched
        if index == len(line):
            return Coordinate(start.x, start.y)
        if _fold(line[index].char, case_sensitive) != _fold(char, case_sensitive):
            return Coordinate(start.x, start.y)
    return Coordinate(start.x + len(term) - offset, start.y)


def _is_whole_word(lines: Sequence[Line], start: Coordinate, end: Coordinate) -> bool:
    first = lines[start.y][start.x]
    last = lines[end.y][end.x - 1]
    match = True
    if is_word_char(first.char):
        _, word_start, _ = word_at(lines, start)
        match = word_start == start
    if match and is_word_char(last.char):
        _, _, word_end = word_at(lines, Coordinate(end.x - 1, end.y))
        match = word_end == end
    return match


def search_lines(
    lines: Sequence[Line],
    case_sensitive: bool,
    whole_word: bool,
    term: str,
    start_line: int,
    end_line: int,
    should_continue: Callable[[], bool] = lambda: True,
) -> list[LineSelectionItem]:
    """Find every occurrence of term in lines start_line..end_line.

    The scan stops early once should_continue returns False.
    """
    results: list[LineSelectionItem] = []
    if start_line >= len(lines) or start_line < 0:
        return results

    start = Coordinate(0, start_line)
    while should_continue():
        found = search_in_line(lines, case_sensitive, term, start)
        if found == start:
            if start.x >= len(lines[start.y]):
                if start.y >= end_line or start.y + 1 >= len(lines):
                    break
                start = Coordinate(0, start.y + 1)
            else:
                start = Coordinate(start.x + 1, start.y)
            continue

        if not whole_word or _is_whole_word(lines, start, found):
            results.append(
                LineSelectionItem(
                    start=Coordinate(start.x, start.y),
                    end=Coordinate(found.x, found.y),
                    kind=SelectionKind.SEARCH,
                )
            )
        start = found
    return results


def _run_search(instance: SearchInstance, lines: Sequence[Line], case_sensitive: bool, whole_word: bool) -> None:
    items = search_lines(
        lines,
        case_sensitive,
        whole_word,
        instance.search_term,
        0,
        len(lines) - 1,
        lambda: instance.running,
    )
    for item in items:
        if not instance.running:
            break
        instance.result.add_result(item)
    if instance.running:
        instance.result.update_groups()
    instance.finish()


@dataclass
class SearchDialog:
    """State of the find box of one document."""

    searching: bool = False
    case_sensitive: bool = False
    whole_word: bool = False
    active_item: int = -1
    search_term: str = ""
    instances: list[SearchInstance] = field(default_factory=list)
    search_result: SearchResultGroups | None = None
    result_info: tuple[str, int] = ("", 0)

    def search(self, lines: Sequence[Line], case_sensitive: bool, whole_word: bool, term: str) -> SearchInstance | None:
        """Stop running searches and start a new one in the background."""
        self.active_item = -1
        for instance in self.instances:
            instance.stop()
        if not term:
            return None

        instance = SearchInstance(search_term=term)
        snapshot = [list(line) for line in lines]
        instance.thread = threading.Thread(
            target=_run_search,
            args=(instance, snapshot, case_sensitive, whole_word),
            daemon=True,
        )
        self.instances.append(instance)
        instance.thread.start()
        return instance

    def collect(self, wait: bool = False) -> SearchResultGroups | None:
        """Gather finished searches.

        Without wait, finished searches are reaped and the newest result is
        adopted and returned. With wait, every search is stopped, joined and
        discarded.
        """
        if wait:
            for instance in self.instances:
                instance.stop(force=True)
            for instance in self.instances:
                instance.join()
            self.instances.clear()
            self.result_info = ("", 0)
            return None

        adopted: SearchResultGroups | None = None
        finished = [i for i in self.instances if i.state in (SearchState.STOPPED, SearchState.HAS_RESULT)]
        for instance in finished:
            instance.join()
            self.instances.remove(instance)
            if instance.state is SearchState.HAS_RESULT:
                self.search_result = instance.result
                self.result_info = (instance.search_term, len(instance.result))
                adopted = instance.result
        return adopted

    def clear_results(self) -> None:
        self.search_result = None
        self.result_info = ("", 0)

    def _activate(self, previous: int) -> LineSelectionItem | None:
        assert self.search_result is not None
        if previous != -1:
            self.search_result[previous].kind = SelectionKind.SEARCH
        if self.active_item == -1:
            return None
        item = self.search_result[self.active_item]
        item.kind = SelectionKind.SEARCH_ACTIVE
        return item

    def next_result(self) -> LineSelectionItem | None:
        """Make the following hit active; wraps to none after the last one."""
        if not self.search_result:
            return None
        previous = self.active_item
        self.active_item += 1
        if self.active_item == len(self.search_result):
            self.active_item = -1
        return self._activate(previous)

    def previous_result(self) -> LineSelectionItem | None:
        """Make the preceding hit active; from none it goes to the last hit."""
        if not self.search_result:
            return None
        previous = self.active_item
        if self.active_item == -1:
            self.active_item = len(self.search_result) - 1
        else:
            self.active_item -= 1
        return self._activate(previous)

    def close(self) -> None:
        self.searching = False
        self.active_item = -1
        self.search_term = ""
        self.collect(wait=True)
        self.clear_results()