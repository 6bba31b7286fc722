"""Clamped coordinate arithmetic and the viewport window.

All document/screen coordinate math goes through these helpers so that
nothing ever steps below zero or past a bound by accident.

Horizontal positions on screen are measured in cells, not characters: a
tab expands to the next tab stop, East Asian wide characters take two
cells and combining marks take none. Control characters are drawn as a
single placeholder cell.
"""

from dataclasses import dataclass

from wcwidth import wcwidth

from .constants import EditorConstants


def saturating_sub(value: int, amount: int) -> int:
    """Subtract, stopping at zero."""
    return value - amount if value > amount else 0


def clamp(value: int, low: int, high: int) -> int:
    """Clamp value into [low, high]. An empty range collapses to low."""
    if high < low:
        return low
    return max(low, min(value, high))


def scroll_origin(origin: int, target: int, extent: int) -> int:
    """Return the origin that brings target into [origin, origin + extent).

    Minimal scroll: an origin that already shows target is returned as is;
    otherwise it moves just far enough to align target with the near or far
    edge. The view is never recentered.
    """
    extent = max(extent, 1)
    if target < origin:
        return target
    if target >= origin + extent:
        return target - extent + 1
    return origin


def _is_control(ch: str) -> bool:
    return ord(ch) < 32 or ch == '\x7f' or wcwidth(ch) < 0


def char_cells(ch: str) -> int:
    """Cells a drawn character occupies (tabs are expanded before drawing)."""
    if _is_control(ch):
        return 1
    return wcwidth(ch)


def text_cells(text: str) -> int:
    return sum(char_cells(ch) for ch in text)


def render_line(text: str, tab_size: int = EditorConstants.TAB_SIZE) -> tuple[str, list[int]]:
    """Turn a line into what the terminal should draw.

    Returns:
        The drawn text, and the starting cell of every column in the line.
        The start list has one extra entry: the cell just past the end,
        where the append position sits.
    """
    drawn = []
    starts = []
    cell = 0
    for ch in text:
        starts.append(cell)
        if ch == '\t':
            pad = tab_size - cell % tab_size
            drawn.append(' ' * pad)
            cell += pad
        elif _is_control(ch):
            drawn.append(EditorConstants.CONTROL_GLYPH)
            cell += 1
        else:
            drawn.append(ch)
            cell += wcwidth(ch)
    starts.append(cell)
    return ''.join(drawn), starts


def clip_cells(drawn: str, origin: int, width: int) -> str:
    """Cut drawn text to cells [origin, origin + width).

    A wide character cut by either edge is replaced by blanks for its
    visible half.
    """
    out = []
    end = origin + width
    cell = 0
    for ch in drawn:
        if cell >= end:
            break
        w = char_cells(ch)
        if cell >= origin and cell + w <= end:
            out.append(ch)
        elif cell + w > origin:
            out.append(' ' * (min(cell + w, end) - max(cell, origin)))
        cell += w
    return ''.join(out)


def column_cells(text: str, col: int) -> tuple[int, int]:
    """First and last cell under column col of text.

    The append position (col == len(text)) is one cell wide.
    """
    _, starts = render_line(text)
    start = starts[col]
    if col >= len(text):
        return start, start
    return start, max(starts[col + 1] - 1, start)


@dataclass
class Viewport:
    """Document position shown at screen (0, 0), plus the window size.

    origin_row is a line number; origin_col and width are in cells.
    """
    origin_col: int = 0
    origin_row: int = 0
    width: int = 80
    height: int = 23

    def contains_row(self, row: int) -> bool:
        return self.origin_row <= row < self.origin_row + self.height

    def to_screen(self, row: int, cell: int) -> tuple[int, int]:
        """Map a line number and cell to screen (x, y), clamped to the window."""
        x = clamp(saturating_sub(cell, self.origin_col), 0, self.width - 1)
        y = clamp(saturating_sub(row, self.origin_row), 0, self.height - 1)
        return x, y

    def clip(self, text: str) -> str:
        """What a line looks like inside the horizontal window."""
        drawn, _ = render_line(text)
        return clip_cells(drawn, self.origin_col, self.width)
