"""In-memory line buffer."""

from typing import Iterable, Optional

from .errors import InvalidPosition


class LineBuffer:
    """Ordered sequence of text lines; there is always at least one.

    Every operation validates its own bounds and raises InvalidPosition on
    violation, even though the mode controller checks first.
    """

    def __init__(self, lines: Optional[Iterable[str]] = None):
        self._lines: list[str] = list(lines) if lines is not None else [""]
        if not self._lines:
            self._lines = [""]
        self.modified = False

    @classmethod
    def from_text(cls, text: str) -> "LineBuffer":
        """Build a buffer by splitting text on newlines."""
        return cls(text.split("\n") if text else [""])

    def text(self) -> str:
        return "\n".join(self._lines)

    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    def line_count(self) -> int:
        return len(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def _check_row(self, row: int) -> None:
        if not 0 <= row < len(self._lines):
            raise InvalidPosition(
                f"row {row} outside buffer of {len(self._lines)} lines", row=row
            )

    def _check_col(self, row: int, col: int, allow_end: bool = True) -> None:
        self._check_row(row)
        limit = len(self._lines[row]) if allow_end else len(self._lines[row]) - 1
        if not 0 <= col <= limit:
            raise InvalidPosition(
                f"column {col} outside line {row} of length {len(self._lines[row])}",
                row=row,
                col=col,
            )

    def get_line(self, row: int) -> str:
        self._check_row(row)
        return self._lines[row]

    def line_length(self, row: int) -> int:
        return len(self.get_line(row))

    def insert_char(self, row: int, col: int, ch: str) -> None:
        """Insert one character before column col (col == length appends)."""
        if len(ch) != 1:
            raise ValueError(f"expected a single character, got {ch!r}")
        self._check_col(row, col)
        line = self._lines[row]
        self._lines[row] = line[:col] + ch + line[col:]
        self.modified = True

    def delete_char(self, row: int, col: int) -> None:
        """Delete the character at column col."""
        self._check_col(row, col, allow_end=False)
        line = self._lines[row]
        self._lines[row] = line[:col] + line[col + 1:]
        self.modified = True

    def split_line(self, row: int, col: int) -> None:
        """Cut line row at col; the suffix becomes a new line at row + 1."""
        self._check_col(row, col)
        line = self._lines[row]
        self._lines[row:row + 1] = [line[:col], line[col:]]
        self.modified = True

    def merge_line_up(self, row: int) -> int:
        """Append line row onto line row - 1 and remove it.

        Returns:
            Column in the joined line where the old line row begins.
        """
        self._check_row(row)
        if row == 0:
            raise InvalidPosition("cannot merge the first line upward", row=row)
        join_col = len(self._lines[row - 1])
        self._lines[row - 1] += self._lines[row]
        del self._lines[row]
        self.modified = True
        return join_col

    def insert_line(self, row: int, content: str = "") -> None:
        """Insert a line before row; row == line_count() appends."""
        if not 0 <= row <= len(self._lines):
            raise InvalidPosition(
                f"row {row} outside insert range of {len(self._lines)} lines", row=row
            )
        self._lines.insert(row, content)
        self.modified = True

    def delete_line(self, row: int) -> None:
        """Remove line row. Removing the last remaining line empties it instead."""
        self._check_row(row)
        if len(self._lines) == 1:
            self._lines[0] = ""
        else:
            del self._lines[row]
        self.modified = True
