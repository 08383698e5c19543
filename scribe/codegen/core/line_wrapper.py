"""
Column-limited output with deferred wrap points.

Text written after a wrap point is buffered until it is known whether the
current line stays within the column limit; if it would overflow, the
wrap point becomes a newline plus continuation indent.
"""

import enum
import io


class FlushType(enum.Enum):
    WRAP = "wrap"
    SPACE = "space"
    EMPTY = "empty"


class LineWrapper:
    """Writes text to a buffer, wrapping at `$W` / `$Z` points when lines get long."""

    def __init__(self, indent: str, column_limit: int):
        self.out = io.StringIO()
        self.indent = indent
        self.column_limit = column_limit
        self.closed = False
        self._buffer = io.StringIO()
        # characters since the most recent newline, including the buffer
        self.column = 0
        # -1 while nothing is buffered
        self._indent_level = -1
        self._next_flush = None

    def append(self, text: str) -> None:
        if self.closed:
            raise ValueError("closed")
        if self._next_flush is not None:
            next_newline = text.find("\n")
            if next_newline == -1 and self.column + len(text) <= self.column_limit:
                self._buffer.write(text)
                self.column += len(text)
                return
            wrap = next_newline == -1 or self.column + next_newline > self.column_limit
            self._flush(FlushType.WRAP if wrap else self._next_flush)

        self.out.write(text)
        last_newline = text.rfind("\n")
        if last_newline != -1:
            self.column = len(text) - last_newline - 1
        else:
            self.column += len(text)

    def wrapping_space(self, indent_level: int) -> None:
        """Emit a space, or a newline plus indent if the line gets too long."""
        if self.closed:
            raise ValueError("closed")
        if self._next_flush is not None:
            self._flush(self._next_flush)
        # the space itself is deferred until the next flush
        self.column += 1
        self._next_flush = FlushType.SPACE
        self._indent_level = indent_level

    def zero_width_space(self, indent_level: int) -> None:
        """Emit nothing, or a newline plus indent if the line gets too long."""
        if self.closed:
            raise ValueError("closed")
        if self.column == 0:
            return
        if self._next_flush is not None:
            self._flush(self._next_flush)
        self._next_flush = FlushType.EMPTY
        self._indent_level = indent_level

    def close(self) -> None:
        if self._next_flush is not None:
            self._flush(self._next_flush)
        self.closed = True

    def _flush(self, flush_type: FlushType) -> None:
        if flush_type is FlushType.WRAP:
            self.out.write("\n")
            self.out.write(self.indent * self._indent_level)
            self.column = self._indent_level * len(self.indent)
            self.column += len(self._buffer.getvalue())
        elif flush_type is FlushType.SPACE:
            self.out.write(" ")
        self.out.write(self._buffer.getvalue())
        self._buffer = io.StringIO()
        self._indent_level = -1
        self._next_flush = None

    def getvalue(self) -> str:
        return self.out.getvalue()
