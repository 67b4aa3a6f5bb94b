"""Line-aware string accumulator for HTML output.

Appends to a per-line list of parts and joins once at the end: O(n) total
vs O(n²) for repeated string concatenation. Line boundaries are explicit so
renderers can wrap or number each line without re-scanning the output.

Thread Safety:
LineBuilder instances are local to each render() call.
No shared mutable state.

"""

from __future__ import annotations


class LineBuilder:
    """Efficient string accumulator that tracks line boundaries.

    Usage:
            >>> lb = LineBuilder()
            >>> lb.append("<span>").append("a").newline().append("b</span>")
            >>> lb.lines()
            ['<span>a', 'b</span>']
            >>> lb.build()
            '<span>a\\nb</span>'

    Thread Safety:
        Instance is local to each render() call.

    """

    __slots__ = ("_lines", "_parts")

    def __init__(self) -> None:
        """Initialize with one empty line."""
        self._lines: list[str] = []
        self._parts: list[str] = []

    def append(self, s: str) -> LineBuilder:
        """Append a string to the current line (empty strings are skipped).

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(s)
        return self

    def newline(self) -> LineBuilder:
        """Close the current line and start a new one.

        Returns:
            self for method chaining
        """
        self._lines.append("".join(self._parts))
        self._parts.clear()
        return self

    def lines(self) -> list[str]:
        """Completed lines plus the current one."""
        return [*self._lines, "".join(self._parts)]

    def build(self, sep: str = "\n") -> str:
        """Join all lines into the final string."""
        return sep.join(self.lines())

    def __len__(self) -> int:
        """Number of lines, counting the current one."""
        return len(self._lines) + 1
