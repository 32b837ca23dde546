"""Source file representation and span tracking for diagnostics."""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from pathlib import Path
from typing import Iterable


class SourceFile:
    """A loaded source file with line access for diagnostics."""

    def __init__(self, path: str, content: str) -> None:
        self.path = path
        self.content = content
        self.lines = content.split("\n")
        self._line_offsets: list[int] = []
        offset = 0
        for line in self.lines:
            self._line_offsets.append(offset)
            offset += len(line) + 1

    @classmethod
    def load(cls, path: str | Path) -> SourceFile:
        """Read a whole file from disk. Raises OSError if unreadable."""
        content = Path(path).read_text(encoding="utf-8")
        return cls(str(path), content)

    @classmethod
    def from_string(cls, content: str, path: str = "<string>") -> SourceFile:
        return cls(path, content)

    def __repr__(self) -> str:
        return f"SourceFile({self.path!r}, {len(self.content)} chars, {len(self.lines)} lines)"

    def line_at(self, n: int) -> str:
        """Return the 1-indexed line, or empty string if out of range."""
        if 1 <= n <= len(self.lines):
            return self.lines[n - 1]
        return ""

    def location(self, line: int, col: int) -> Location:
        return Location(self, line, col)

    def end_location(self) -> Location:
        """Location just past the last character of the file."""
        return Location(self, len(self.lines), len(self.lines[-1]) + 1)

    def offset_of(self, loc: Location) -> int:
        return self._line_offsets[loc.line - 1] + loc.col - 1

    def read(self, start: Location, end: Location) -> str:
        """Extract the text between two locations, line breaks included."""
        return self.content[self.offset_of(start) : self.offset_of(end)]

    def span_text(self, span: Span) -> str:
        """Extract the text covered by a span."""
        return self.read(span.start, span.end)


def load_source(path: str | Path) -> SourceFile:
    return SourceFile.load(path)


@total_ordering
@dataclass(frozen=True)
class Location:
    """A 1-based line/column position within a source file."""

    file: SourceFile
    line: int
    col: int

    def __lt__(self, other: Location) -> bool:
        return (self.line, self.col) < (other.line, other.col)

    def __str__(self) -> str:
        return f"{self.file.path}:{self.line}:{self.col}"


@dataclass(frozen=True)
class Span:
    """A range within a source file. The end column is exclusive."""

    start: Location
    end: Location

    def __post_init__(self) -> None:
        if self.start.file is not self.end.file:
            raise ValueError("Attempted to create a span between two distinct files")
        if self.end < self.start:
            raise ValueError(f"Span end {self.end} is before its start {self.start}")

    @property
    def file(self) -> SourceFile:
        return self.start.file

    def __str__(self) -> str:
        return str(self.start)

    def read(self) -> str:
        return self.file.span_text(self)

    @staticmethod
    def join(spans: Iterable[Span]) -> Span:
        """Smallest span covering every given span of the same file."""
        spans = list(spans)
        if not spans:
            raise ValueError("Can't join an empty list of spans")
        file = spans[0].file
        if any(s.file is not file for s in spans):
            raise ValueError("Can't join spans from multiple files")
        start = min(s.start for s in spans)
        end = max(s.end for s in spans)
        return Span(start, end)
