## kari — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Position:
    line: int       # zero-based
    column: int     # zero-based
    index: int      # byte offset in the UTF-8 encoded source

    def __str__(self):
        return f"{self.line + 1}:{self.column + 1}"


@dataclass(frozen=True)
class Span:
    start: Position
    end: Position               # position of the last character, inclusive
    stream: str | None = None   # name of the owning source stream

    @classmethod
    def at(cls, position: Position, stream: str | None = None) -> "Span":
        return cls(position, position, stream)

    def merge(self, other: "Span") -> "Span":
        """Smallest span covering both; spans only ever grow."""
        return Span(min(self.start, other.start), max(self.end, other.end), self.stream)

    def __contains__(self, other: "Span") -> bool:
        return self.start <= other.start and other.end <= self.end

    def __str__(self):
        return f"{self.stream or '<unknown>'}:{self.start}"
