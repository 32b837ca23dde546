"""Clause nodes produced by the parser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Union

from textparsing.source import Span
from textparsing.tokens import Token


@dataclass(frozen=True)
class Clause:
    type: str
    parts: tuple[Part, ...]
    span: Span
    value: Any = None

    def read(self) -> str:
        """Source text covered by the clause, ignored lexemes included."""
        return self.span.read()

    @property
    def values(self) -> list[Any]:
        return [part.value for part in self.parts]

    def walk(self) -> Iterator[Clause]:
        """Yield this clause and every nested clause, depth first."""
        yield self
        for part in self.parts:
            if isinstance(part, Clause):
                yield from part.walk()


Part = Union[Token, Clause]
