"""Lexical rules and the tokens they produce."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from textparsing.source import Span


@dataclass(frozen=True)
class LexicalRule:
    """One entry of the ordered lexeme table.

    ``pattern`` may be a regex string or a compiled pattern; it is always
    matched anchored at the current read position.
    """

    type: str
    pattern: str | re.Pattern[str]
    value: Callable[[str], Any] | None = None
    ignore: bool = False
    regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        regex = self.pattern if isinstance(self.pattern, re.Pattern) else re.compile(self.pattern)
        object.__setattr__(self, "regex", regex)

    def match(self, text: str, pos: int) -> str | None:
        """Return the non-empty text matched at ``pos``, or None."""
        m = self.regex.match(text, pos)
        if m is None or m.end() == pos:
            return None
        return m.group(0)

    def convert(self, text: str) -> Any:
        return self.value(text) if self.value is not None else text


@dataclass(frozen=True)
class Token:
    type: str
    value: Any
    span: Span
    ignore: bool = False
    text: str = ""

    def __str__(self) -> str:
        return f"{self.type}({self.text!r})"
