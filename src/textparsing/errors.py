"""Parse failures and their caret-style diagnostic rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from textparsing.source import Location


# ANSI color codes
_BOLD = "\033[1m"
_RED = "\033[1;31m"
_RESET = "\033[0m"


@dataclass(frozen=True)
class Diagnostic:
    """Structured description of a failure: what kind, what, and where."""

    code: str
    message: str
    location: Location | None = None


class TextParsingError(Exception):
    """Base class for every failure raised by the engine."""

    code = "E000"

    def __init__(self, message: str, location: Location | None = None) -> None:
        self.message = message
        self.location = location
        super().__init__(f"{location}: {message}" if location is not None else message)

    @property
    def diagnostic(self) -> Diagnostic:
        return Diagnostic(self.code, self.message, self.location)


class UnparsableCharacterError(TextParsingError):
    """No lexical rule matches at some position of the input."""

    code = "E100"

    def __init__(self, character: str, location: Location) -> None:
        self.character = character
        super().__init__(f"unparsable character {character!r}", location)


class GrammarError(TextParsingError):
    """The grammar itself is inconsistent; raised before any input is read."""


class UndefinedSubclauseError(GrammarError):
    code = "E200"

    def __init__(self, rule: str, identifier: str) -> None:
        self.rule = rule
        self.identifier = identifier
        super().__init__(
            f"Grammar rule for {rule} references invalid sub-clause {identifier}"
        )


class UnknownStartRuleError(GrammarError):
    code = "E201"

    def __init__(self, rule: str) -> None:
        self.rule = rule
        super().__init__(f"start rule {rule} is not defined by the grammar")


class UnexpectedTokenError(TextParsingError):
    """The start rule matched, but tokens were left over."""

    code = "E300"

    def __init__(self, token_type: str, location: Location) -> None:
        self.token_type = token_type
        super().__init__(f"unexpected token {token_type}", location)


class NoMatchError(TextParsingError):
    """The start rule had no matching alternative.

    ``location``, when present, is the furthest token the search examined
    and is only a hint: backtracking discards the failed branches.
    """

    code = "E301"

    def __init__(self, rule: str, location: Location | None = None) -> None:
        self.rule = rule
        super().__init__(f"input does not match rule {rule}", location)


class NestingTooDeepError(TextParsingError):
    """Matching recursed past what the interpreter stack can hold."""

    code = "E302"

    def __init__(self, rule: str, location: Location | None = None) -> None:
        self.rule = rule
        super().__init__(f"input nests too deeply to match rule {rule}", location)


class ConfigError(TextParsingError):
    """A textparsing.toml file describes an invalid grammar."""

    code = "E400"


class DiagnosticRenderer:
    """Renders failures as a header, the source line, and a caret."""

    def __init__(self, *, color: bool = True) -> None:
        self.color = color

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def render(self, error: TextParsingError | Diagnostic) -> str:
        diag = error.diagnostic if isinstance(error, TextParsingError) else error
        loc = diag.location
        if loc is None:
            return diag.message

        where = f"{loc.file.path}:{loc.line}:{loc.col}"
        lines = [
            f"Parsing failed at {self._c(_BOLD)}{where}{self._c(_RESET)}: {diag.message}",
            loc.file.line_at(loc.line),
            f"{' ' * (loc.col - 1)}{self._c(_RED)}^{self._c(_RESET)}",
        ]
        return "\n".join(lines)
