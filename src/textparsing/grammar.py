"""Grammar rules as plain data, and the static grammar check."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator, Mapping, Sequence

from textparsing.errors import UndefinedSubclauseError, UnknownStartRuleError
from textparsing.tokens import LexicalRule

if TYPE_CHECKING:
    from textparsing.ast_nodes import Clause

Reducer = Callable[["Clause"], Any]


@dataclass(frozen=True)
class GrammarRule:
    """A named production: ordered alternatives and an optional value reducer.

    Each alternative is a sequence of identifiers, each naming either a
    token type or another rule.
    """

    name: str
    syntax: tuple[tuple[str, ...], ...]
    value: Reducer | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "syntax", tuple(tuple(alt) for alt in self.syntax))


class Grammar(Mapping[str, GrammarRule]):
    """Read-only mapping from rule name to rule, in declaration order."""

    def __init__(self, rules: Iterable[GrammarRule] = ()) -> None:
        self._rules: dict[str, GrammarRule] = {}
        for rule in rules:
            if rule.name in self._rules:
                raise ValueError(f"duplicate grammar rule {rule.name}")
            self._rules[rule.name] = rule

    def __getitem__(self, name: str) -> GrammarRule:
        return self._rules[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"Grammar({list(self._rules)})"


def validate_grammar(
    lexical_rules: Sequence[LexicalRule],
    grammar: Mapping[str, GrammarRule],
    start: str | None = None,
) -> None:
    """Check that every alternative only references known identifiers.

    Raises UndefinedSubclauseError for the first unknown identifier, even in
    alternatives that no input would ever reach.
    """
    valid = {lexeme.type for lexeme in lexical_rules}
    valid.update(grammar)

    for name, rule in grammar.items():
        for alternative in rule.syntax:
            for identifier in alternative:
                if identifier not in valid:
                    raise UndefinedSubclauseError(name, identifier)

    if start is not None and start not in grammar:
        raise UnknownStartRuleError(start)
