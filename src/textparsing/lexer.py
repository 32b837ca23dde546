"""Rule-driven lexer.

Lexical rules are tried in declaration order at each read position and the
first one that matches wins; there is no longest-match arbitration.
"""

from __future__ import annotations

import logging
from typing import Sequence

from textparsing.errors import UnparsableCharacterError
from textparsing.source import Location, SourceFile, Span
from textparsing.tokens import LexicalRule, Token

logger = logging.getLogger(__name__)


class Lexer:
    """Tokenizes a source file with an ordered list of lexical rules."""

    def __init__(self, source: SourceFile, rules: Sequence[LexicalRule]) -> None:
        self.source = source
        self.rules = list(rules)
        self.pos = 0
        self.line = 1
        self.col = 1
        self.tokens: list[Token] = []

    def lex(self) -> list[Token]:
        """Tokenize the entire source and return the token list."""
        text = self.source.content
        while self.pos < len(text):
            for rule in self.rules:
                matched = rule.match(text, self.pos)
                if matched is not None:
                    self._emit(rule, matched)
                    break
            else:
                raise UnparsableCharacterError(text[self.pos], self._here())

        logger.debug("lexed %d tokens from %s", len(self.tokens), self.source.path)
        return self.tokens

    # ── Helpers ───────────────────────────────────────────────────

    def _here(self) -> Location:
        return Location(self.source, self.line, self.col)

    def _emit(self, rule: LexicalRule, text: str) -> Token:
        start = self._here()
        breaks = text.count("\n")
        if breaks:
            end_col = len(text) - text.rindex("\n")
        else:
            end_col = self.col + len(text)
        self.line += breaks
        self.col = end_col
        self.pos += len(text)

        tok = Token(
            type=rule.type,
            value=rule.convert(text),
            span=Span(start, self._here()),
            ignore=rule.ignore,
            text=text,
        )
        logger.debug("token %s at %s", tok, start)
        self.tokens.append(tok)
        return tok


def tokenize(source: SourceFile, rules: Sequence[LexicalRule]) -> list[Token]:
    return Lexer(source, rules).lex()
