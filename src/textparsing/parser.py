"""Ordered-choice recursive descent parser with backtracking.

Alternatives of a rule are tried in declaration order and the first one
that matches wins. Every successful match is returned together with the
cursor of the first token it did not consume; that pair is the only state
threaded between recursive calls.

A rule that refers to itself (``R := X R | X``) has the nested match's
parts spliced into its own instead of nesting a level, which is how
repetition is written without left recursion.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Mapping, Optional, Sequence, Tuple

from textparsing.ast_nodes import Clause, Part
from textparsing.errors import (
    NestingTooDeepError,
    NoMatchError,
    UnexpectedTokenError,
    UnknownStartRuleError,
)
from textparsing.grammar import GrammarRule, validate_grammar
from textparsing.lexer import tokenize
from textparsing.source import Location, SourceFile, Span, load_source
from textparsing.tokens import LexicalRule, Token

logger = logging.getLogger(__name__)

Match = Optional[Tuple[Clause, int]]

# Interpreter frames allowed per token on top of the caller's limit. A
# self-referential rule costs two frames per repetition, nested rules more.
_FRAMES_PER_TOKEN = 16


class Parser:
    """Parses one token list against a grammar."""

    def __init__(
        self,
        source: SourceFile,
        tokens: Sequence[Token],
        grammar: Mapping[str, GrammarRule],
    ) -> None:
        self.source = source
        self.tokens = list(tokens)
        self.grammar = grammar
        self.furthest = 0

    def parse(self, start: str) -> Clause:
        """Match ``start`` against the whole token list and return the root clause."""
        if start not in self.grammar:
            raise UnknownStartRuleError(start)

        result = self._match_from_start(start)
        if result is None:
            raise NoMatchError(start, self._furthest_location())

        clause, remainder = result
        if remainder < len(self.tokens):
            tok = self.tokens[remainder]
            raise UnexpectedTokenError(tok.type, tok.span.start)
        return clause

    def _match_from_start(self, start: str) -> Match:
        limit = sys.getrecursionlimit()
        sys.setrecursionlimit(limit + _FRAMES_PER_TOKEN * len(self.tokens))
        try:
            return self._match_rule(start, 0)
        except RecursionError:
            raise NestingTooDeepError(start, self._furthest_location()) from None
        finally:
            sys.setrecursionlimit(limit)

    # ── Matching ─────────────────────────────────────────────────

    def _match_rule(self, name: str, cursor: int) -> Match:
        rule = self.grammar.get(name)
        if rule is None:
            return None

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("parse %s at %s", name, self._preview(cursor))

        for alternative in rule.syntax:
            result = self._match_alternative(rule, alternative, cursor)
            if result is not None:
                return result
        return None

    def _match_alternative(
        self, rule: GrammarRule, alternative: tuple[str, ...], cursor: int
    ) -> Match:
        start = cursor
        parts: list[Part] = []

        for identifier in alternative:
            self.furthest = max(self.furthest, cursor)
            if cursor < len(self.tokens) and self.tokens[cursor].type == identifier:
                parts.append(self.tokens[cursor])
                cursor += 1
                continue

            result = self._match_rule(identifier, cursor)
            if result is None:
                logger.debug("fail %s: expected %s at token %d", rule.name, identifier, cursor)
                return None

            child, cursor = result
            if child.type == rule.name:
                parts.extend(child.parts)
            else:
                parts.append(child)

        clause = self._build(rule, parts, start)
        logger.debug("match %s: tokens %d..%d", rule.name, start, cursor)
        return clause, cursor

    def _build(self, rule: GrammarRule, parts: list[Part], start: int) -> Clause:
        if parts:
            span = Span.join(part.span for part in parts)
        else:
            here = self._location_at(start)
            span = Span(here, here)

        visible = tuple(p for p in parts if not (isinstance(p, Token) and p.ignore))
        clause = Clause(rule.name, visible, span)
        if rule.value is not None:
            value = rule.value(clause)
        else:
            value = [part.value for part in visible]
        return replace(clause, value=value)

    # ── Locations ────────────────────────────────────────────────

    def _location_at(self, cursor: int) -> Location:
        if cursor < len(self.tokens):
            return self.tokens[cursor].span.start
        if self.tokens:
            return self.tokens[-1].span.end
        return self.source.location(1, 1)

    def _furthest_location(self) -> Location | None:
        if not self.tokens:
            return None
        return self._location_at(self.furthest)

    def _preview(self, cursor: int) -> str:
        text = " ".join(str(tok) for tok in self.tokens[cursor : cursor + 10])
        if not text:
            return "<end of input>"
        return text if len(text) <= 100 else text[:100] + "..."


def parse(
    source: SourceFile,
    tokens: Sequence[Token],
    grammar: Mapping[str, GrammarRule],
    start: str,
) -> Clause:
    return Parser(source, tokens, grammar).parse(start)


def parse_source(
    path: str | Path,
    lexical_rules: Sequence[LexicalRule],
    grammar: Mapping[str, GrammarRule],
    start: str,
) -> Clause:
    """Validate the grammar, then load, tokenize and parse the file at ``path``."""
    validate_grammar(lexical_rules, grammar, start)
    source = load_source(path)
    tokens = tokenize(source, lexical_rules)
    return parse(source, tokens, grammar, start)
