"""Shared test helpers for the textparsing test suite."""

from __future__ import annotations

from textparsing.ast_nodes import Clause
from textparsing.grammar import Grammar, GrammarRule
from textparsing.lexer import tokenize
from textparsing.parser import parse
from textparsing.source import SourceFile
from textparsing.tokens import LexicalRule, Token


def box_value(clause: Clause) -> int:
    """Wrapping paper for one box: perimeter of the smallest face plus volume."""
    l, w, h = sorted(clause.values)
    perimeter = 2 * l + 2 * w
    volume = l * w * h
    return perimeter + volume


BOX_LEXEMES = [
    LexicalRule("dimension", r"\d+", int),
    LexicalRule("x", "x", ignore=True),
    LexicalRule("separator", r"\n", ignore=True),
]

BOX_GRAMMAR = Grammar([
    GrammarRule("box", [["dimension", "x", "dimension", "x", "dimension"]], box_value),
    GrammarRule(
        "boxList",
        [["box", "separator", "boxList"], ["box"]],
        lambda c: sum(c.values),
    ),
])


def lex(text: str, rules=BOX_LEXEMES) -> list[Token]:
    """Helper: tokenize an in-memory string."""
    return tokenize(SourceFile.from_string(text, "<test>"), rules)


def parse_text(text: str, rules, grammar, start: str) -> Clause:
    """Helper: tokenize and parse an in-memory string."""
    source = SourceFile.from_string(text, "<test>")
    return parse(source, tokenize(source, rules), grammar, start)
