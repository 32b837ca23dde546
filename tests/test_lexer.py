"""Tests for the rule-driven lexer."""

from __future__ import annotations

import re

import pytest

from textparsing.errors import UnparsableCharacterError
from textparsing.lexer import Lexer
from textparsing.source import SourceFile
from textparsing.tokens import LexicalRule
from tests.helpers import BOX_LEXEMES, lex


def positions(tok) -> tuple[int, int, int, int]:
    s, e = tok.span.start, tok.span.end
    return (s.line, s.col, e.line, e.col)


class TestLexerBasic:
    def test_empty_source(self):
        assert lex("") == []

    def test_box_line(self):
        result = [(t.type, t.value, t.ignore) for t in lex("2x3x4")]
        assert result == [
            ("dimension", 2, False),
            ("x", "x", True),
            ("dimension", 3, False),
            ("x", "x", True),
            ("dimension", 4, False),
        ]

    def test_value_defaults_to_text(self):
        rules = [LexicalRule("word", r"[a-z]+")]
        tokens = lex("hello", rules)
        assert tokens[0].value == "hello"
        assert tokens[0].text == "hello"

    def test_compiled_pattern(self):
        rules = [LexicalRule("word", re.compile(r"[a-z]+", re.IGNORECASE), str.lower)]
        assert [t.value for t in lex("HeLLo", rules)] == ["hello"]

    def test_first_rule_wins_over_longer_match(self):
        rules = [
            LexicalRule("short", r"ab"),
            LexicalRule("long", r"abc"),
            LexicalRule("c", r"c"),
        ]
        assert [t.type for t in lex("abc", rules)] == ["short", "c"]

    def test_empty_match_is_skipped(self):
        rules = [LexicalRule("maybe", r"a*"), LexicalRule("b", r"b")]
        assert [t.type for t in lex("ab", rules)] == ["maybe", "b"]

    def test_lexer_instance(self):
        source = SourceFile.from_string("1x2", "<test>")
        lexer = Lexer(source, BOX_LEXEMES)
        tokens = lexer.lex()
        assert len(tokens) == 3
        assert lexer.pos == 3


class TestLexerPositions:
    def test_single_line(self):
        tokens = lex("12x345")
        assert positions(tokens[0]) == (1, 1, 1, 3)
        assert positions(tokens[1]) == (1, 3, 1, 4)
        assert positions(tokens[2]) == (1, 4, 1, 7)

    def test_separator_moves_to_next_line(self):
        tokens = lex("1x1x1\n22x2x2")
        sep = tokens[5]
        assert sep.type == "separator"
        assert positions(sep) == (1, 6, 2, 1)
        assert positions(tokens[6]) == (2, 1, 2, 3)

    def test_one_embedded_break(self):
        rules = [LexicalRule("blob", r"[a-z\n]+"), LexicalRule("semi", ";")]
        tokens = lex("ab\ncd;", rules)
        assert positions(tokens[0]) == (1, 1, 2, 3)
        assert positions(tokens[1]) == (2, 3, 2, 4)

    def test_many_embedded_breaks(self):
        rules = [LexicalRule("blob", r"[a-z\n]+"), LexicalRule("semi", ";")]
        tokens = lex("xy;a\n\nbcd;", rules)
        assert positions(tokens[1]) == (1, 3, 1, 4)
        assert positions(tokens[2]) == (1, 4, 3, 4)
        assert positions(tokens[3]) == (3, 4, 3, 5)

    def test_span_reads_back_token_text(self):
        text = "2x3x4\n1x1x10"
        for tok in lex(text):
            assert tok.span.read() == tok.text

    def test_significant_text_round_trip(self):
        tokens = lex("2x3x4\n1x1x10")
        assert "".join(t.text for t in tokens if not t.ignore) == "2341110"
        assert "".join(t.text for t in tokens) == "2x3x4\n1x1x10"


class TestLexerErrors:
    def test_unparsable_character(self):
        with pytest.raises(UnparsableCharacterError) as exc:
            lex("2x3x4\n1x#x10")
        err = exc.value
        assert err.character == "#"
        assert (err.location.line, err.location.col) == (2, 3)
        assert err.code == "E100"

    def test_unparsable_first_character(self):
        with pytest.raises(UnparsableCharacterError) as exc:
            lex(" 2x3x4")
        assert (exc.value.location.line, exc.value.location.col) == (1, 1)
        assert exc.value.character == " "
