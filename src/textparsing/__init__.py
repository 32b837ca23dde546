"""Declarative lexer and backtracking grammar parser."""

from textparsing.ast_nodes import Clause
from textparsing.errors import (
    ConfigError,
    DiagnosticRenderer,
    GrammarError,
    NestingTooDeepError,
    NoMatchError,
    TextParsingError,
    UndefinedSubclauseError,
    UnexpectedTokenError,
    UnknownStartRuleError,
    UnparsableCharacterError,
)
from textparsing.grammar import Grammar, GrammarRule, validate_grammar
from textparsing.lexer import Lexer, tokenize
from textparsing.parser import Parser, parse, parse_source
from textparsing.source import Location, SourceFile, Span, load_source
from textparsing.tokens import LexicalRule, Token

__version__ = "0.1.0"

__all__ = [
    "Clause",
    "ConfigError",
    "DiagnosticRenderer",
    "Grammar",
    "GrammarError",
    "GrammarRule",
    "LexicalRule",
    "Lexer",
    "Location",
    "NestingTooDeepError",
    "NoMatchError",
    "Parser",
    "SourceFile",
    "Span",
    "TextParsingError",
    "Token",
    "UndefinedSubclauseError",
    "UnexpectedTokenError",
    "UnknownStartRuleError",
    "UnparsableCharacterError",
    "load_source",
    "parse",
    "parse_source",
    "tokenize",
    "validate_grammar",
]
