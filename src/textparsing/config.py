"""TOML config loading for textparsing.toml.

A config file declares a whole grammar as data: an ordered ``[[lexeme]]``
array and a ``[rules]`` table. Value transforms and reducers are picked by
name from the registries below.
"""

from __future__ import annotations

import math
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from textparsing.ast_nodes import Clause
from textparsing.errors import ConfigError
from textparsing.grammar import Grammar, GrammarRule, Reducer
from textparsing.tokens import LexicalRule

CONFIG_NAME = "textparsing.toml"

TRANSFORMS: dict[str, Callable[[str], Any]] = {
    "int": int,
    "float": float,
    "str": str,
    "strip": str.strip,
    "lower": str.lower,
    "upper": str.upper,
}

REDUCERS: dict[str, Reducer] = {
    "list": lambda c: c.values,
    "sum": lambda c: sum(c.values),
    "product": lambda c: math.prod(c.values),
    "min": lambda c: min(c.values),
    "max": lambda c: max(c.values),
    "first": lambda c: c.values[0] if c.parts else None,
    "last": lambda c: c.values[-1] if c.parts else None,
    "count": lambda c: len(c.parts),
    "text": Clause.read,
    "join": lambda c: "".join(str(v) for v in c.values),
}


@dataclass
class ParserConfig:
    start: str = "program"


@dataclass
class OutputConfig:
    color: bool = True


@dataclass
class TextParsingConfig:
    parser: ParserConfig = field(default_factory=ParserConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    lexemes: list[LexicalRule] = field(default_factory=list)
    grammar: Grammar = field(default_factory=Grammar)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find textparsing.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_NAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError(f"No {CONFIG_NAME} found in any parent directory")
        path = parent


def load_config(path: Path) -> TextParsingConfig:
    """Parse a textparsing.toml file into a TextParsingConfig."""
    with open(path, "rb") as f:
        try:
            data = tomllib.load(f)
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
            raise ConfigError(f"{path}: {e}") from e

    config = TextParsingConfig()

    if "parser" in data:
        prs = _table(data["parser"], "[parser]")
        config.parser = ParserConfig(
            start=_typed(prs, "start", str, "program", "[parser]"),
        )

    if "output" in data:
        out = _table(data["output"], "[output]")
        config.output = OutputConfig(color=_typed(out, "color", bool, True, "[output]"))

    lexemes = data.get("lexeme", [])
    if not isinstance(lexemes, list):
        raise ConfigError("lexeme must be an array of tables ([[lexeme]])")
    config.lexemes = [_lexeme(entry) for entry in lexemes]

    rules = _table(data.get("rules", {}), "[rules]")
    config.grammar = Grammar(_rule(name, entry) for name, entry in rules.items())
    return config


def _table(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigError(f"{where} must be a table")
    return value


_TYPE_NAMES = {str: "a string", bool: "true or false"}


def _typed(entry: dict[str, Any], key: str, kind: type, default: Any, where: str) -> Any:
    value = entry.get(key, default)
    if not isinstance(value, kind):
        raise ConfigError(f"{where} {key} must be {_TYPE_NAMES[kind]}, got {value!r}")
    return value


def _lexeme(entry: Any) -> LexicalRule:
    entry = _table(entry, "lexeme")
    if "type" not in entry or "pattern" not in entry:
        raise ConfigError(f"lexeme {entry!r} needs both a type and a pattern")
    kind = _typed(entry, "type", str, None, "lexeme")
    where = f"lexeme {kind}:"
    pattern = _typed(entry, "pattern", str, None, where)
    ignore = _typed(entry, "ignore", bool, False, where)
    transform = None
    if "value" in entry:
        transform = _lookup(TRANSFORMS, _typed(entry, "value", str, None, where), "value transform")
    try:
        return LexicalRule(type=kind, pattern=pattern, value=transform, ignore=ignore)
    except re.error as e:
        raise ConfigError(f"lexeme {kind}: bad pattern: {e}") from e


def _rule(name: str, entry: Any) -> GrammarRule:
    entry = _table(entry, f"[rules.{name}]")
    syntax = entry.get("syntax")
    if not isinstance(syntax, list) or not all(
        isinstance(alt, list) and all(isinstance(ident, str) for ident in alt)
        for alt in syntax
    ):
        raise ConfigError(f"rule {name}: syntax must be a list of alternatives")
    reducer = None
    if "value" in entry:
        reducer = _lookup(REDUCERS, _typed(entry, "value", str, None, f"rule {name}:"), "reducer")
    return GrammarRule(name, syntax, reducer)


def _lookup(registry: dict[str, Any], key: str, what: str) -> Any:
    try:
        return registry[key]
    except KeyError:
        known = ", ".join(sorted(registry))
        raise ConfigError(f"unknown {what} {key!r} (expected one of: {known})") from None
