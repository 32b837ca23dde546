"""textparsing command line driver."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from textparsing import __version__
from textparsing.ast_nodes import Clause
from textparsing.config import TextParsingConfig, find_config, load_config
from textparsing.errors import ConfigError, DiagnosticRenderer, TextParsingError
from textparsing.grammar import validate_grammar
from textparsing.lexer import tokenize
from textparsing.parser import parse as parse_tokens
from textparsing.project import scaffold
from textparsing.source import load_source
from textparsing.tokens import Token


def _config_for(file: str, config_path: str | None) -> TextParsingConfig:
    """Load the explicit config, or the nearest one above ``file``."""
    try:
        path = Path(config_path) if config_path else find_config(Path(file))
        return load_config(path)
    except FileNotFoundError:
        click.echo("error: no textparsing.toml found", err=True)
        raise SystemExit(1)
    except ConfigError as e:
        _fail(e, color=False)


def _fail(error: TextParsingError, *, color: bool) -> None:
    renderer = DiagnosticRenderer(color=color)
    click.echo(renderer.render(error), err=True)
    raise SystemExit(1)


def _fail_io(error: Exception) -> None:
    click.echo(f"error: {error}", err=True)
    raise SystemExit(1)


def _run(file: str, config_path: str | None, start: str | None, color: bool | None) -> Clause:
    """Validate, load, tokenize and parse FILE. Returns the root clause."""
    config = _config_for(file, config_path)
    use_color = config.output.color if color is None else color
    rule = start or config.parser.start

    try:
        validate_grammar(config.lexemes, config.grammar, rule)
        source = load_source(file)
        tokens = tokenize(source, config.lexemes)
        root = parse_tokens(source, tokens, config.grammar, rule)
    except TextParsingError as e:
        _fail(e, color=use_color)
    except (OSError, UnicodeDecodeError) as e:
        _fail_io(e)
    return root


_config_option = click.option(
    "--config", "config_path", type=click.Path(exists=True, dir_okay=False),
    default=None, help="Grammar config (default: nearest textparsing.toml).",
)


@click.group()
@click.version_option(__version__, prog_name="textparsing")
@click.option("-v", "--verbose", is_flag=True, help="Log lexer and parser steps to stderr.")
def main(verbose: bool) -> None:
    """Tokenize and parse text with a declarative grammar."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@_config_option
@click.option("--start", default=None, help="Start rule (overrides [parser] start).")
@click.option("--color/--no-color", default=None, help="Colorize error output.")
def parse(file: str, config_path: str | None, start: str | None, color: bool | None) -> None:
    """Parse FILE and print the value of the root clause."""
    root = _run(file, config_path, start, color)
    click.echo(root.value)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@_config_option
@click.option("--color/--no-color", default=None, help="Colorize error output.")
def tokens(file: str, config_path: str | None, color: bool | None) -> None:
    """List the tokens of FILE."""
    config = _config_for(file, config_path)
    use_color = config.output.color if color is None else color

    try:
        result = tokenize(load_source(file), config.lexemes)
    except TextParsingError as e:
        _fail(e, color=use_color)
    except (OSError, UnicodeDecodeError) as e:
        _fail_io(e)

    for tok in result:
        start = tok.span.start
        marker = " (ignored)" if tok.ignore else ""
        click.echo(f"{start.line}:{start.col} {tok.type} {tok.value!r}{marker}")


@main.command()
@click.argument("path", default=".", type=click.Path(exists=True))
def check(path: str) -> None:
    """Validate the grammar of the nearest textparsing.toml."""
    try:
        config_path = find_config(Path(path))
        config = load_config(config_path)
        validate_grammar(config.lexemes, config.grammar, config.parser.start)
    except FileNotFoundError:
        click.echo("error: no textparsing.toml found", err=True)
        raise SystemExit(1)
    except TextParsingError as e:
        _fail(e, color=False)
    click.echo(
        f"checked {config_path}: {len(config.lexemes)} lexemes, "
        f"{len(config.grammar)} rules, no errors"
    )


@main.command()
@click.argument("name")
def new(name: str) -> None:
    """Create a new grammar project."""
    try:
        project_dir = scaffold(name)
        click.echo(f"created project '{name}' at {project_dir}")
    except FileExistsError as e:
        click.echo(f"error: {e}", err=True)
        raise SystemExit(1)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@_config_option
@click.option("--start", default=None, help="Start rule (overrides [parser] start).")
def view(file: str, config_path: str | None, start: str | None) -> None:
    """View the clause tree of FILE."""
    root = _run(file, config_path, start, None)
    _dump_tree(root, 0)


def _dump_tree(node: Clause | Token, depth: int) -> None:
    """Print a readable clause tree."""
    indent = "  " * depth
    if isinstance(node, Clause):
        click.echo(f"{indent}{node.type} = {node.value!r}  [{node.span}]")
        for part in node.parts:
            _dump_tree(part, depth + 1)
    else:
        click.echo(f"{indent}{node.type}: {node.value!r}")
