"""Shared pytest fixtures for the textparsing test suite."""

from __future__ import annotations

import pytest

_BOX_CONFIG = """\
[parser]
start = "boxList"

[output]
color = false

[[lexeme]]
type = "dimension"
pattern = '\\d+'
value = "int"

[[lexeme]]
type = "x"
pattern = "x"
ignore = true

[[lexeme]]
type = "separator"
pattern = '\\n'
ignore = true

[rules.box]
syntax = [["dimension", "x", "dimension", "x", "dimension"]]
value = "product"

[rules.boxList]
syntax = [["box", "separator", "boxList"], ["box"]]
value = "sum"
"""


@pytest.fixture
def box_project(tmp_path):
    """A directory holding a box grammar config and an input file."""
    (tmp_path / "textparsing.toml").write_text(_BOX_CONFIG)
    (tmp_path / "boxes.txt").write_text("2x3x4\n1x1x10")
    return tmp_path
