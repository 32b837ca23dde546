"""Project scaffolding for `textparsing new`."""

from __future__ import annotations

from pathlib import Path

_CONFIG_TEMPLATE = """\
# Grammar for {name}. Lexemes are tried top to bottom; the first match wins.

[parser]
start = "list"

[output]
color = true

[[lexeme]]
type = "number"
pattern = '\\d+'
value = "int"

[[lexeme]]
type = "comma"
pattern = ',\\s*'
ignore = true

[[lexeme]]
type = "newline"
pattern = '\\n'
ignore = true

[rules.list]
syntax = [["number", "comma", "list"], ["number", "newline"], ["number"]]
value = "sum"
"""

_INPUT_TEMPLATE = """\
1, 2, 3
"""

_README_TEMPLATE = """\
# {name}

A grammar described by `textparsing.toml`.

## Run

```bash
textparsing parse input.txt
```
"""


def scaffold(name: str, parent: Path | None = None) -> Path:
    """Create a new grammar project directory. Returns the project path."""
    base = parent or Path.cwd()
    project_dir = base / name

    if project_dir.exists():
        raise FileExistsError(f"Directory '{name}' already exists")

    project_dir.mkdir(parents=True)
    (project_dir / "textparsing.toml").write_text(_CONFIG_TEMPLATE.format(name=name))
    (project_dir / "input.txt").write_text(_INPUT_TEMPLATE)
    (project_dir / "README.md").write_text(_README_TEMPLATE.format(name=name))
    return project_dir
