"""
Compiler options and their TOML loader.

Options are read from the top level of an ``erdsl.toml`` file, or from the
``[tool.erdsl]`` table when the file is a ``pyproject.toml``:

    [tool.erdsl]
    require_diagram_name = true
    strict_sections = false
"""

import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from .errors import ErdslError


@dataclass(frozen=True)
class CompilerOptions:
    """Options controlling how strictly a document is checked."""

    require_diagram_name: bool = True  # 'erd {' without a name is an error
    strict_sections: bool = False  # warn on entities declared after an edge


def options_from_dict(data: dict[str, Any]) -> CompilerOptions:
    """
    Build options from a mapping, rejecting unknown keys and wrong types.

    Raises:
        ErdslError: If a key is unknown or a value is not a boolean
    """
    known = {f.name for f in fields(CompilerOptions)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ErdslError(
            f"Unknown erdsl option(s): {', '.join(unknown)}. Known options: {', '.join(sorted(known))}"
        )
    for key, value in data.items():
        if not isinstance(value, bool):
            raise ErdslError(f"Option '{key}' must be true or false, got {value!r}")
    return CompilerOptions(**data)


def load_options(path: Path) -> CompilerOptions:
    """
    Load options from ``erdsl.toml`` or ``pyproject.toml``.

    A pyproject.toml without a ``[tool.erdsl]`` table yields the defaults.

    Raises:
        ErdslError: If the file is not valid TOML or holds invalid options
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ErdslError(f"Invalid TOML in {path}: {e}") from e

    if path.name == "pyproject.toml":
        data = data.get("tool", {}).get("erdsl", {})

    return options_from_dict(data)
