"""
TOML-based config file loading for testmatch.

Searches for `.testmatch.toml`, `testmatch.toml`, or `pyproject.toml [tool.testmatch]`
walking up from the current directory. Config values are merged with CLI flags
using three-way precedence: explicit CLI flags > config file > built-in defaults.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeVar, cast

from testmatch.matcher.paths import is_absolute
from testmatch.matcher.types import split_patterns

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]


@dataclass
class TestmatchConfig:
    """
    Parsed config from a TOML file. Fields are `None` when not set in the config,
    allowing the merge logic to distinguish "not configured" from "explicitly set
    to default value".
    """

    __test__ = False  # Not a pytest test class.

    cwd: str | None = None
    include: list[str] | None = None
    exclude: list[str] | None = None
    case_insensitive: bool | None = None
    ignore_files: list[str] | None = None


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [".testmatch.toml", "testmatch.toml", "pyproject.toml"]

# Mapping from TOML kebab-case keys to Python snake_case field names
_KEBAB_TO_SNAKE: dict[str, str] = {
    "case-insensitive": "case_insensitive",
    "ignore-files": "ignore_files",
}

_VALID_FIELDS = {f.name for f in fields(TestmatchConfig)}

_PATTERN_FIELDS = {"include", "exclude"}

_LIST_FIELDS = {*_PATTERN_FIELDS, "ignore_files"}


def find_config_file(start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for a config file. Returns the first
    found, or `None`. Search order per directory: `.testmatch.toml` >
    `testmatch.toml` > `pyproject.toml` (only if it has `[tool.testmatch]`).
    """
    current = start_dir.resolve()
    while True:
        for filename in _CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                if filename == "pyproject.toml":
                    if _pyproject_has_testmatch_section(candidate):
                        return candidate
                else:
                    return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _pyproject_has_testmatch_section(path: Path) -> bool:
    try:
        data = tomllib.loads(path.read_text())
        return "testmatch" in data.get("tool", {})
    except (tomllib.TOMLDecodeError, OSError):
        return False


def load_config(config_path: Path) -> TestmatchConfig:
    """
    Load a `TestmatchConfig` from a TOML file. Supports both standalone
    `testmatch.toml` / `.testmatch.toml` and `pyproject.toml` (extracts
    `[tool.testmatch]`). TOML kebab-case keys are mapped to Python snake_case.
    """
    try:
        data = tomllib.loads(config_path.read_text())
    except tomllib.TOMLDecodeError as e:
        print(f"Warning: ignoring malformed config file {config_path}: {e}", file=sys.stderr)
        return TestmatchConfig()

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("testmatch", {})

    config = _parse_config_data(data)
    # Relative paths are relative to the directory holding the config file.
    if config.cwd is not None and not is_absolute(config.cwd):
        config.cwd = os.path.abspath(config_path.parent / config.cwd)
    if config.ignore_files is not None:
        config.ignore_files = [os.path.abspath(config_path.parent / f) for f in config.ignore_files]
    return config


def _parse_config_data(data: dict[str, Any]) -> TestmatchConfig:
    """Parse a flat or sectioned TOML dict into TestmatchConfig."""
    # Flatten sections: [matching] and similar tables merge into top level
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            for sub_key, sub_value in cast(dict[str, Any], value).items():
                flat[sub_key] = sub_value
        else:
            flat[key] = value

    mapped: dict[str, Any] = {}
    for key, value in flat.items():
        snake_key = _KEBAB_TO_SNAKE.get(key, key.replace("-", "_"))
        if snake_key in _VALID_FIELDS:
            mapped[snake_key] = _check_value(key, snake_key, value)
        else:
            print(f"Warning: unrecognized config key `{key}`", file=sys.stderr)

    return TestmatchConfig(**mapped)


def _check_value(key: str, snake_key: str, value: Any) -> Any:
    """Validate a config value's type. Pattern lists also accept one comma-separated string."""
    if snake_key in _LIST_FIELDS:
        if isinstance(value, str):
            return split_patterns(value) if snake_key in _PATTERN_FIELDS else [value]
        if isinstance(value, list) and all(isinstance(v, str) for v in cast(list[Any], value)):
            return cast(list[str], value)
        raise ValueError(f"Config key `{key}` must be a string or a list of strings")
    if snake_key == "case_insensitive":
        if not isinstance(value, bool):
            raise ValueError(f"Config key `{key}` must be a boolean")
        return value
    if not isinstance(value, str):
        raise ValueError(f"Config key `{key}` must be a string")
    return value


_T = TypeVar("_T")


def merge_cli_with_config(
    cli_opts: _T,
    config: TestmatchConfig | None,
    explicit_flags: set[str],
) -> _T:
    """
    Merge CLI options with config file settings.

    Precedence: explicit CLI flags > config file > built-in defaults.
    """
    if config is None:
        return cli_opts

    for cfg_field in fields(TestmatchConfig):
        cfg_value = getattr(config, cfg_field.name)
        if cfg_value is None:
            continue  # Not set in config

        # Skip if CLI explicitly set this flag
        if cfg_field.name in explicit_flags:
            continue

        if hasattr(cli_opts, cfg_field.name):
            setattr(cli_opts, cfg_field.name, cfg_value)

    return cli_opts
