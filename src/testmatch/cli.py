#!/usr/bin/env python3
"""
testmatch: Filter file paths through include/exclude glob patterns

Common usage:
  testmatch --include 'src' --exclude '**/*.test.ts' src/a.ts src/a.test.ts
  git ls-files | testmatch --include '**/*.py' -
  find . -type f | testmatch --exclude '**/node_modules/**' -

Selected paths are printed one per line in input order. Excludes always win over
includes; with no --include every path that is not excluded is selected.

Settings can also come from `.testmatch.toml`, `testmatch.toml`, or
`[tool.testmatch]` in `pyproject.toml`; explicit flags take precedence.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import os
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from testmatch.config import find_config_file, load_config, merge_cli_with_config
from testmatch.matcher import (
    IgnoreFile,
    MatcherOptions,
    create_matcher,
    find_tool_ignore,
    load_ignore_file,
)
from testmatch.matcher.types import split_patterns


@dataclass
class Options:
    """Command-line options for the testmatch tool."""

    paths: list[str]
    cwd: str | None
    include: list[str] | None
    exclude: list[str] | None
    case_insensitive: bool | None
    ignore_files: list[str] | None
    tool_ignore: bool
    rejected: bool
    version: bool


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns a tuple of (options, explicit_flags) where `explicit_flags` tracks
    which config-backed options the user passed, for config merge precedence.
    """
    # Use the module's docstring as the description
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        prog="testmatch",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "paths",
        nargs="*",
        type=str,
        default=[],
        help="Paths to classify (use '-' to read newline-separated paths from stdin)",
    )
    parser.add_argument(
        "--cwd",
        type=str,
        default=None,
        metavar="DIR",
        help="Base directory that relative patterns are resolved against",
    )
    parser.add_argument(
        "-i",
        "--include",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Select paths matching this pattern (comma-separated allowed). Can be repeated",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Reject paths matching this pattern, overriding includes. Can be repeated",
    )
    case_group = parser.add_mutually_exclusive_group()
    case_group.add_argument(
        "--case-insensitive",
        action="store_const",
        const=True,
        dest="case_insensitive",
        default=None,
        help="Ignore letter case when matching (default: platform-dependent)",
    )
    case_group.add_argument(
        "--case-sensitive",
        action="store_const",
        const=False,
        dest="case_insensitive",
        help="Match letter case exactly",
    )
    parser.add_argument(
        "--ignore-file",
        action="append",
        default=None,
        dest="ignore_files",
        metavar="FILE",
        help="Also reject paths ignored by this gitignore-syntax file. Can be repeated",
    )
    parser.add_argument(
        "--no-tool-ignore",
        action="store_true",
        dest="no_tool_ignore",
        help="Do not look for a .testmatchignore file in the current or parent directories",
    )
    parser.add_argument(
        "--rejected",
        action="store_true",
        help="Print the rejected paths instead of the selected ones",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    # Config-backed options default to None, so anything else was given explicitly.
    explicit_flags = {
        name
        for name in ("cwd", "include", "exclude", "case_insensitive", "ignore_files")
        if getattr(opts, name) is not None
    }

    return (
        Options(
            paths=opts.paths,
            cwd=opts.cwd,
            include=_split_cli_patterns(opts.include),
            exclude=_split_cli_patterns(opts.exclude),
            case_insensitive=opts.case_insensitive,
            ignore_files=opts.ignore_files,
            tool_ignore=not opts.no_tool_ignore,
            rejected=opts.rejected,
            version=opts.version,
        ),
        explicit_flags,
    )


def _split_cli_patterns(values: list[str] | None) -> list[str] | None:
    """Expand comma-separated flag values into one flat pattern list."""
    if values is None:
        return None
    return [pattern for value in values for pattern in split_patterns(value)]


def _iter_candidates(paths: list[str]) -> Iterable[str]:
    """Yield candidate paths, reading stdin in place of each '-'."""
    for path in paths:
        if path == "-":
            for line in sys.stdin:
                line = line.rstrip("\r\n")
                if line:
                    yield line
        else:
            yield path


def _load_ignores(options: Options) -> list[IgnoreFile]:
    ignore_paths = [Path(p) for p in options.ignore_files or []]
    if options.tool_ignore:
        tool_ignore = find_tool_ignore(Path.cwd())
        if tool_ignore is not None:
            ignore_paths.append(tool_ignore)

    ignores: list[IgnoreFile] = []
    for path in ignore_paths:
        ignore = load_ignore_file(path)
        if ignore is not None:
            ignores.append(ignore)
    return ignores


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the testmatch CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    options, explicit_flags = _parse_args(args)

    if options.version:
        try:
            version = importlib.metadata.version("testmatch")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    if not options.paths:
        print(
            "Error: No input specified. Provide paths, or '-' to read paths from stdin."
            " Use --help for more options.",
            file=sys.stderr,
        )
        return 1

    try:
        config_path = find_config_file(Path.cwd())
        if config_path:
            merge_cli_with_config(options, load_config(config_path), explicit_flags)

        matcher = create_matcher(
            MatcherOptions(
                cwd=options.cwd,
                include=options.include,
                exclude=options.exclude,
                case_insensitive=options.case_insensitive,
            )
        )
        ignores = _load_ignores(options)
    except (ValueError, OSError) as e:
        # Bad config values, unreadable TOML, or a missing ignore file.
        print(f"Error: {e}", file=sys.stderr)
        return 2

    for path in _iter_candidates(options.paths):
        selected = matcher(path)
        if selected and ignores:
            absolute = os.path.abspath(path)
            selected = not any(ignore.matches(absolute) for ignore in ignores)
        if selected != options.rejected:
            print(path)

    return 0


if __name__ == "__main__":
    sys.exit(main())
