"""Configuration types for building matchers."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

Matcher = Callable[[str], bool]
"""A predicate from a candidate path to selected (`True`) or rejected (`False`)."""


def split_patterns(value: str) -> list[str]:
    """Split a comma-separated pattern string into trimmed patterns, keeping empties."""
    return [part.strip() for part in value.split(",")]


@dataclass(frozen=True)
class Single:
    """
    A single pattern string. Commas separate several patterns, so
    `Single("src, lib")` means the two patterns `src` and `lib`.
    """

    pattern: str

    def expand(self) -> tuple[str, ...]:
        return tuple(split_patterns(self.pattern))


@dataclass(frozen=True)
class Many:
    """An ordered sequence of patterns, used as given (no comma splitting)."""

    patterns: tuple[str, ...] = ()

    def expand(self) -> tuple[str, ...]:
        return self.patterns


PatternSet = Single | Many


def to_pattern_set(value: str | Sequence[str] | PatternSet | None) -> PatternSet:
    """Normalize a configuration value into a `PatternSet`. `None` is the empty set."""
    if value is None:
        return Many()
    if isinstance(value, (Single, Many)):
        return value
    if isinstance(value, str):
        return Single(value)
    return Many(tuple(value))


@dataclass(frozen=True)
class MatcherOptions:
    """
    Options for `create_matcher`.

    `cwd` is the base directory that relative patterns are resolved against.
    `include` and `exclude` accept a comma-separated string, a sequence of
    patterns, or a `PatternSet`; an absent `include` selects everything that is
    not excluded.

    `case_insensitive=None` makes the matcher follow the process-wide flag (see
    `set_case_insensitive`) on every call. A bool pins the policy when the
    matcher is built.
    """

    cwd: str | None = None
    include: PatternSet | str | Sequence[str] | None = None
    exclude: PatternSet | str | Sequence[str] | None = None
    case_insensitive: bool | None = None

    def __post_init__(self) -> None:
        # Frozen dataclass: normalize through object.__setattr__.
        object.__setattr__(self, "include", to_pattern_set(self.include))
        object.__setattr__(self, "exclude", to_pattern_set(self.exclude))
