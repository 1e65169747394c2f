"""
Compiles `MatcherOptions` into a path predicate.

Each include and exclude pattern becomes a `PatternMatcher`: a literal prefix
test followed by a full glob match. `PathMatcher` combines them. Excludes are
checked first and any hit rejects; then any include hit selects; with no
include patterns everything not excluded is selected.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from testmatch.matcher.case_policy import get_case_insensitive
from testmatch.matcher.glob import CompiledGlob
from testmatch.matcher.paths import is_absolute, join, normalize
from testmatch.matcher.types import MatcherOptions


def resolve_pattern(pattern: str, cwd: str | None) -> str:
    """
    Resolve a raw pattern against the base directory.

    Absolute patterns and patterns starting with `*` are location-independent
    and are kept as-is, as is every pattern when there is no `cwd`.
    """
    pattern = normalize(pattern)
    if not cwd or is_absolute(pattern) or pattern.startswith("*"):
        return pattern
    return join(cwd, pattern)


def _starts_with(path: str, prefix: str, case_insensitive: bool) -> bool:
    if case_insensitive:
        return path.lower().startswith(prefix.lower())
    return path.startswith(prefix)


@dataclass(frozen=True)
class PatternMatcher:
    """
    Tests one resolved pattern against normalized paths.

    A path matches if it starts with the literal pattern (so a bare directory
    like `src` covers `src/file.ts`) or if the glob matches the whole path.
    """

    pattern: str
    glob: CompiledGlob
    case_insensitive: bool | None = None

    @classmethod
    def compile(
        cls, raw_pattern: str, cwd: str | None, case_insensitive: bool | None = None
    ) -> PatternMatcher:
        pattern = resolve_pattern(raw_pattern, cwd)
        return cls(pattern, CompiledGlob.from_pattern(pattern), case_insensitive)

    def __call__(self, path: str) -> bool:
        nocase = self.case_insensitive
        if nocase is None:
            nocase = get_case_insensitive()
        return _starts_with(path, self.pattern, nocase) or self.glob.matches(path, nocase)


@dataclass(frozen=True)
class PathMatcher:
    """
    The predicate returned by `create_matcher`: `matcher(path) -> bool`.

    Pure apart from one documented exception: when built without an explicit
    `case_insensitive`, every call re-reads the process-wide case flag, so
    `set_case_insensitive()` also changes matchers that already exist.
    """

    includes: tuple[PatternMatcher, ...]
    excludes: tuple[PatternMatcher, ...]

    def __call__(self, file_path: str) -> bool:
        path = normalize(file_path)
        for exclude in self.excludes:
            if exclude(path):
                return False
        for include in self.includes:
            if include(path):
                return True
        return not self.includes


def create_matcher(options: MatcherOptions | None = None, **fields: Any) -> PathMatcher:
    """
    Build a matcher from `options`, or from keyword fields of `MatcherOptions`.

    Keyword fields override the matching fields of `options`:

        create_matcher(include="**/*.js", exclude="**/node_modules/**")
        create_matcher(MatcherOptions(cwd="/repo"), include="src")
    """
    if options is None:
        options = MatcherOptions(**fields)
    elif fields:
        options = replace(options, **fields)

    cwd = normalize(options.cwd) if options.cwd is not None else None
    nocase = options.case_insensitive

    includes = tuple(PatternMatcher.compile(p, cwd, nocase) for p in options.include.expand())
    excludes = tuple(PatternMatcher.compile(p, cwd, nocase) for p in options.exclude.expand())
    return PathMatcher(includes=includes, excludes=excludes)
