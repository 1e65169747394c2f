"""
Glob engine used by include and exclude patterns.

Patterns are translated by `wcmatch.glob` and wrapped in a
`pathspec.RegexPattern` subclass. Semantics follow minimatch with dot files
matched by wildcards:

- `*` matches any run of characters except `/`, `?` matches one character
  except `/`. A segment that starts with a wildcard never matches an empty
  segment, and wildcards never match a `.` or `..` segment.
- A segment that is exactly `**` matches zero or more whole segments.
- `[...]` bracket expressions support `!`/`^` negation, ranges and POSIX
  classes like `[[:alpha:]]`. An unclosed `[` is a literal.
- `{a,b}` alternation and `{1..3}` ranges are expanded with `bracex` before
  translation.
- A leading `!` negates the pattern and a leading `#` makes it a comment that
  matches nothing.

Patterns are expected in forward-slash form; `\\` escapes the next character.
A bracket expression with an inverted range (such as `[z-a]`) matches nothing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

import bracex
from pathspec import RegexPattern
from wcmatch import glob

# Brace expansions larger than this are abandoned and the pattern is matched
# with its braces taken literally.
MAX_BRACE_EXPANSION = 1000

# Matches nothing, including the empty string.
_NEVER = r"(?!)"

# Braces are expanded separately so oversized expansions can fall back to
# literal braces. FORCEUNIX keeps `/` as the only separator on every host.
_FLAGS = glob.GLOBSTAR | glob.DOTGLOB | glob.NEGATE | glob.NEGATEALL | glob.FORCEUNIX


def expand_braces(pattern: str) -> list[str]:
    """
    Expand `{a,b}` alternations and `{1..3}` / `{a..c}` ranges, left to right.

    Patterns whose expansion exceeds `MAX_BRACE_EXPANSION` are returned as-is.
    """
    try:
        return bracex.expand(pattern, keep_escapes=True, limit=MAX_BRACE_EXPANSION, return_empty=True)
    except bracex.ExpansionLimitException:
        return [pattern]


def translate(pattern: str, case_insensitive: bool = False) -> str:
    """Translate a glob pattern into an anchored regular expression string."""
    pattern = pattern.strip()
    if pattern.startswith("#"):
        return _NEVER

    # minimatch semantics: each leading `!` flips the match.
    stripped = pattern.lstrip("!")
    if (len(pattern) - len(stripped)) % 2:
        stripped = "!" + stripped

    flags = _FLAGS | (glob.IGNORECASE if case_insensitive else glob.CASE)
    positive, negative = glob.translate(expand_braces(stripped), flags=flags, limit=0)

    regex = "|".join(positive) or _NEVER
    if negative:
        return f"(?!{'|'.join(negative)})(?:{regex})"
    return regex


class GlobPattern(RegexPattern):
    """A `pathspec` pattern compiled from a glob with the semantics above."""

    __slots__ = ()

    @classmethod
    def pattern_to_regex(cls, pattern: str) -> tuple[str, bool]:
        return translate(pattern), True

    @classmethod
    def compile(cls, pattern: str, case_insensitive: bool = False) -> GlobPattern:
        """
        Compile `pattern`, falling back to a pattern that matches nothing if the
        translation is not a valid regular expression.
        """
        regex = translate(pattern, case_insensitive)
        try:
            compiled = re.compile(regex)
        except re.error:
            compiled = re.compile(_NEVER)
        return cls(compiled, True)

    def matches(self, path: str) -> bool:
        return self.match_file(path) is not None


@dataclass(frozen=True)
class CompiledGlob:
    """
    One glob compiled under both case policies, so a matcher can follow the
    case flag at call time without recompiling.
    """

    pattern: str
    sensitive: GlobPattern
    insensitive: GlobPattern

    @classmethod
    def from_pattern(cls, pattern: str) -> CompiledGlob:
        return cls(
            pattern=pattern,
            sensitive=_compile(pattern, False),
            insensitive=_compile(pattern, True),
        )

    def matches(self, path: str, case_insensitive: bool) -> bool:
        compiled = self.insensitive if case_insensitive else self.sensitive
        return compiled.matches(path)


@lru_cache(maxsize=512)
def _compile(pattern: str, case_insensitive: bool) -> GlobPattern:
    return GlobPattern.compile(pattern, case_insensitive)


def glob_match(path: str, pattern: str, case_insensitive: bool = False) -> bool:
    """Whether the whole of `path` matches the glob `pattern`."""
    return _compile(pattern, case_insensitive).matches(path)
