"""
Include/exclude glob matching for file paths.

Self-contained: no imports from `testmatch` outside this package.

Usage::

    from testmatch.matcher import create_matcher

    match = create_matcher(include="**/*.js", exclude="**/node_modules/**")
    match("src/file.js")  # True
    match("packages/a/node_modules/pkg/index.js")  # False
"""

from testmatch.matcher.case_policy import (
    get_case_insensitive,
    platform_case_insensitive,
    reset_case_insensitive,
    set_case_insensitive,
)
from testmatch.matcher.compiler import PathMatcher, PatternMatcher, create_matcher, resolve_pattern
from testmatch.matcher.glob import glob_match
from testmatch.matcher.ignore import IgnoreFile, find_tool_ignore, load_ignore_file
from testmatch.matcher.types import Many, Matcher, MatcherOptions, PatternSet, Single

__all__ = [
    "IgnoreFile",
    "Many",
    "Matcher",
    "MatcherOptions",
    "PathMatcher",
    "PatternMatcher",
    "PatternSet",
    "Single",
    "create_matcher",
    "find_tool_ignore",
    "get_case_insensitive",
    "glob_match",
    "load_ignore_file",
    "platform_case_insensitive",
    "reset_case_insensitive",
    "resolve_pattern",
    "set_case_insensitive",
]
