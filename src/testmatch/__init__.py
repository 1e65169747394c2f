from testmatch.matcher import (
    Many,
    Matcher,
    MatcherOptions,
    PathMatcher,
    PatternSet,
    Single,
    create_matcher,
    get_case_insensitive,
    platform_case_insensitive,
    set_case_insensitive,
)

__all__ = [
    "Many",
    "Matcher",
    "MatcherOptions",
    "PathMatcher",
    "PatternSet",
    "Single",
    "create_matcher",
    "get_case_insensitive",
    "platform_case_insensitive",
    "set_case_insensitive",
]
