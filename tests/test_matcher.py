"""Tests for building and evaluating include/exclude matchers."""

from __future__ import annotations

import pytest

from testmatch import (
    Many,
    MatcherOptions,
    Single,
    create_matcher,
    set_case_insensitive,
)
from testmatch.matcher import PathMatcher, resolve_pattern


def test_include():
    test = create_matcher(include="yes")
    assert test("yes")
    assert not test("no")


def test_exclude():
    test = create_matcher(exclude="yes")
    assert not test("yes")
    assert test("no")


def test_include_cwd():
    test = create_matcher(cwd="/path/to", include="yes")
    assert test("/path/to/yes")
    assert not test("/path/to/no")


def test_exclude_cwd():
    test = create_matcher(cwd="/path/to", exclude="yes")
    assert not test("/path/to/yes")
    assert test("/path/to/no")


def test_glob():
    test = create_matcher(include="react-*", exclude="react-native-*")
    assert test("react-dom")
    assert not test("react-native-aria")


def test_globstar_with_node_modules_exclude():
    test = create_matcher(include="**/*.js", exclude="**/node_modules/**")
    assert test("src/file.js")
    assert test("file.js")
    assert not test("packages/a/node_modules/pkg/index.js")
    assert not test("src/file.ts")


@pytest.mark.parametrize("path", ["", "a", "src/file.ts", "/abs/path", "C:\\win\\path"])
def test_empty_config_selects_everything(path: str):
    assert create_matcher()(path)
    assert create_matcher(include=[], exclude=[])(path)


def test_exclude_wins_over_include():
    test = create_matcher(include=["src", "**/*.ts"], exclude="src/generated")
    assert test("src/index.ts")
    assert not test("src/generated/types.ts")
    assert not test("src/generated")


def test_plain_pattern_is_a_prefix():
    test = create_matcher(include="src")
    assert test("src")
    assert test("src/file.ts")
    assert test("src/deep/nested/file.ts")
    # Literal prefix, not just directory boundaries.
    assert test("srcfoo")
    assert not test("lib/src/file.ts")


def test_single_star_does_not_cross_separators():
    test = create_matcher(include="a/*.ext")
    assert test("a/x.ext")
    assert not test("a/b/x.ext")


def test_double_star_spans_segments():
    test = create_matcher(include="a/**/x.ext")
    assert test("a/x.ext")
    assert test("a/b/x.ext")
    assert test("a/b/c/x.ext")
    assert not test("a/b/c/y.ext")


def test_wildcards_match_dot_files():
    test = create_matcher(include="**/*.md")
    assert test(".github/README.md")
    assert test("docs/.hidden.md")


def test_globstar_includes_dot_directories():
    test = create_matcher(include="**/*")
    assert test("x/.cache/y")
    assert test(".git/config")


def test_wildcards_skip_dot_and_dot_dot_segments():
    star = create_matcher(include="a/*/b")
    assert star("a/x/b")
    assert star("a/.x/b")
    assert not star("a/../b")
    assert not star("a/./b")

    globstar = create_matcher(include="a/**/b")
    assert globstar("a/x/y/b")
    assert not globstar("a/x/../b")

    exclude = create_matcher(exclude="a/*/b")
    assert not exclude("a/x/b")
    assert exclude("a/../b")


@pytest.mark.parametrize(
    "path",
    ["a/b/x.ext", "a\\b\\x.ext", "a/b\\x.ext", "a\\b/x.ext"],
)
def test_separator_style_does_not_matter(path: str):
    assert create_matcher(include="a/**/x.ext")(path)
    assert not create_matcher(exclude="a/b")(path)


def test_backslash_patterns_are_normalized():
    test = create_matcher(include="src\\lib\\*.py")
    assert test("src/lib/mod.py")
    assert test("src\\lib\\mod.py")


def test_windows_cwd():
    test = create_matcher(cwd="C:\\proj", include="src")
    assert test("C:\\proj\\src\\a.ts")
    assert test("C:/proj/src/a.ts")
    assert not test("C:\\proj\\lib\\a.ts")


def test_case_sensitive_by_default_in_tests():
    test = create_matcher(include="src/*.ts")
    assert test("src/file.ts")
    assert not test("SRC/FILE.TS")


def test_case_insensitive_flag_applies_to_prefix_and_glob():
    set_case_insensitive(True)
    prefix = create_matcher(include="Src")
    glob = create_matcher(include="src/*.ts")
    assert prefix("src/file.ts")
    assert prefix("SRC/file.ts")
    assert glob("SRC/FILE.TS")
    assert glob("src/file.ts")


def test_existing_matchers_follow_later_flag_changes():
    test = create_matcher(include="file.ts")
    assert not test("FILE.TS")

    set_case_insensitive(True)
    assert test("FILE.TS")

    set_case_insensitive(False)
    assert not test("FILE.TS")


def test_explicit_case_policy_is_pinned():
    sensitive = create_matcher(include="file.ts", case_insensitive=False)
    insensitive = create_matcher(include="file.ts", case_insensitive=True)

    set_case_insensitive(True)
    assert not sensitive("FILE.TS")
    assert insensitive("FILE.TS")

    set_case_insensitive(False)
    assert not sensitive("FILE.TS")
    assert insensitive("FILE.TS")


def test_comma_separated_string_is_split_and_trimmed():
    test = create_matcher(include="react-*, vue-* ,svelte")
    assert test("react-dom")
    assert test("vue-router")
    assert test("svelte")
    assert not test("angular")


def test_sequence_entries_are_not_split():
    test = create_matcher(include=["a,b"])
    assert not test("a")
    assert not test("b")
    assert test("a,b/c")


def test_pattern_set_values():
    assert create_matcher(include=Single("x, y"))("y")
    assert not create_matcher(include=Many(("x, y",)))("y")


def test_empty_string_pattern_matches_everything():
    assert create_matcher(include="")("anything/at/all")
    assert not create_matcher(exclude="")("anything/at/all")
    assert not create_matcher(exclude="")("")


def test_empty_string_pattern_with_cwd_covers_cwd():
    test = create_matcher(cwd="/path/to", include="")
    assert test("/path/to/file")
    assert not test("/elsewhere/file")


def test_relative_pattern_resolves_dot_dot_against_cwd():
    test = create_matcher(cwd="/path/to", include="../other")
    assert test("/path/other/file.ts")
    assert not test("/path/to/other/file.ts")


def test_absolute_pattern_ignores_cwd():
    test = create_matcher(cwd="/path/to", include="/abs/dir")
    assert test("/abs/dir/file")
    assert not test("/path/to/abs/dir/file")


def test_wildcard_led_pattern_ignores_cwd():
    test = create_matcher(cwd="/path/to", exclude="**/node_modules/**")
    assert not test("/elsewhere/node_modules/pkg/index.js")
    assert not test("/path/to/node_modules/pkg/index.js")
    assert test("/path/to/src/index.js")


def test_resolve_pattern():
    assert resolve_pattern("yes", None) == "yes"
    assert resolve_pattern("yes", "") == "yes"
    assert resolve_pattern("yes", "/path/to") == "/path/to/yes"
    assert resolve_pattern("sub\\dir", "/path/to") == "/path/to/sub/dir"
    assert resolve_pattern("/abs", "/path/to") == "/abs"
    assert resolve_pattern("C:\\abs", "/path/to") == "C:/abs"
    assert resolve_pattern("*.js", "/path/to") == "*.js"
    assert resolve_pattern("src/*.js", "/path/to") == "/path/to/src/*.js"


@pytest.mark.parametrize("pattern", ["[z-a]", "[abc", "{a,b", "[[:nope:]]", "***", "!", "#", "a[/]b"])
def test_malformed_patterns_never_raise(pattern: str):
    test = create_matcher(include=pattern)
    for path in ["", "a", "b/c", pattern]:
        assert isinstance(test(path), bool)
    # The literal prefix still applies.
    assert test(pattern + "/child")


def test_invalid_range_matches_only_as_literal_prefix():
    test = create_matcher(include="[z-a]")
    assert not test("b")
    assert test("[z-a]")


def test_options_object_and_keyword_overrides():
    options = MatcherOptions(cwd="/repo", include="lib")
    assert create_matcher(options)("/repo/lib/a.py")

    overridden = create_matcher(options, include="src")
    assert overridden("/repo/src/a.py")
    assert not overridden("/repo/lib/a.py")


def test_options_normalize_pattern_fields():
    options = MatcherOptions(include="a,b", exclude=["c"])
    assert options.include == Single("a,b")
    assert options.exclude == Many(("c",))
    assert MatcherOptions().include == Many()


def test_matcher_structure():
    test = create_matcher(include="a, b", exclude=["c"])
    assert isinstance(test, PathMatcher)
    assert [m.pattern for m in test.includes] == ["a", "b"]
    assert [m.pattern for m in test.excludes] == ["c"]
