import pytest

from pattern_filter import NameFilter, NamePattern, PatternKind, looks_like_regex, matches


@pytest.mark.parametrize(
    "pattern, expected",
    [
        ("log", False),
        ("^app", True),
        ("txt$", True),
        ("a.*b", True),
        ("[0-9]", True),
        ("weird]", True),
        ("file.txt", False),
    ],
)
def test_regex_heuristic(pattern, expected):
    assert looks_like_regex(pattern) is expected


def test_plain_pattern_is_case_sensitive_substring():
    pattern = NamePattern.compile("log")

    assert pattern.kind is PatternKind.SUBSTRING
    assert pattern.matches("app.log")
    assert pattern.matches("catalog.txt")
    assert not pattern.matches("APP.LOG")


def test_dot_is_literal_in_substring_mode():
    assert matches("file.txt", "e.t")
    assert not matches("filextxt", "e.t")


def test_regex_pattern_is_searched_not_fully_matched():
    assert matches("report_2024.csv", "[0-9]{4}")
    assert matches("app.log", "^app")
    assert not matches("myapp.log", "^app")


def test_invalid_search_regex_never_matches():
    pattern = NamePattern.compile("[unclosed")

    assert pattern.kind is PatternKind.REGEX
    assert not pattern.is_valid
    assert not matches("[unclosed", "[unclosed")


def test_invalid_exclusion_regex_never_excludes():
    assert matches("anything", exclude_pattern="(")


def test_exclusion_wins_over_search():
    name_filter = NameFilter(search_pattern="log", exclude_pattern=r"^debug")

    assert name_filter.matches("app.log")
    assert not name_filter.matches("debug.log")


def test_exclusion_is_always_regex():
    # "." is a wildcard even though the pattern does not look like a regex
    assert not matches("aXb", exclude_pattern="a.b")


def test_no_patterns_match_everything():
    assert matches("")
    assert matches("anything at all")


def test_empty_exclusion_pattern_matches_every_name():
    name_filter = NameFilter(exclude_pattern="")

    assert name_filter.is_excluded("app.log")
    assert not matches("app.log", None, "")


def test_empty_search_pattern_selects_every_name():
    assert matches("app.log", "", None)
    assert NameFilter(search_pattern="").is_selected("anything")
