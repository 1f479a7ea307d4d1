#!/usr/bin/env python3
"""
Name Pattern Filtering

Search patterns are either plain substrings or regular expressions. A
pattern is treated as a regex when it is anchored (^...$) or contains
".*", "[" or "]"; anything else is matched as a case-sensitive substring.
Exclusion patterns are always regular expressions and win over search.
Malformed regular expressions never match.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class PatternKind(Enum):
    SUBSTRING = "substring"
    REGEX = "regex"


def looks_like_regex(pattern: str) -> bool:
    """Heuristic used to tell a regex from a plain substring"""
    return (
        pattern.startswith("^")
        or pattern.endswith("$")
        or ".*" in pattern
        or "[" in pattern
        or "]" in pattern
    )


@dataclass(frozen=True)
class NamePattern:
    """A classified search pattern; regex is None for substrings or invalid regexes"""

    text: str
    kind: PatternKind
    regex: Optional[re.Pattern] = None

    @classmethod
    def compile(cls, text: str, force_regex: bool = False) -> "NamePattern":
        """Classify and compile a pattern once, up front"""
        if not force_regex and not looks_like_regex(text):
            return cls(text=text, kind=PatternKind.SUBSTRING)

        try:
            regex = re.compile(text)
        except re.error as e:
            logger.debug("Invalid regular expression %r treated as never matching: %s", text, e)
            regex = None
        return cls(text=text, kind=PatternKind.REGEX, regex=regex)

    @property
    def is_valid(self) -> bool:
        return self.kind is PatternKind.SUBSTRING or self.regex is not None

    def matches(self, name: str) -> bool:
        if self.kind is PatternKind.SUBSTRING:
            return self.text in name
        if self.regex is None:
            return False
        return self.regex.search(name) is not None


class NameFilter:
    """Decides which entry names make it into a walk's results"""

    def __init__(self, search_pattern: Optional[str] = None, exclude_pattern: Optional[str] = None):
        self.search = NamePattern.compile(search_pattern) if search_pattern is not None else None
        self.exclude = NamePattern.compile(exclude_pattern, force_regex=True) if exclude_pattern is not None else None

    def is_excluded(self, name: str) -> bool:
        """True if the exclusion pattern matches (an invalid one never does)"""
        return self.exclude is not None and self.exclude.matches(name)

    def is_selected(self, name: str) -> bool:
        """True if there is no search pattern or the name matches it"""
        return self.search is None or self.search.matches(name)

    def matches(self, name: str) -> bool:
        return not self.is_excluded(name) and self.is_selected(name)


def matches(name: str, search_pattern: Optional[str] = None, exclude_pattern: Optional[str] = None) -> bool:
    """One-off check of a name against optional search and exclusion patterns"""
    return NameFilter(search_pattern, exclude_pattern).matches(name)
