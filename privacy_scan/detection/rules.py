"""Deterministic PII rules.

A ``RuleTable`` is an immutable, ordered set of rules. Each rule pairs a label
and weight with a matcher that either searches a regex over the whole fragment
or tests whole-word membership against a keyword set.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from privacy_scan.detection.scoring import ScoringConfig


class PiiType(str, Enum):
    PHONE = "PHONE"
    EMAIL = "EMAIL"
    ADDRESS = "ADDRESS"


class Matcher(Protocol):
    def search(self, text: str) -> str | None:
        """Return the first matching excerpt of *text*, or None."""


@dataclass(frozen=True)
class RegexMatcher:
    """Searches *pattern* over the whole text.

    When ``digit_range`` is set, a candidate is only accepted if the digits of
    its ``national`` group (or of the whole match) fall inside the range.
    """

    pattern: re.Pattern[str]
    digit_range: tuple[int, int] | None = None

    def search(self, text: str) -> str | None:
        for match in self.pattern.finditer(text):
            if self._accepts(match):
                return match.group()
        return None

    def _accepts(self, match: re.Match[str]) -> bool:
        if self.digit_range is None:
            return True
        counted = match.group("national") if "national" in self.pattern.groupindex else match.group()
        digits = sum(ch.isdigit() for ch in counted)
        low, high = self.digit_range
        return low <= digits <= high


@dataclass(frozen=True)
class KeywordMatcher:
    """Case-insensitive whole-word membership test against ``keywords``."""

    keywords: frozenset[str]
    _pattern: re.Pattern[str] | None = field(init=False, repr=False, compare=False, default=None)

    def __post_init__(self) -> None:
        if not self.keywords:
            return
        alternation = "|".join(
            re.escape(keyword) for keyword in sorted(self.keywords, key=lambda k: (-len(k), k))
        )
        object.__setattr__(
            self,
            "_pattern",
            re.compile(rf"(?<!\w)(?:{alternation})(?!\w)", re.IGNORECASE),
        )

    def search(self, text: str) -> str | None:
        if self._pattern is None:
            return None
        match = self._pattern.search(text)
        return match.group() if match else None


@dataclass(frozen=True)
class Rule:
    label: str
    weight: int
    matcher: Matcher
    recommendation: str = ""


PHONE_PATTERN = re.compile(
    r"(?<![\w+])(?<!\d[-./])"
    r"(?!(?:"
    r"\d{4}[-./]\d{1,2}[-./]\d{1,2}"  # 2024-01-15
    r"|\d{1,2}[-./]\d{1,2}[-./]\d{4}"  # 15-01-2024
    r"|(?:1[89]|20)\d{2}[-/](?:1[89]|20)\d{2}"  # 2019-2020
    r")(?!\d))"
    r"(?:\+\d{1,3}[\s.\-]?)?"
    r"(?P<national>(?:\(\d{1,4}\)[\s.\-]?)?\d(?:[\s.\-]?\d){5,13})"
    r"(?!\w)"
)
PHONE_DIGITS = (7, 11)

EMAIL_PATTERN = re.compile(
    r"\b[A-Z0-9._%+\-]+@[A-Z0-9.\-]+\.[A-Z]{2,}\b",
    re.IGNORECASE,
)

ADDRESS_KEYWORDS = frozenset(
    {
        "street", "st.", "avenue", "ave", "road", "rd", "drive", "dr", "lane", "ln",
        "blvd", "boulevard", "way", "court", "ct",
    }
)

DEFAULT_RECOMMENDATIONS: dict[PiiType, str] = {
    PiiType.PHONE: "Remove phone number from post.",
    PiiType.EMAIL: "Remove email from post.",
    PiiType.ADDRESS: "Redact address or restrict audience.",
}


@dataclass(frozen=True)
class RuleTable:
    """Ordered detection rules plus the score clamp they are summed under."""

    rules: tuple[Rule, ...]
    max_score: int = 10

    def __post_init__(self) -> None:
        if self.max_score < 1:
            raise ValueError(f"max_score must be at least 1, got {self.max_score}")
        for rule in self.rules:
            if rule.weight < 0:
                raise ValueError(f"rule {rule.label} has negative weight {rule.weight}")

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(rule.label for rule in self.rules)

    @classmethod
    def from_config(cls, config: ScoringConfig) -> "RuleTable":
        """Build the shipped PHONE/EMAIL/ADDRESS rules weighted by *config*."""
        matchers: list[tuple[PiiType, Matcher]] = [
            (PiiType.PHONE, RegexMatcher(PHONE_PATTERN, digit_range=PHONE_DIGITS)),
            (PiiType.EMAIL, RegexMatcher(EMAIL_PATTERN)),
            (PiiType.ADDRESS, KeywordMatcher(ADDRESS_KEYWORDS)),
        ]
        rules = tuple(
            Rule(
                label=pii_type.value,
                weight=config.weight_for(pii_type.value),
                matcher=matcher,
                recommendation=DEFAULT_RECOMMENDATIONS[pii_type],
            )
            for pii_type, matcher in matchers
        )
        return cls(rules=rules, max_score=config.max_score)

    @classmethod
    def default(cls) -> "RuleTable":
        return cls.from_config(ScoringConfig.default())
