import re

import pytest

from privacy_scan.detection.rules import (
    ADDRESS_KEYWORDS,
    EMAIL_PATTERN,
    PHONE_DIGITS,
    PHONE_PATTERN,
    KeywordMatcher,
    PiiType,
    RegexMatcher,
    Rule,
    RuleTable,
)
from privacy_scan.detection.scoring import ScoringConfig


@pytest.fixture()
def phone() -> RegexMatcher:
    return RegexMatcher(PHONE_PATTERN, digit_range=PHONE_DIGITS)


class TestPhoneMatcher:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Call me at 555-123-4567", "555-123-4567"),
            ("office (555) 123-4567 today", "(555) 123-4567"),
            ("dial +1 555 123 4567 now", "+1 555 123 4567"),
            ("555.123.4567", "555.123.4567"),
            ("short 123-4567 line", "123-4567"),
        ],
    )
    def test_matches_common_formats(self, phone: RegexMatcher, text: str, expected: str) -> None:
        assert phone.search(text) == expected

    @pytest.mark.parametrize(
        "text",
        [
            "code 12345",
            "posted 2024-01-15",
            "Trip from 15-01-2024",
            "on 3.7.2023 we met",
            "Back in 2019-2020 I worked here",
            "posted 2024-01-15 1234",
            "order 1234567890123456",
            "no digits here",
        ],
    )
    def test_rejects_non_phone_numbers(self, phone: RegexMatcher, text: str) -> None:
        assert phone.search(text) is None

    def test_country_code_not_counted_in_digit_range(self, phone: RegexMatcher) -> None:
        # 11 national digits plus a 2-digit country code
        assert phone.search("+44 20 7946 09581") == "+44 20 7946 09581"

    def test_phone_after_date_still_found(self, phone: RegexMatcher) -> None:
        assert phone.search("on 15-01-2024 call 555-123-4567") == "555-123-4567"


class TestEmailMatcher:
    def test_matches_case_insensitively(self) -> None:
        matcher = RegexMatcher(EMAIL_PATTERN)
        assert matcher.search("write to TEST@Example.COM please") == "TEST@Example.COM"

    def test_rejects_missing_tld(self) -> None:
        matcher = RegexMatcher(EMAIL_PATTERN)
        assert matcher.search("user@localhost") is None


class TestKeywordMatcher:
    def test_matches_whole_word_case_insensitively(self) -> None:
        matcher = KeywordMatcher(ADDRESS_KEYWORDS)
        assert matcher.search("I live on Main STREET") == "STREET"

    def test_keeps_dot_in_abbreviation(self) -> None:
        matcher = KeywordMatcher(ADDRESS_KEYWORDS)
        assert matcher.search("42 Elm St. apartment 3") == "St."

    @pytest.mark.parametrize("text", ["Contact me", "always here", "a great drawing", "underdrive"])
    def test_does_not_fire_inside_words(self, text: str) -> None:
        matcher = KeywordMatcher(ADDRESS_KEYWORDS)
        assert matcher.search(text) is None

    def test_empty_keyword_set_never_matches(self) -> None:
        assert KeywordMatcher(frozenset()).search("street") is None


class TestRuleTable:
    def test_default_table_order_and_weights(self) -> None:
        table = RuleTable.default()
        assert table.labels == ("PHONE", "EMAIL", "ADDRESS")
        assert [rule.weight for rule in table.rules] == [4, 4, 3]
        assert table.max_score == 10

    def test_labels_are_plain_strings(self) -> None:
        table = RuleTable.default()
        assert all(type(label) is str for label in table.labels)
        assert table.labels[0] == PiiType.PHONE.value

    def test_from_config_applies_weights(self) -> None:
        config = ScoringConfig(weights={"PHONE": 1, "EMAIL": 2, "ADDRESS": 0}, max_score=7)
        table = RuleTable.from_config(config)
        assert [rule.weight for rule in table.rules] == [1, 2, 0]
        assert table.max_score == 7

    def test_rules_carry_recommendations(self) -> None:
        table = RuleTable.default()
        assert all(rule.recommendation for rule in table.rules)

    def test_rejects_non_positive_max_score(self) -> None:
        with pytest.raises(ValueError, match="max_score"):
            RuleTable(rules=(), max_score=0)

    def test_rejects_negative_weight(self) -> None:
        rule = Rule(label="X", weight=-1, matcher=RegexMatcher(re.compile("x")))
        with pytest.raises(ValueError, match="negative weight"):
            RuleTable(rules=(rule,))

    def test_is_immutable(self) -> None:
        table = RuleTable.default()
        with pytest.raises(AttributeError):
            table.max_score = 3  # type: ignore[misc]
