"""Unit tests for the anti-spam filters and pipeline."""

import pytest

from scribe.domain.service import (
    AntiSpamService,
    CommentRateLimiter,
    ContentRules,
    check_honeypot,
    filter_content,
)
from scribe.domain.value import AntiSpamResult, SpamReason
from tests.conftest import FakeClock

IP = "192.0.2.1"


class TestCheckHoneypot:
    """Tests for check_honeypot."""

    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
    def test_empty_values_pass(self, value):
        assert check_honeypot(value).passed is True

    def test_any_text_fails(self):
        result = check_honeypot("http://spam.example")

        assert result.passed is False
        assert result.reason == SpamReason.HONEYPOT


class TestFilterContent:
    """Tests for filter_content."""

    def test_single_character_is_too_short(self):
        assert filter_content("a").reason == SpamReason.CONTENT_TOO_SHORT

    def test_two_characters_pass(self):
        assert filter_content("ok").passed is True

    def test_length_counts_raw_whitespace(self):
        """Two spaces are two characters."""
        assert filter_content("  ").passed is True

    def test_length_boundaries(self):
        assert filter_content("a" * 5000).passed is True
        assert filter_content("a" * 5001).reason == SpamReason.CONTENT_TOO_LONG

    @pytest.mark.parametrize("content", ["Buy VIAGRA now", "this is Spam", "SPAMMY"])
    def test_forbidden_words_case_insensitive(self, content):
        assert filter_content(content).reason == SpamReason.FORBIDDEN_WORD

    def test_three_links_pass_four_fail(self):
        three = "see http://a.example https://b.example http://c.example"
        four = three + " https://d.example"

        assert filter_content(three).passed is True
        assert filter_content(four).reason == SpamReason.TOO_MANY_LINKS

    def test_length_checked_before_forbidden_words(self):
        """A too long text mentioning spam is reported as too long."""
        content = "spam " + "a" * 5000

        assert filter_content(content).reason == SpamReason.CONTENT_TOO_LONG

    def test_forbidden_word_checked_before_links(self):
        content = "spam " + " ".join(f"http://{i}.example" for i in range(5))

        assert filter_content(content).reason == SpamReason.FORBIDDEN_WORD

    def test_custom_rules(self):
        rules = ContentRules(forbidden_words=("casino",), max_links=0)

        assert filter_content("online casino", rules).reason == SpamReason.FORBIDDEN_WORD
        assert filter_content("see http://a.example", rules).reason == SpamReason.TOO_MANY_LINKS
        assert filter_content("spam is fine here", rules).passed is True

    def test_pass_has_no_reason(self):
        assert filter_content("Great article, thanks!") == AntiSpamResult.ok()


class TestAntiSpamService:
    """Tests for AntiSpamService.check_anti_spam."""

    def _service(self) -> AntiSpamService:
        return AntiSpamService(CommentRateLimiter(clock=FakeClock()))

    def test_clean_submission_passes(self):
        result = self._service().check_anti_spam("Thanks for this", None, IP)

        assert result.passed is True
        assert result.reason is None

    def test_honeypot_wins_over_content(self):
        """Honeypot is reported even when the content is also bad."""
        result = self._service().check_anti_spam("viagra", "filled", IP)

        assert result.reason == SpamReason.HONEYPOT

    def test_honeypot_wins_over_rate_limit_and_short_content(self):
        service = self._service()
        for _ in range(3):
            service.check_anti_spam("hello", None, IP)
        assert service.check_anti_spam("hello", None, IP).reason == SpamReason.RATE_LIMIT

        result = service.check_anti_spam("x", "bot", IP)

        assert result.passed is False
        assert result.reason == SpamReason.HONEYPOT

    def test_honeypot_does_not_consume_rate_limit(self):
        """Bot submissions caught by the honeypot don't count against the IP."""
        service = self._service()
        for _ in range(5):
            service.check_anti_spam("hello", "bot", IP)

        assert service.check_anti_spam("hello", None, IP).passed is True

    def test_rate_limit_checked_before_content(self):
        service = self._service()
        for _ in range(3):
            service.check_anti_spam("x", None, IP)

        result = service.check_anti_spam("x", None, IP)

        assert result.reason == SpamReason.RATE_LIMIT

    def test_rejected_content_still_counts_against_rate_limit(self):
        service = self._service()
        for _ in range(3):
            assert service.check_anti_spam("buy viagra", None, IP).reason == SpamReason.FORBIDDEN_WORD

        assert service.check_anti_spam("legit", None, IP).reason == SpamReason.RATE_LIMIT

    def test_serialises_with_pass_alias(self):
        result = AntiSpamResult.reject(SpamReason.HONEYPOT)

        assert result.model_dump(by_alias=True, mode="json") == {
            "pass": False,
            "reason": "honeypot",
        }
