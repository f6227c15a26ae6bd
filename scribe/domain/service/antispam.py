"""Anti-spam checks for public comment submissions.

The filter functions are pure. AntiSpamService layers them with the
comment flood limiter in a fixed order:

1. Honeypot: a hidden form field only bots fill in. Cheapest and most
   certain, so it wins even when other checks would also fail.
2. Flood limit per IP, before any content inspection.
3. Content filter: length bounds, forbidden words, link count.
"""

import re
from dataclasses import dataclass
from typing import Optional

import logfire

from scribe.domain.value import AntiSpamResult, SpamReason

from .base import Service
from .rate_limiter import CommentRateLimiter

LINK_PATTERN = re.compile(r"https?://\S+", re.IGNORECASE)


@dataclass(frozen=True)
class ContentRules:
    """Thresholds applied by ``filter_content``."""

    forbidden_words: tuple[str, ...] = ("spam", "viagra")
    min_length: int = 2
    max_length: int = 5000
    max_links: int = 3


def check_honeypot(value: Optional[str]) -> AntiSpamResult:
    """Reject any submission whose honeypot field holds visible text."""
    if value is None or value.strip() == "":
        return AntiSpamResult.ok()
    return AntiSpamResult.reject(SpamReason.HONEYPOT)


def filter_content(content: str, rules: ContentRules = ContentRules()) -> AntiSpamResult:
    """Classify comment text, stopping at the first failing rule.

    Length is measured on the raw text, so two spaces count as two
    characters.
    """
    if len(content) < rules.min_length:
        return AntiSpamResult.reject(SpamReason.CONTENT_TOO_SHORT)

    if len(content) > rules.max_length:
        return AntiSpamResult.reject(SpamReason.CONTENT_TOO_LONG)

    lowered = content.lower()
    if any(word.lower() in lowered for word in rules.forbidden_words):
        return AntiSpamResult.reject(SpamReason.FORBIDDEN_WORD)

    if len(LINK_PATTERN.findall(content)) > rules.max_links:
        return AntiSpamResult.reject(SpamReason.TOO_MANY_LINKS)

    return AntiSpamResult.ok()


class AntiSpamService(Service):
    """Single decision point for public comment submissions."""

    def __init__(
        self,
        comment_rate_limiter: CommentRateLimiter,
        content_rules: ContentRules = ContentRules(),
    ) -> None:
        """Initialize anti-spam service.

        Args:
            comment_rate_limiter: Shared per-IP flood limiter
            content_rules: Thresholds for the content filter
        """
        self.comment_rate_limiter = comment_rate_limiter
        self.content_rules = content_rules

    def check_anti_spam(
        self,
        content: str,
        honeypot: Optional[str],
        ip_address: str,
    ) -> AntiSpamResult:
        """Run honeypot, flood and content checks; first failure wins.

        Args:
            content: Comment text as submitted
            honeypot: Value of the hidden form field
            ip_address: Client IP used as the flood limiter key

        Returns:
            The first failing result, or a passing result
        """
        with logfire.span("antispam_service.check_anti_spam", ip_address=ip_address):
            result = check_honeypot(honeypot)
            if not result.passed:
                return self._rejected(result, ip_address)

            result = self.comment_rate_limiter.check_rate_limit(ip_address)
            if not result.passed:
                return self._rejected(result, ip_address)

            result = filter_content(content, self.content_rules)
            if not result.passed:
                return self._rejected(result, ip_address)

            return result

    def _rejected(self, result: AntiSpamResult, ip_address: str) -> AntiSpamResult:
        logfire.info(
            "Comment rejected by anti-spam",
            reason=result.reason.value if result.reason else None,
            ip_address=ip_address,
        )
        return result
