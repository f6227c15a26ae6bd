"""Admin API authentication."""

import hmac

import logfire

from scribe.domain.error import LockedOutError, NotAuthorizedError
from scribe.domain.value import AdminUser

from .base import Service
from .rate_limiter import LoginRateLimiter


class AdminAuthService(Service):
    """Checks the admin bearer token, with brute-force lockout per IP."""

    def __init__(
        self,
        login_rate_limiter: LoginRateLimiter,
        api_token: str,
        admin: AdminUser,
    ) -> None:
        """Initialize admin auth service.

        Args:
            login_rate_limiter: Shared per-IP lockout tracker
            api_token: Expected bearer token
            admin: Identity returned on success
        """
        self.login_rate_limiter = login_rate_limiter
        self.api_token = api_token
        self.admin = admin

    def authenticate(self, token: str | None, ip_address: str) -> AdminUser:
        """Authenticate an admin request.

        A locked IP is refused before the token is looked at. A wrong or
        missing token counts as a failed attempt; a correct one clears the
        IP's record.

        Args:
            token: Bearer token from the request, if any
            ip_address: Client IP

        Returns:
            The administrator identity

        Raises:
            LockedOutError: If the IP is locked out
            NotAuthorizedError: If the token is missing or wrong
        """
        limiter = self.login_rate_limiter
        if limiter.is_rate_limited(ip_address):
            raise LockedOutError(limiter.get_remaining_lockout_time(ip_address))

        if not token or not hmac.compare_digest(token.encode(), self.api_token.encode()):
            limiter.record_failed_attempt(ip_address)
            logfire.warn("Admin authentication failed", ip_address=ip_address)
            if limiter.is_rate_limited(ip_address):
                raise LockedOutError(limiter.get_remaining_lockout_time(ip_address))
            raise NotAuthorizedError()

        limiter.clear_attempts(ip_address)
        return self.admin
