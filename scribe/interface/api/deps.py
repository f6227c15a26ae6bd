"""Request helpers shared by the route modules."""

from fastapi import HTTPException, Request, status

from scribe.domain.error import LockedOutError, NotAuthorizedError
from scribe.domain.service import AdminAuthService
from scribe.domain.value import AdminUser

UNKNOWN_IP = "0.0.0.0"


def client_ip(request: Request) -> str:
    """Best-effort client address.

    First hop of X-Forwarded-For, then X-Real-IP, then the socket peer.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = request.headers.get("x-real-ip", "").strip()
    if real_ip:
        return real_ip

    if request.client and request.client.host:
        return request.client.host

    return UNKNOWN_IP


def bearer_token(request: Request) -> str | None:
    """Token from an ``Authorization: Bearer ...`` header, if present."""
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def authorize_admin(request: Request, admin_auth_service: AdminAuthService) -> AdminUser:
    """Authenticate an admin request or raise the matching HTTP error.

    Raises:
        HTTPException: 429 with Retry-After when the IP is locked out,
            401 when the token is missing or wrong
    """
    try:
        return admin_auth_service.authenticate(bearer_token(request), client_ip(request))
    except LockedOutError as e:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=str(e),
            headers={"Retry-After": str(e.retry_after_seconds)},
        )
    except NotAuthorizedError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )


def parse_int(value: str | None, default: int) -> int:
    """Parse a query parameter leniently, falling back to ``default``."""
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default
