"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str, resource: str | None = None):
        self.resource = resource
        super().__init__(message)


class PostNotPublishedError(NotFoundError):
    """Raised when commenting on a post that is not published."""

    def __init__(self, post_id: str):
        self.post_id = post_id
        super().__init__("Cannot comment on unpublished post", resource="post")


class BatchLimitExceededError(ValidationError):
    """Raised when a bulk moderation request names too many comments."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Cannot batch update more than {limit} comments at once")


class NotAuthorizedError(DomainError):
    """Raised when a caller presents missing or wrong admin credentials."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class LockedOutError(NotAuthorizedError):
    """Raised when an IP is locked out after repeated failed logins."""

    def __init__(self, retry_after_ms: int):
        self.retry_after_ms = retry_after_ms
        super().__init__("Too many failed attempts, try again later")

    @property
    def retry_after_seconds(self) -> int:
        # Round up so clients never retry while still locked
        return max(1, -(-self.retry_after_ms // 1000))
