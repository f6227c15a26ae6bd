"""Site setting entity."""

from datetime import datetime

from pydantic import Field

from scribe.domain.model.common import DomainModel, utcnow

COMMENT_AUTO_APPROVE = "comment_auto_approve"


class SiteSetting(DomainModel):
    """Key/value row edited from the admin settings page."""

    key: str = Field(min_length=1, max_length=100)
    value: str
    updated_at: datetime = Field(default_factory=utcnow)
