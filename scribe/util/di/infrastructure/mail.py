"""Mail infrastructure providers."""

from dishka import Scope, provide

from scribe.adapter.mail import HttpMailClient, MailClient
from scribe.config import NotificationSettings
from scribe.util.di.base import ProviderBase


class MailProvider(ProviderBase):
    """Mail component base."""

    __mock_component__ = "mail"


class ProdMailProvider(MailProvider):
    """Production mail provider using the HTTP mail relay."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_mail_client(self, settings: NotificationSettings) -> MailClient:
        """Provide mail client.

        Delivery stays disabled until NOTIFICATIONS__RELAY_URL is set.
        """
        return HttpMailClient(
            relay_url=settings.relay_url,
            sender=settings.sender,
            api_key=settings.api_key,
        )
