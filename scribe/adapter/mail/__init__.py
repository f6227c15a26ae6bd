"""Mail adapter."""

from .client import HttpMailClient, MailClient, MailMessage, MockMailClient

__all__ = ["HttpMailClient", "MailClient", "MailMessage", "MockMailClient"]
