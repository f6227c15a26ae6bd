"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    pass


class MailDeliveryError(ProviderError):
    """The mail relay refused or failed to accept a message."""

    pass
