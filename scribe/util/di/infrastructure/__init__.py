"""Infrastructure providers."""

# Import bases
from .mail import MailProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .mail import ProdMailProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "MailProvider",
    "PersistenceProvider",
    "ProdMailProvider",
    "ProdPersistenceProvider",
]
