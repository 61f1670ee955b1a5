"""Repository protocol definitions for the data gateway."""

from .auth import AuthGateway, Identity
from .category import CategoryRepository
from .profile import ProfileRepository
from .transaction import TransactionQuery, TransactionRepository

__all__ = [
    "AuthGateway",
    "CategoryRepository",
    "Identity",
    "ProfileRepository",
    "TransactionQuery",
    "TransactionRepository",
]
