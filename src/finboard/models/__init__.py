"""SQLModel table exports."""

from .category import Category
from .profile import Profile
from .transaction import Transaction
from .user import AuthSession, User

__all__ = [
    "AuthSession",
    "Category",
    "Profile",
    "Transaction",
    "User",
]
