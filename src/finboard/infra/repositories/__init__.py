"""SQLModel implementations of the gateway repositories."""

from .category import SQLModelCategoryRepository
from .profile import SQLModelProfileRepository
from .transaction import SQLModelTransactionRepository

__all__ = [
    "SQLModelCategoryRepository",
    "SQLModelProfileRepository",
    "SQLModelTransactionRepository",
]
