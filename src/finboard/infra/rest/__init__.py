"""REST gateway for a PostgREST/GoTrue backend-as-a-service."""

from .auth import RestAuthGateway
from .client import RestClient
from .repositories import (
    RestCategoryRepository,
    RestProfileRepository,
    RestTransactionRepository,
)

__all__ = [
    "RestAuthGateway",
    "RestCategoryRepository",
    "RestClient",
    "RestProfileRepository",
    "RestTransactionRepository",
]
