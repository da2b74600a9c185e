"""Product repositories package.

``get_product_repository`` is the composition point: it picks the
concrete backend named by ``settings.PRODUCTS_REPOSITORY_BACKEND``.
"""

from __future__ import annotations

from functools import lru_cache

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from modules.core.dynamodb import get_products_table
from modules.products.repositories.dynamodb_repository import ProductDynamoDBRepository
from modules.products.repositories.interfaces import IProductRepository
from modules.products.repositories.memory_repository import ProductInMemoryRepository

__all__ = [
    "IProductRepository",
    "ProductDynamoDBRepository",
    "ProductInMemoryRepository",
    "get_product_repository",
]


@lru_cache(maxsize=1)
def _shared_memory_repository() -> ProductInMemoryRepository:
    return ProductInMemoryRepository()


def get_product_repository() -> IProductRepository:
    """Build the repository configured for this process."""
    backend = settings.PRODUCTS_REPOSITORY_BACKEND
    if backend == "dynamodb":
        return ProductDynamoDBRepository(table=get_products_table())
    if backend == "memory":
        # One instance per process, otherwise every request sees an empty store.
        return _shared_memory_repository()
    raise ImproperlyConfigured(
        f"Unknown PRODUCTS_REPOSITORY_BACKEND {backend!r}; expected 'dynamodb' or 'memory'."
    )
