"""In-memory implementation of the Product repository.

Keeps products in a dict keyed by id.  Records are copied on the way in
and on the way out, so a caller holding a ``Product`` cannot change what
is "stored" without calling ``update``, mirroring a real document store.
No I/O, no side effects; used by tests and by local runs with
``PRODUCTS_REPOSITORY_BACKEND=memory``.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List, Optional

import structlog

from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductInMemoryRepository(IProductRepository):
    """Dict-backed Product repository."""

    def __init__(self, products: Optional[Iterable[Product]] = None) -> None:
        self._store: Dict[str, Product] = {}
        for product in products or []:
            self._store[product.id] = replace(product)

    def create(self, entity: Product) -> None:
        self._store[entity.id] = replace(entity)
        logger.info("product.saved", operation="create", product_id=entity.id)

    def update(self, entity: Product) -> None:
        self._store[entity.id] = replace(entity)
        logger.info("product.saved", operation="update", product_id=entity.id)

    def get_by_id(self, id: str) -> Optional[Product]:
        product = self._store.get(id)
        return replace(product) if product else None

    def get_all(self) -> List[Product]:
        return [replace(p) for p in self._store.values() if p.is_active]

    def get_by_category(self, category: str) -> List[Product]:
        return [
            replace(p)
            for p in self._store.values()
            if p.is_active and p.category == category
        ]

    def delete(self, id: str) -> None:
        self._store.pop(id, None)
