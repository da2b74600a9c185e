"""Product repository interface.

Extends ``IRepository[Product]`` with the two scan queries the catalog
needs.  Both scans only ever return active products; inactive ones stay
reachable through ``get_by_id``.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product entity."""

    @abstractmethod
    def get_all(self) -> List[Product]:
        """Return every product with ``is_active == True`` (store order)."""

    @abstractmethod
    def get_by_category(self, category: str) -> List[Product]:
        """Return active products whose ``category`` equals ``category``."""
