"""Product entity and its mutation rules.

The record is a plain dataclass: persistence lives behind
``IProductRepository`` and validation in ``ProductService``.  This module
only knows how a product is born (``Product.new``) and how an update
request is folded into it (``Product.apply``).

Rules implemented here:
- ``id`` is assigned once (UUIDv7) and never changes.
- ``is_active`` starts as ``True``; only an update can flip it.
- ``updated_at`` moves forward on every ``apply``, even when no field
  value actually changed.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

import uuid6
from django.utils import timezone

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO


@dataclass
class Product:
    """Catalog item persisted as a single attribute map."""

    id: str
    name: str
    description: str
    price: float
    category: str
    sku: str
    stock: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @classmethod
    def new(cls, dto: CreateProductDTO) -> Product:
        """Build a fresh product from an already validated create request."""
        now = timezone.now()
        return cls(
            id=str(uuid6.uuid7()),
            name=dto.name,
            description=dto.description,
            price=dto.price,
            category=dto.category,
            sku=dto.sku,
            stock=dto.stock,
            is_active=True,
            created_at=now,
            updated_at=now,
        )

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def apply(self, dto: UpdateProductDTO) -> None:
        """Overwrite every field present in ``dto`` and touch ``updated_at``."""
        for field, value in dto.present_fields().items():
            setattr(self, field, value)
        self.touch()

    def touch(self) -> None:
        now = timezone.now()
        # Clock resolution can hand back the same instant twice.
        if now <= self.updated_at:
            now = self.updated_at + timedelta(microseconds=1)
        self.updated_at = now

    def __str__(self) -> str:
        return f"{self.sku} - {self.name}"
