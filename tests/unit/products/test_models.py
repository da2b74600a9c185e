"""Unit tests for the Product entity.

Covers:
- Product.new: id generation, defaults, timestamps.
- Product.apply: present vs absent fields, updated_at always advancing.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone as dt_timezone
from unittest.mock import patch

import pytest

from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.models import Product

pytestmark = pytest.mark.unit

FROZEN = datetime(2026, 1, 1, 12, 0, 0, tzinfo=dt_timezone.utc)


def _create_dto(**overrides) -> CreateProductDTO:
    defaults = {
        "name": "Widget",
        "description": "A fine widget",
        "price": 9.99,
        "category": "tools",
        "sku": "W-1",
        "stock": 5,
    }
    defaults.update(overrides)
    return CreateProductDTO(**defaults)


# ===========================================================================
# Product.new
# ===========================================================================


class TestNewProduct:
    def test_copies_request_fields(self):
        product = Product.new(_create_dto())

        assert product.name == "Widget"
        assert product.description == "A fine widget"
        assert product.price == 9.99
        assert product.category == "tools"
        assert product.sku == "W-1"
        assert product.stock == 5

    def test_assigns_non_empty_id(self):
        product = Product.new(_create_dto())
        assert isinstance(product.id, str)
        assert product.id

    def test_ids_are_unique(self):
        ids = {Product.new(_create_dto()).id for _ in range(50)}
        assert len(ids) == 50

    def test_starts_active(self):
        assert Product.new(_create_dto()).is_active is True

    def test_created_equals_updated(self):
        product = Product.new(_create_dto())
        assert product.created_at == product.updated_at
        assert product.created_at.tzinfo is not None

    def test_performs_no_validation(self):
        product = Product.new(_create_dto(name="", price=-1, stock=-3))
        assert product.name == ""
        assert product.price == -1
        assert product.stock == -3


# ===========================================================================
# Product.apply
# ===========================================================================


class TestApply:
    def test_overwrites_present_fields(self):
        product = Product.new(_create_dto())

        product.apply(UpdateProductDTO(name="Gadget", price=12.5, is_active=False))

        assert product.name == "Gadget"
        assert product.price == 12.5
        assert product.is_active is False

    def test_absent_fields_untouched(self):
        product = Product.new(_create_dto())
        before = replace(product)

        product.apply(UpdateProductDTO(price=12.5))

        assert product.id == before.id
        assert product.name == before.name
        assert product.description == before.description
        assert product.category == before.category
        assert product.sku == before.sku
        assert product.stock == before.stock
        assert product.is_active == before.is_active
        assert product.created_at == before.created_at

    def test_present_empty_and_zero_values_are_applied(self):
        product = Product.new(_create_dto())

        product.apply(UpdateProductDTO(description="", stock=0))

        assert product.description == ""
        assert product.stock == 0

    def test_updated_at_advances_even_without_changes(self):
        product = Product.new(_create_dto())
        before = product.updated_at

        product.apply(UpdateProductDTO())

        assert product.updated_at > before
        assert product.updated_at >= product.created_at

    def test_updated_at_strictly_increases_when_clock_stands_still(self):
        with patch("modules.products.models.timezone.now", return_value=FROZEN):
            product = Product.new(_create_dto())
            product.apply(UpdateProductDTO(stock=1))
            first = product.updated_at
            product.apply(UpdateProductDTO(stock=2))

        assert first > FROZEN
        assert product.updated_at > first
        assert product.created_at == FROZEN

    def test_updated_at_uses_clock_when_it_moved_forward(self):
        later = FROZEN + timedelta(seconds=30)
        with patch("modules.products.models.timezone.now", return_value=FROZEN):
            product = Product.new(_create_dto())
        with patch("modules.products.models.timezone.now", return_value=later):
            product.apply(UpdateProductDTO(name="Later"))

        assert product.updated_at == later
