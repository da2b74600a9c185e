"""Integration tests for ProductDynamoDBRepository against moto.

Covers:
- Attribute map layout written to the table.
- Point operations and idempotent delete.
- Filtered scans (active only, category) and scan pagination.
- Store and decoding failures surfacing as PersistenceError.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from modules.core.exceptions import PersistenceError
from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.models import Product
from modules.products.repositories.dynamodb_repository import (
    ProductDynamoDBRepository,
    item_to_product,
    product_to_item,
)

pytestmark = pytest.mark.integration


def _make_product(**overrides) -> Product:
    defaults = {
        "name": "Widget",
        "description": "A fine widget",
        "price": 9.99,
        "category": "tools",
        "sku": "W-1",
        "stock": 5,
    }
    defaults.update(overrides)
    return Product.new(CreateProductDTO(**defaults))


def _client_error(operation: str) -> ClientError:
    return ClientError(
        {"Error": {"Code": "ProvisionedThroughputExceededException", "Message": "slow down"}},
        operation,
    )


@pytest.fixture()
def repo(dynamodb_table):
    return ProductDynamoDBRepository(table=dynamodb_table)


# ===========================================================================
# Serialisation
# ===========================================================================


class TestItemMapping:
    def test_item_keys_mirror_product_fields(self):
        item = product_to_item(_make_product())
        assert set(item) == {
            "id",
            "name",
            "description",
            "price",
            "category",
            "sku",
            "stock",
            "is_active",
            "created_at",
            "updated_at",
        }

    def test_price_stored_as_exact_decimal(self):
        assert product_to_item(_make_product())["price"] == Decimal("9.99")

    def test_round_trip_preserves_product(self):
        product = _make_product()
        assert item_to_product(product_to_item(product)) == product


# ===========================================================================
# Point operations
# ===========================================================================


class TestPointOperations:
    def test_create_writes_attribute_map(self, repo, dynamodb_table):
        product = _make_product()

        repo.create(product)

        item = dynamodb_table.get_item(Key={"id": product.id})["Item"]
        assert item["name"] == "Widget"
        assert item["price"] == Decimal("9.99")
        assert item["stock"] == 5
        assert item["is_active"] is True
        assert item["created_at"] == product.created_at.isoformat()

    def test_get_by_id(self, repo):
        product = _make_product()
        repo.create(product)

        assert repo.get_by_id(product.id) == product

    def test_get_missing_returns_none(self, repo):
        assert repo.get_by_id("missing-id") is None

    def test_update_overwrites_full_record(self, repo):
        product = _make_product()
        repo.create(product)

        product.apply(UpdateProductDTO(price=12.5, description=""))
        repo.update(product)

        stored = repo.get_by_id(product.id)
        assert stored.price == 12.5
        assert stored.description == ""
        assert stored.updated_at == product.updated_at

    def test_delete_removes_item(self, repo):
        product = _make_product()
        repo.create(product)

        repo.delete(product.id)

        assert repo.get_by_id(product.id) is None

    def test_delete_missing_is_not_an_error(self, repo):
        repo.delete("missing-id")
        repo.delete("missing-id")


# ===========================================================================
# Scans
# ===========================================================================


class TestScans:
    def test_get_all_returns_only_active(self, repo):
        active = _make_product(name="Active")
        hidden = _make_product(name="Hidden")
        hidden.apply(UpdateProductDTO(is_active=False))
        repo.create(active)
        repo.create(hidden)

        assert [p.id for p in repo.get_all()] == [active.id]

    def test_get_all_empty_table(self, repo):
        assert repo.get_all() == []

    def test_get_by_category(self, repo):
        tool = _make_product(category="tools")
        lamp = _make_product(category="home")
        retired = _make_product(category="tools")
        retired.apply(UpdateProductDTO(is_active=False))
        for product in (tool, lamp, retired):
            repo.create(product)

        assert [p.id for p in repo.get_by_category("tools")] == [tool.id]
        assert [p.id for p in repo.get_by_category("home")] == [lamp.id]
        assert repo.get_by_category("garden") == []

    def test_scan_follows_last_evaluated_key(self):
        first, second = _make_product(name="First"), _make_product(name="Second")
        table = MagicMock()
        table.scan.side_effect = [
            {"Items": [product_to_item(first)], "LastEvaluatedKey": {"id": first.id}},
            {"Items": [product_to_item(second)]},
        ]

        products = ProductDynamoDBRepository(table=table).get_all()

        assert [p.id for p in products] == [first.id, second.id]
        assert table.scan.call_count == 2
        assert table.scan.call_args.kwargs["ExclusiveStartKey"] == {"id": first.id}


# ===========================================================================
# Failures
# ===========================================================================


class TestFailures:
    @pytest.mark.parametrize(
        "method, args, table_call",
        [
            ("create", None, "put_item"),
            ("update", None, "put_item"),
            ("get_by_id", ("id1",), "get_item"),
            ("get_all", (), "scan"),
            ("get_by_category", ("tools",), "scan"),
            ("delete", ("id1",), "delete_item"),
        ],
    )
    def test_store_errors_are_wrapped(self, method, args, table_call):
        table = MagicMock()
        getattr(table, table_call).side_effect = _client_error(table_call)
        repo = ProductDynamoDBRepository(table=table)
        if args is None:
            args = (_make_product(),)

        with pytest.raises(PersistenceError) as excinfo:
            getattr(repo, method)(*args)

        assert isinstance(excinfo.value.__cause__, ClientError)

    def test_malformed_item_is_wrapped(self):
        table = MagicMock()
        table.get_item.return_value = {"Item": {"id": "id1", "name": "No price"}}

        with pytest.raises(PersistenceError) as excinfo:
            ProductDynamoDBRepository(table=table).get_by_id("id1")

        assert isinstance(excinfo.value.__cause__, KeyError)

    def test_unserialisable_price_is_wrapped(self):
        table = MagicMock()
        product = _make_product()
        product.price = float("nan")

        with pytest.raises(PersistenceError):
            ProductDynamoDBRepository(table=table).create(product)
