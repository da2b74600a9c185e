"""DynamoDB implementation of the Product repository.

Satisfies ``IProductRepository`` with a boto3 ``Table`` resource that is
injected at construction time.  Every write is a full ``put_item``
overwrite; scans filter on the server side and follow
``LastEvaluatedKey`` until the table is exhausted.

Error handling follows the Null Object pattern for look-ups: a missing
key yields ``None`` and the Service Layer decides what that means.
Anything that goes wrong talking to the store, or turning an item back
into a ``Product``, is raised as ``PersistenceError``.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

import structlog
from boto3.dynamodb.conditions import Attr, ConditionBase
from botocore.exceptions import BotoCoreError, ClientError

from modules.core.exceptions import PersistenceError
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

_STORE_ERRORS = (BotoCoreError, ClientError)
_CODEC_ERRORS = (KeyError, TypeError, ValueError, ArithmeticError)


def product_to_item(product: Product) -> Dict[str, Any]:
    """Serialise a product to a DynamoDB attribute map.

    Numbers go through ``str`` into ``Decimal`` because boto3 refuses
    floats; timestamps are stored as ISO-8601 strings.
    """
    price = Decimal(str(product.price))
    if not price.is_finite():
        raise ValueError(f"price must be a finite number, got {product.price!r}")
    return {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "price": price,
        "category": product.category,
        "sku": product.sku,
        "stock": int(product.stock),
        "is_active": bool(product.is_active),
        "created_at": product.created_at.isoformat(),
        "updated_at": product.updated_at.isoformat(),
    }


def item_to_product(item: Dict[str, Any]) -> Product:
    """Rebuild a ``Product`` from a DynamoDB attribute map."""
    return Product(
        id=item["id"],
        name=item["name"],
        description=item.get("description", ""),
        price=float(item["price"]),
        category=item["category"],
        sku=item["sku"],
        stock=int(item["stock"]),
        is_active=bool(item["is_active"]),
        created_at=datetime.fromisoformat(item["created_at"]),
        updated_at=datetime.fromisoformat(item["updated_at"]),
    )


class ProductDynamoDBRepository(IProductRepository):
    """Concrete Product repository backed by a DynamoDB table."""

    def __init__(self, table: Any) -> None:
        self._table = table

    # ------------------------------------------------------------------
    # Point operations
    # ------------------------------------------------------------------

    def create(self, entity: Product) -> None:
        """Write the full record; an existing item with the same id is replaced."""
        self._put(entity, operation="create")

    def update(self, entity: Product) -> None:
        """Overwrite the full record keyed by ``entity.id``."""
        self._put(entity, operation="update")

    def get_by_id(self, id: str) -> Optional[Product]:
        """Point lookup by primary key.  Returns ``None`` when the key is absent."""
        try:
            response = self._table.get_item(Key={"id": id})
        except _STORE_ERRORS as exc:
            raise self._failure("get_by_id", exc, product_id=id) from exc

        item = response.get("Item")
        if item is None:
            return None
        return self._decode(item, "get_by_id")

    def delete(self, id: str) -> None:
        """Unconditional delete.  Deleting a missing key is a no-op."""
        try:
            self._table.delete_item(Key={"id": id})
        except _STORE_ERRORS as exc:
            raise self._failure("delete", exc, product_id=id) from exc
        logger.info("product.deleted_from_store", product_id=id)

    # ------------------------------------------------------------------
    # Scans
    # ------------------------------------------------------------------

    def get_all(self) -> List[Product]:
        return self._scan(Attr("is_active").eq(True), operation="get_all")

    def get_by_category(self, category: str) -> List[Product]:
        condition = Attr("category").eq(category) & Attr("is_active").eq(True)
        return self._scan(condition, operation="get_by_category")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _put(self, entity: Product, operation: str) -> None:
        try:
            item = product_to_item(entity)
        except _CODEC_ERRORS as exc:
            raise self._failure(operation, exc, product_id=entity.id) from exc
        try:
            self._table.put_item(Item=item)
        except _STORE_ERRORS as exc:
            raise self._failure(operation, exc, product_id=entity.id) from exc
        logger.info("product.saved", operation=operation, product_id=entity.id, sku=entity.sku)

    def _scan(self, condition: ConditionBase, operation: str) -> List[Product]:
        kwargs: Dict[str, Any] = {"FilterExpression": condition}
        products: List[Product] = []
        while True:
            try:
                response = self._table.scan(**kwargs)
            except _STORE_ERRORS as exc:
                raise self._failure(operation, exc) from exc
            products.extend(self._decode(item, operation) for item in response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return products
            kwargs["ExclusiveStartKey"] = last_key

    def _decode(self, item: Dict[str, Any], operation: str) -> Product:
        try:
            return item_to_product(item)
        except _CODEC_ERRORS as exc:
            raise self._failure(operation, exc, product_id=item.get("id")) from exc

    def _failure(self, operation: str, exc: Exception, **context: Any) -> PersistenceError:
        logger.error(
            "product.persistence_error",
            operation=operation,
            table=getattr(self._table, "name", None),
            error=str(exc),
            **context,
        )
        return PersistenceError(f"product store {operation} failed: {exc}")
