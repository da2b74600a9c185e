"""Product service layer (Use Cases).

Orchestrates business logic for the Product entity, delegating
persistence to the injected ``IProductRepository``.

Business rules enforced here:
- Create: name, category and SKU are required; price > 0; stock >= 0.
- Update: the same rules, applied only to fields present in the request.
- Lookups, updates and deletes need a non-empty id and an existing record.

Nothing is recovered here: ``PersistenceError`` from the repository
propagates unchanged, validation failures become ``InvalidInputError``
and missing records become ``NotFoundError``.

Known race: ``update_product`` is read-modify-write with a full
overwrite and no version check, so two concurrent updates of the same
product are last-write-wins.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog

from modules.products.exceptions import InvalidInputError, NotFoundError
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Validation (pure functions, no I/O)
# ---------------------------------------------------------------------------


def validate_create_request(dto: CreateProductDTO) -> None:
    """Raise ``InvalidInputError`` for the first rule ``dto`` breaks."""
    if not dto.name:
        raise InvalidInputError("product name is required")
    if dto.price <= 0:
        raise InvalidInputError("product price must be greater than 0")
    if not dto.category:
        raise InvalidInputError("product category is required")
    if not dto.sku:
        raise InvalidInputError("product SKU is required")
    if dto.stock < 0:
        raise InvalidInputError("product stock cannot be negative")


def validate_update_request(dto: UpdateProductDTO) -> None:
    """Like ``validate_create_request`` but only for fields present in ``dto``."""
    if dto.is_present("price") and dto.price <= 0:
        raise InvalidInputError("product price must be greater than 0")
    if dto.is_present("stock") and dto.stock < 0:
        raise InvalidInputError("product stock cannot be negative")
    if dto.is_present("name") and not dto.name:
        raise InvalidInputError("product name cannot be empty")
    if dto.is_present("category") and not dto.category:
        raise InvalidInputError("product category cannot be empty")
    if dto.is_present("sku") and not dto.sku:
        raise InvalidInputError("product SKU cannot be empty")


def _require_id(id: str) -> None:
    if not id:
        raise InvalidInputError("product ID cannot be empty")


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    Holds no other state, so one instance may serve concurrent requests.
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(self, dto: CreateProductDTO) -> Product:
        """Validate ``dto``, build the product and persist it.

        Raises:
            InvalidInputError: if a creation rule is broken.
            PersistenceError: if the store write fails.
        """
        try:
            validate_create_request(dto)
        except InvalidInputError as exc:
            logger.warning("product.invalid_create", sku=dto.sku, reason=str(exc))
            raise

        product = Product.new(dto)
        self._repo.create(product)
        logger.info("product.created", product_id=product.id, sku=product.sku)
        return product

    def update_product(self, id: str, dto: UpdateProductDTO) -> Product:
        """Apply the fields present in ``dto`` to an existing product.

        Raises:
            InvalidInputError: if ``id`` is empty or a present field is invalid.
            NotFoundError: if the product does not exist.
            PersistenceError: if the store read or write fails.
        """
        _require_id(id)
        log = logger.bind(product_id=id)

        product = self._load(id)

        try:
            validate_update_request(dto)
        except InvalidInputError as exc:
            log.warning("product.invalid_update", reason=str(exc))
            raise

        product.apply(dto)
        self._repo.update(product)
        log.info("product.updated", fields=sorted(dto.model_fields_set))
        return product

    def delete_product(self, id: str) -> None:
        """Hard-delete a product after checking that it exists.

        Raises:
            InvalidInputError: if ``id`` is empty.
            NotFoundError: if the product does not exist.
            PersistenceError: if the store read or delete fails.
        """
        _require_id(id)
        self._load(id)
        self._repo.delete(id)
        logger.info("product.deleted", product_id=id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_product(self, id: str) -> Product:
        """Retrieve a single product by ID, active or not.

        Raises:
            InvalidInputError: if ``id`` is empty.
            NotFoundError: if the product does not exist.
        """
        _require_id(id)
        return self._load(id)

    def get_all_products(self) -> List[Product]:
        """Return all active products."""
        return self._repo.get_all()

    def get_products_by_category(self, category: str) -> List[Product]:
        """Return active products in ``category``.

        Raises:
            InvalidInputError: if ``category`` is empty.
        """
        if not category:
            raise InvalidInputError("category cannot be empty")
        return self._repo.get_by_category(category)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _load(self, id: str) -> Product:
        product = self._repo.get_by_id(id)
        if product is None:
            logger.info("product.not_found", product_id=id)
            raise NotFoundError(f"product {id} not found")
        return product
