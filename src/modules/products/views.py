"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.
Domain exceptions are caught and translated into HTTP status codes;
this is the only layer that knows about status codes:

- ``InvalidInputError`` / malformed body -> 400
- ``NotFoundError`` -> 404
- ``PersistenceError`` -> 500
"""

from __future__ import annotations

from typing import Any, Callable, Dict

import structlog
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.core.exceptions import PersistenceError
from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.exceptions import InvalidInputError, NotFoundError
from modules.products.repositories import get_product_repository
from modules.products.serializers import ProductSerializer
from modules.products.services import ProductService

logger = structlog.get_logger(__name__)


def _detail(message: str, code: int) -> Response:
    return Response({"detail": message}, status=code)


class ProductViewSet(ViewSet):
    """ViewSet for Product CRUD operations.

    Uses ``ProductService`` with the repository chosen by
    ``get_product_repository`` (DIP).  All store access goes through the
    service/repository layer.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=get_product_repository())

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/products/"""
        try:
            products = self._service.get_all_products()
        except PersistenceError as exc:
            return self._persistence_failure(exc)
        data = ProductSerializer(products, many=True).data
        return Response({"products": data, "count": len(data)})

    @action(detail=False, methods=["get"], url_path="category")
    def category(self, request: Request) -> Response:
        """GET /api/v1/products/category/?category=<name>"""
        category = request.query_params.get("category", "")
        try:
            products = self._service.get_products_by_category(category)
        except InvalidInputError as exc:
            return _detail(str(exc), status.HTTP_400_BAD_REQUEST)
        except PersistenceError as exc:
            return self._persistence_failure(exc)
        data = ProductSerializer(products, many=True).data
        return Response({"products": data, "category": category, "count": len(data)})

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        return self._run(lambda: self._service.get_product(pk or ""))

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        try:
            dto = CreateProductDTO.model_validate(self._body(request))
        except (PydanticValidationError, ValueError) as exc:
            return _detail(str(exc), status.HTTP_400_BAD_REQUEST)

        return self._run(
            lambda: self._service.create_product(dto),
            success_status=status.HTTP_201_CREATED,
        )

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/products/{pk}/

        Only the fields present in the body are changed.
        """
        try:
            dto = UpdateProductDTO.model_validate(self._body(request))
        except (PydanticValidationError, ValueError) as exc:
            return _detail(str(exc), status.HTTP_400_BAD_REQUEST)

        return self._run(lambda: self._service.update_product(pk or "", dto))

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/products/{pk}/"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/products/{pk}/"""
        try:
            self._service.delete_product(pk or "")
        except InvalidInputError as exc:
            return _detail(str(exc), status.HTTP_400_BAD_REQUEST)
        except NotFoundError:
            return _detail("Product not found.", status.HTTP_404_NOT_FOUND)
        except PersistenceError as exc:
            return self._persistence_failure(exc)
        return Response({"message": "Product deleted successfully"})

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _body(request: Request) -> Dict[str, Any]:
        if not isinstance(request.data, dict):
            raise ValueError("Request body must be a JSON object.")
        return request.data

    def _run(self, call: Callable[[], Any], success_status: int = status.HTTP_200_OK) -> Response:
        try:
            product = call()
        except InvalidInputError as exc:
            return _detail(str(exc), status.HTTP_400_BAD_REQUEST)
        except NotFoundError:
            return _detail("Product not found.", status.HTTP_404_NOT_FOUND)
        except PersistenceError as exc:
            return self._persistence_failure(exc)
        return Response(ProductSerializer(product).data, status=success_status)

    @staticmethod
    def _persistence_failure(exc: PersistenceError) -> Response:
        logger.error("product.request_failed", error=str(exc))
        return _detail(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
