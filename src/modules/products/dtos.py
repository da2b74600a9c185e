"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF views) and the
Service layer.  DTOs are immutable (``frozen=True``) and only check
shape and types; business rules (positive price, non-empty name...)
are enforced by ``ProductService``.

Types are strict: a JSON boolean or a numeric string is not a number,
and a number is not a string.  Floats must be finite, so ``1e400``
(parsed as ``inf``) is rejected here rather than reaching the store.

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial product updates.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    ``is_active`` is deliberately absent: new products always start active.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", strict=True, allow_inf_nan=False)

    name: str
    description: str = ""
    price: float
    category: str
    sku: str
    stock: int


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    Every field is optional and presence-sensitive: a field the caller
    did not send is absent (``model_fields_set`` does not contain it),
    while an empty string or zero is a real value.  Explicit ``null`` is
    rejected so it can never be mistaken for "leave unchanged".
    """

    model_config = ConfigDict(frozen=True, extra="ignore", strict=True, allow_inf_nan=False)

    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    category: Optional[str] = None
    sku: Optional[str] = None
    stock: Optional[int] = None
    is_active: Optional[bool] = None

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("field may be omitted but not null")
        return v

    def is_present(self, field: str) -> bool:
        return field in self.model_fields_set

    def present_fields(self) -> Dict[str, Any]:
        """Return ``{field: value}`` for every field the caller supplied."""
        return {field: getattr(self, field) for field in self.model_fields_set}
