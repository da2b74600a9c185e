"""Product domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.  Store failures surface as
``modules.core.exceptions.PersistenceError``.
"""

from __future__ import annotations


class InvalidInputError(Exception):
    """The request breaks a validation rule (empty field, bad price/stock, empty id)."""


class NotFoundError(Exception):
    """The referenced product does not exist."""
