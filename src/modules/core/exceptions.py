"""Infrastructure-level exceptions shared by every module."""

from __future__ import annotations


class PersistenceError(Exception):
    """A call to the backing store failed.

    Covers transport faults, store-side errors and items that cannot be
    (de)serialised.  The original exception is chained as ``__cause__``.
    """
