from __future__ import annotations

from typing import Dict, Optional


class CatalogError(Exception):
    """Base class for every error raised by the catalog."""


class RecordStoreError(CatalogError):
    """The record store could not be reached or answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class MutationError(CatalogError):
    """A create, update or delete of a product failed."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(message)
        self.operation = operation
        self.message = message


class ProductValidationError(MutationError):
    """Form input was rejected before anything was sent to the record store."""

    def __init__(self, operation: str, errors: Dict[str, str]) -> None:
        details = "; ".join(f"{field}: {msg}" for field, msg in errors.items())
        super().__init__(operation, f"Invalid product: {details}")
        self.errors = errors


class ModalStateError(CatalogError):
    """A modal was asked to make a transition its current state does not allow."""
