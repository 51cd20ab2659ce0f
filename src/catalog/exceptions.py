"""Catalog error types."""

from typing import Optional


class CatalogError(Exception):
    """Base class for catalog failures."""
    pass


class DuplicateProductError(CatalogError):
    """More than one active product matched a key that should be unique."""

    def __init__(self, field: str, value: str, count: int) -> None:
        super().__init__(f"{count} active products share {field}={value!r}")
        self.field = field
        self.value = value
        self.count = count


class ProductNotFoundError(CatalogError):
    """No active product matched the requested slug or id."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Product not found: {key}")
        self.key = key


class CatalogUnavailableError(CatalogError):
    """The catalog backend could not be read."""

    def __init__(self, message: str, error_type: Optional[str] = None) -> None:
        super().__init__(message)
        self.error_type = error_type
