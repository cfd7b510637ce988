"""Persistence gateway contract for products.

The service only ever talks to this interface, so the SQLAlchemy
implementation and the in-memory test double are interchangeable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from product_api.services.types import ProductRecord


class ProductGateway(ABC):

    @abstractmethod
    def get(self, product_id: int) -> ProductRecord | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_all(self, name_contains: str | None = None) -> list[ProductRecord]:
        """Return products in insertion order.

        ``name_contains`` keeps only names containing it, ignoring case.
        """

    @abstractmethod
    def exists(self, product_id: int) -> bool:
        """Whether a product with this ID is stored."""

    @abstractmethod
    def save(self, product: ProductRecord) -> ProductRecord:
        """Insert a product without an ID, or overwrite the stored one."""

    @abstractmethod
    def save_many(self, products: list[ProductRecord]) -> list[ProductRecord]:
        """Save every product in one transaction, preserving input order."""

    @abstractmethod
    def delete(self, product_id: int) -> bool:
        """Remove a product. Returns False if nothing was stored under the ID."""
