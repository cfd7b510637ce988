"""Product use cases: validation, existence checks and merge semantics."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
import logging
from typing import Any

from product_api.repositories.interfaces import ProductGateway
from product_api.services.product_validator import validate_product
from product_api.services.types import (
    NotFound,
    Ok,
    Outcome,
    PatchField,
    ProductRecord,
    ValidationFailed,
)

logger = logging.getLogger(__name__)


# Upper bound of the BIGINT identity column
MAX_PRODUCT_ID = 2**63 - 1


def _is_valid_id(product_id: int | None) -> bool:
    return product_id is not None and 0 < product_id <= MAX_PRODUCT_ID


class ProductService:
    """Orchestrates product reads and writes over a ``ProductGateway``."""

    def __init__(self, gateway: ProductGateway):
        self.gateway = gateway

    def create(self, candidate: ProductRecord) -> Outcome[ProductRecord]:
        """Validate and insert ``candidate``; any supplied ID is discarded."""
        product = replace(candidate, id=None)
        violations = validate_product(product)
        if violations:
            return ValidationFailed(violations)
        saved = self.gateway.save(product)
        logger.info(f"Created product {saved.id}")
        return Ok(saved)

    def get_by_id(self, product_id: int | None) -> Outcome[ProductRecord]:
        if not _is_valid_id(product_id):
            return NotFound(f"Invalid product ID: {product_id}")
        product = self.gateway.get(product_id)
        if product is None:
            return NotFound(f"Product not found with id: {product_id}")
        return Ok(product)

    def get_all(self, name: str | None = None) -> list[ProductRecord]:
        return self.gateway.get_all(name_contains=name)

    def exists_by_id(self, product_id: int | None) -> bool:
        return _is_valid_id(product_id) and self.gateway.exists(product_id)

    def full_update(
        self, product_id: int | None, details: ProductRecord
    ) -> Outcome[ProductRecord]:
        """Overwrite the stored name and price with the non-null ``details``.

        Fields left as None keep their stored value. The merged record is not
        re-validated here; callers are expected to validate ``details`` first.
        """
        found = self.get_by_id(product_id)
        if not isinstance(found, Ok):
            return found
        product = found.value
        if details.name is not None:
            product.name = details.name
        if details.price is not None:
            product.price = details.price
        saved = self.gateway.save(product)
        logger.info(f"Updated product {product_id}")
        return Ok(saved)

    def partial_update(
        self, product_id: int | None, updates: Mapping[str, Any]
    ) -> Outcome[ProductRecord]:
        """Apply recognized, correctly typed entries of ``updates``.

        Unknown keys and values of the wrong type are ignored. Applied values
        must still pass the field constraints.
        """
        found = self.get_by_id(product_id)
        if not isinstance(found, Ok):
            return found
        product = found.value

        applied = []
        for key, value in updates.items():
            patch_field = PatchField.lookup(key)
            if patch_field is None or not patch_field.accepts(value):
                logger.debug(f"Ignoring patch entry {key!r} for product {product_id}")
                continue
            patch_field.apply(product, value)
            applied.append(patch_field)

        violations = validate_product(product, fields=applied)
        if violations:
            return ValidationFailed(violations)

        saved = self.gateway.save(product)
        logger.info(f"Patched product {product_id} fields {[f.value for f in applied]}")
        return Ok(saved)

    def delete(self, product_id: int | None) -> Outcome[None]:
        if not _is_valid_id(product_id):
            return NotFound(f"Invalid product ID: {product_id}")
        if not self.gateway.delete(product_id):
            return NotFound(f"Product not found with id: {product_id}")
        logger.info(f"Deleted product {product_id}")
        return Ok(None)

    def create_many(self, candidates: list[ProductRecord]) -> list[ProductRecord]:
        """Insert every candidate in input order, discarding supplied IDs."""
        products = [replace(candidate, id=None) for candidate in candidates]
        saved = self.gateway.save_many(products)
        if saved:
            logger.info(f"Created {len(saved)} products in bulk")
        return saved
