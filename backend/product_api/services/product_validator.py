"""Field constraints for product name and price."""

from __future__ import annotations

from collections.abc import Iterable
import math
from typing import Any

from product_api.services.types import FieldViolation, PatchField, ProductRecord

NAME_MAX_LENGTH = 255


class ValidationError(ValueError):
    """Raised by callers that prefer exceptions over violation lists."""

    def __init__(self, violations: list[FieldViolation]):
        self.violations = violations
        super().__init__("; ".join(f"{v.field}: {v.message}" for v in violations))


def check_name(value: Any) -> FieldViolation | None:
    if value is None or not isinstance(value, str) or not value.strip():
        return FieldViolation("name", "Name must not be blank")
    if len(value) > NAME_MAX_LENGTH:
        return FieldViolation(
            "name", f"Name must not exceed {NAME_MAX_LENGTH} characters"
        )
    return None


def check_price(value: Any) -> FieldViolation | None:
    if value is None:
        return FieldViolation("price", "Price must not be null")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return FieldViolation("price", "Price must be a number")
    if isinstance(value, float) and not math.isfinite(value):
        return FieldViolation("price", "Price must be a finite number")
    if not value > 0:
        return FieldViolation("price", "Price must be positive")
    return None


_CHECKS = {
    PatchField.NAME: check_name,
    PatchField.PRICE: check_price,
}


def validate_product(
    candidate: ProductRecord,
    fields: Iterable[PatchField] | None = None,
) -> list[FieldViolation]:
    """Return every violated constraint on ``candidate``.

    ``fields`` narrows the check to a subset, which is how partial updates
    re-check only the values they supply. An empty list means valid.
    """
    selected = list(PatchField) if fields is None else list(fields)
    violations = []
    for patch_field in selected:
        violation = _CHECKS[patch_field](getattr(candidate, patch_field.value))
        if violation is not None:
            violations.append(violation)
    return violations


def ensure_valid(candidate: ProductRecord) -> ProductRecord:
    """Raise ``ValidationError`` when ``candidate`` breaks any constraint."""
    violations = validate_product(candidate)
    if violations:
        raise ValidationError(violations)
    return candidate
