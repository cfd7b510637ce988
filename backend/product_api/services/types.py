"""Plain records and typed outcomes shared by the service and its gateway."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass
class ProductRecord:
    """A product as seen by the service layer.

    ``id`` stays ``None`` until the gateway assigns one on first save.
    """

    name: str | None
    price: float | None
    id: int | None = None


@dataclass(frozen=True)
class FieldViolation:
    field: str
    message: str


class PatchField(str, Enum):
    """Fields a partial update is allowed to touch."""

    NAME = "name"
    PRICE = "price"

    @classmethod
    def lookup(cls, key: object) -> PatchField | None:
        """Return the matching member, or ``None`` for unrecognized keys."""
        try:
            return cls(key)
        except ValueError:
            return None

    def accepts(self, value: object) -> bool:
        """Whether ``value`` has the dynamic type this field takes."""
        if self is PatchField.NAME:
            return isinstance(value, str)
        # bool is an int subclass but is not a price
        return isinstance(value, (int, float)) and not isinstance(value, bool)

    def apply(self, record: ProductRecord, value: object) -> None:
        if self is PatchField.NAME:
            record.name = value
        else:
            record.price = float(value)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    message: str = "Product not found"


@dataclass(frozen=True)
class ValidationFailed:
    violations: list[FieldViolation] = field(default_factory=list)

    @property
    def fields(self) -> list[str]:
        return [v.field for v in self.violations]


Outcome = Union[Ok[T], NotFound, ValidationFailed]
