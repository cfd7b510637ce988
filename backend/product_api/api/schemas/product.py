"""Pydantic models describing Product payloads."""

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from product_api.services.product_validator import ensure_valid
from product_api.services.types import ProductRecord


class ProductBase(BaseModel):
    name: str | None = None
    price: float | None = Field(None, allow_inf_nan=False)


class ProductCreate(ProductBase):
    """Body for POST, PUT and each item of a bulk POST.

    ``id`` is accepted so clients may echo a read payload back; it is never
    used to pick the stored row.
    """

    id: int | None = None

    @field_validator("price", mode="before")
    @classmethod
    def reject_boolean_price(cls, v: Any) -> Any:
        """JSON booleans are not prices, matching how a PATCH treats them."""
        if isinstance(v, bool):
            raise ValueError("Price must be a number")
        return v

    @model_validator(mode="after")
    def check_constraints(self) -> "ProductCreate":
        ensure_valid(self.to_record())
        return self

    def to_record(self) -> ProductRecord:
        return ProductRecord(id=self.id, name=self.name, price=self.price)


class ProductRead(ProductBase):
    id: int
    name: str
    price: float

    model_config = {"from_attributes": True}
