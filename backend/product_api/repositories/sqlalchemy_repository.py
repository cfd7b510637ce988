"""SQLAlchemy implementation of the product gateway.

Every mutating call commits its own transaction and rolls the session back
on failure, so one service call maps onto at most one database transaction.
"""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from product_api.db.models.product import Product
from product_api.repositories.interfaces import ProductGateway
from product_api.services.types import ProductRecord

logger = logging.getLogger(__name__)


def _to_record(row: Product) -> ProductRecord:
    return ProductRecord(id=row.id, name=row.name, price=row.price)


class SqlAlchemyProductGateway(ProductGateway):
    """Product gateway backed by the ``products`` table."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, product_id: int) -> ProductRecord | None:
        row = self.db.get(Product, product_id)
        return _to_record(row) if row is not None else None

    def get_all(self, name_contains: str | None = None) -> list[ProductRecord]:
        query = select(Product)
        if name_contains:
            query = query.where(
                func.lower(Product.name).contains(name_contains.lower())
            )
        rows = self.db.scalars(query.order_by(Product.id)).all()
        return [_to_record(row) for row in rows]

    def exists(self, product_id: int) -> bool:
        found = self.db.scalar(select(Product.id).where(Product.id == product_id))
        return found is not None

    def save(self, product: ProductRecord) -> ProductRecord:
        try:
            row = self._apply(product)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error saving product: {e}", exc_info=True)
            raise
        return _to_record(row)

    def save_many(self, products: list[ProductRecord]) -> list[ProductRecord]:
        if not products:
            return []
        try:
            rows = [self._apply(product) for product in products]
            self.db.commit()
            for row in rows:
                self.db.refresh(row)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error saving product batch: {e}", exc_info=True)
            raise
        return [_to_record(row) for row in rows]

    def delete(self, product_id: int) -> bool:
        row = self.db.get(Product, product_id)
        if row is None:
            return False
        try:
            self.db.delete(row)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                f"Database error deleting product {product_id}: {e}", exc_info=True
            )
            raise
        return True

    def _apply(self, product: ProductRecord) -> Product:
        """Stage an insert or an in-place update without committing."""
        row = None
        if product.id is not None:
            row = self.db.get(Product, product.id)
        if row is None:
            row = Product(name=product.name, price=product.price)
            self.db.add(row)
        else:
            row.name = product.name
            row.price = product.price
        self.db.flush()
        return row
