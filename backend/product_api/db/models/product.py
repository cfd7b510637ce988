"""SQLAlchemy model for product records."""

from sqlalchemy import BigInteger, Column, Float, Integer, String

from product_api.db.base import Base


class Product(Base):
    __tablename__ = "products"

    # SQLite only autoincrements an INTEGER PRIMARY KEY
    id = Column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    name = Column(String(255), nullable=False)
    price = Column(Float, nullable=False)
