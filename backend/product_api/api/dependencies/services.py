"""Service dependencies wired from the request-scoped session."""

from fastapi import Depends
from sqlalchemy.orm import Session

from product_api.api.dependencies.db import get_session
from product_api.repositories.sqlalchemy_repository import SqlAlchemyProductGateway
from product_api.services.product_service import ProductService


def get_product_service(db: Session = Depends(get_session)) -> ProductService:
    """FastAPI dependency building a service over a per-request gateway."""
    return ProductService(SqlAlchemyProductGateway(db))
