"""Database session dependency."""

from collections.abc import Generator

from sqlalchemy.orm import Session

from product_api.db.session import get_db


def get_session() -> Generator[Session, None, None]:
    """Request-scoped session; tests swap it out via ``dependency_overrides``."""
    yield from get_db()
