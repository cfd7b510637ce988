"""CRUD endpoints for the product catalog."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status
from sqlalchemy.exc import SQLAlchemyError

from product_api.api.dependencies.services import get_product_service
from product_api.api.schemas.product import ProductCreate, ProductRead
from product_api.services.product_service import ProductService
from product_api.services.types import NotFound, Ok, ValidationFailed

logger = logging.getLogger(__name__)

router = APIRouter()


def _unwrap(outcome):
    """Return the value of an ``Ok`` outcome or raise the matching HTTP error."""
    if isinstance(outcome, Ok):
        return outcome.value
    if isinstance(outcome, NotFound):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=outcome.message)
    if isinstance(outcome, ValidationFailed):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=[{"field": v.field, "message": v.message} for v in outcome.violations],
        )
    raise TypeError(f"Unexpected service outcome: {outcome!r}")


def _database_error(action: str, e: SQLAlchemyError) -> HTTPException:
    logger.error(f"Database error while {action}: {e}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed {action}",
    )


@router.get(
    "/",
    summary="List products",
    response_model=list[ProductRead],
)
@router.get("", response_model=list[ProductRead], include_in_schema=False)
def list_products(
    name: str | None = Query(None, description="Filter by name (partial match)"),
    service: ProductService = Depends(get_product_service),
) -> list[ProductRead]:
    """Return every product in insertion order, optionally filtered by name."""
    try:
        products = service.get_all(name=name)
    except SQLAlchemyError as e:
        raise _database_error("listing products", e) from e
    return [ProductRead.model_validate(p) for p in products]


@router.post(
    "/",
    summary="Create a product",
    status_code=status.HTTP_201_CREATED,
    response_model=ProductRead,
)
@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ProductRead,
    include_in_schema=False,
)
def create_product(
    payload: ProductCreate,
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    """Persist a new product. Any ``id`` in the body is ignored."""
    try:
        created = _unwrap(service.create(payload.to_record()))
    except SQLAlchemyError as e:
        raise _database_error("creating product", e) from e
    return ProductRead.model_validate(created)


@router.post(
    "/bulk",
    summary="Create several products at once",
    status_code=status.HTTP_201_CREATED,
    response_model=list[ProductRead],
)
def create_products(
    payload: list[ProductCreate],
    service: ProductService = Depends(get_product_service),
) -> list[ProductRead]:
    """Persist a batch of products in one transaction.

    The whole payload is validated before anything is written, so a single
    invalid item rejects the batch.
    """
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Product list must not be empty",
        )
    try:
        created = service.create_many([item.to_record() for item in payload])
    except SQLAlchemyError as e:
        raise _database_error("creating products", e) from e
    return [ProductRead.model_validate(p) for p in created]


@router.get(
    "/exists/{product_id}",
    summary="Check whether a product exists",
    response_model=bool,
)
def product_exists(
    product_id: int,
    service: ProductService = Depends(get_product_service),
) -> bool:
    try:
        return service.exists_by_id(product_id)
    except SQLAlchemyError as e:
        raise _database_error(f"checking product {product_id}", e) from e


@router.get(
    "/{product_id}",
    summary="Fetch a single product",
    response_model=ProductRead,
)
def get_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    """Return one product.

    Unparsable IDs and lookup failures of any kind are reported as 404.
    """
    try:
        found = service.get_by_id(int(product_id))
    except Exception as e:
        logger.warning(f"Lookup of product {product_id!r} failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Product not found"
        ) from e
    return ProductRead.model_validate(_unwrap(found))


@router.put(
    "/{product_id}",
    summary="Update an existing product",
    response_model=ProductRead,
)
def update_product(
    product_id: int,
    payload: ProductCreate,
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    """Merge the validated body into the stored product."""
    try:
        updated = _unwrap(service.full_update(product_id, payload.to_record()))
    except SQLAlchemyError as e:
        raise _database_error(f"updating product {product_id}", e) from e
    return ProductRead.model_validate(updated)


@router.patch(
    "/{product_id}",
    summary="Partially update a product",
    response_model=ProductRead,
)
def patch_product(
    product_id: int,
    updates: dict[str, Any] = Body(...),
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    """Apply ``name`` and/or ``price`` from the body; other keys are ignored."""
    try:
        if not service.exists_by_id(product_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Product not found"
            )
        updated = _unwrap(service.partial_update(product_id, updates))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error patching product {product_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Failed to patch product",
        ) from e
    return ProductRead.model_validate(updated)


@router.delete(
    "/{product_id}",
    summary="Delete a product",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_product(
    product_id: int,
    service: ProductService = Depends(get_product_service),
) -> Response:
    """Remove a product permanently."""
    try:
        _unwrap(service.delete(product_id))
    except SQLAlchemyError as e:
        raise _database_error(f"deleting product {product_id}", e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
