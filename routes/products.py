from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

import schemas
from exceptions import UnsupportedMethod, ValidationError
from services import ProductService
from .deps import ApplicationDependencies, get_app_dependencies, get_db

PRODUCTS_PATH = "/api/products"
# Largest id the store can hold (PostgreSQL BIGINT, SQLite INTEGER)
MAX_PRODUCT_ID = 2**63 - 1

router = APIRouter(prefix=PRODUCTS_PATH, tags=["Products"])


@router.get("", response_model=List[schemas.ProductResponse])
def get_products(db: Session = Depends(get_db)):
    """Get all products, newest first"""
    return ProductService.get_products(db)


@router.post("", response_model=schemas.ProductResponse, status_code=201)
def create_product(
    payload: schemas.ProductCreate,
    db: Session = Depends(get_db),
    deps: ApplicationDependencies = Depends(get_app_dependencies)
):
    """Create a product from a JSON body carrying the image as a base64 data URL"""
    if not payload.image_base64:
        raise ValidationError("Image missing")

    missing = payload.missing_fields()
    if missing:
        raise ValidationError(f"{missing[0]} is required")

    blob_service = deps.require_blob_service()

    return ProductService.create_product(
        db,
        blob_service,
        payload,
        default_image_name=deps.settings.default_image_name,
        cleanup_orphaned_blob=deps.settings.cleanup_orphaned_blob_on_insert_failure,
    )


@router.delete("", response_model=schemas.DeleteResponse)
def delete_product(
    product_id: Optional[str] = Query(None, alias="id"),
    db: Session = Depends(get_db)
):
    """Delete a product by id. The product image is left in the blob store."""
    if not product_id:
        raise ValidationError("ID required")
    try:
        product_id = int(product_id)
    except ValueError:
        raise ValidationError("ID must be an integer")
    if not 0 < product_id <= MAX_PRODUCT_ID:
        # No row can carry this id, so there is nothing to delete
        return {"success": True}

    ProductService.delete_product(db, product_id)
    return {"success": True}


@router.api_route("", methods=["PATCH", "PUT"], include_in_schema=False)
def unsupported_method():
    raise UnsupportedMethod()
