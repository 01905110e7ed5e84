from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from loguru import logger
from models import Product
from typing import List, Optional
import time

from exceptions import APIError, ImageDecodeError, UpstreamBlobError, UpstreamStoreError
from schemas import ProductCreate
from .blob_service import BlobService
from .data_url import decode_data_url

IMAGE_CONTENT_TYPE = "image/png"


def image_pathname(image_name: Optional[str], default_name: str = "image.png") -> str:
    return f"products/{int(time.time() * 1000)}-{image_name or default_name}"


class ProductService:
    @staticmethod
    def get_products(db: Session) -> List[Product]:
        """All products, newest first."""
        try:
            return db.query(Product).order_by(Product.created_at.desc(), Product.id.desc()).all()
        except SQLAlchemyError as e:
            logger.exception("Error DB GET")
            raise UpstreamStoreError(f"Database error (GET): {e}") from e

    @staticmethod
    def create_product(
        db: Session,
        blob_service: BlobService,
        payload: ProductCreate,
        default_image_name: str = "image.png",
        cleanup_orphaned_blob: bool = False,
    ) -> Product:
        """Upload the product image, then insert the row pointing at it.

        The row is only inserted after the upload succeeded. If the insert
        fails the uploaded blob stays in place unless ``cleanup_orphaned_blob``
        is set, in which case a best-effort delete is attempted.
        """
        try:
            image_bytes = decode_data_url(payload.image_base64)
            blob = blob_service.put(
                image_pathname(payload.image_name, default_image_name),
                image_bytes,
                access="public",
                content_type=IMAGE_CONTENT_TYPE,
            )
            logger.info("Uploaded product image to {}", blob.url)

            db_product = Product(
                name=payload.name,
                category=payload.category,
                price=payload.price,
                description=payload.description,
                badge=payload.badge,
                image=blob.url,
            )
            db.add(db_product)
            db.commit()
            db.refresh(db_product)
            return db_product
        except (ImageDecodeError, UpstreamBlobError) as e:
            logger.exception("Error Blob POST")
            raise type(e)(f"Error uploading product: {e.error}") from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Error DB POST")
            if cleanup_orphaned_blob:
                ProductService._delete_orphaned_blob(blob_service, blob.url)
            raise UpstreamStoreError(f"Error uploading product: {e}") from e

    @staticmethod
    def _delete_orphaned_blob(blob_service: BlobService, url: str):
        try:
            blob_service.delete(url)
            logger.info("Removed orphaned blob {}", url)
        except APIError as e:
            logger.warning("Could not remove orphaned blob {}: {}", url, e.error)

    @staticmethod
    def delete_product(db: Session, product_id: int):
        """Delete by id. Deleting an unknown id is not an error."""
        try:
            db.query(Product).filter(Product.id == product_id).delete(synchronize_session=False)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Error DB DELETE")
            raise UpstreamStoreError(f"Error deleting product: {e}") from e
