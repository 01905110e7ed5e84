from .product_service import ProductService
from .blob_service import BlobService, BlobResult
from .data_url import decode_data_url

__all__ = ["ProductService", "BlobService", "BlobResult", "decode_data_url"]
