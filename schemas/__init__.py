from .product import ProductBase, ProductCreate, ProductResponse, DeleteResponse
from .health import EnvStatus, PingResponse

__all__ = [
    "ProductBase", "ProductCreate", "ProductResponse", "DeleteResponse",
    "EnvStatus", "PingResponse",
]
