from .base import Base
from .product import Product

__all__ = [
    "Base",
    "Product",
]
