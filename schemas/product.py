from pydantic import BaseModel, Field, field_validator
from typing import Optional, Union
from datetime import datetime

class ProductBase(BaseModel):
    name: str
    category: str
    price: str
    description: Optional[str] = None
    badge: Optional[str] = None

class ProductCreate(BaseModel):
    """Create payload as sent by the storefront admin.

    Every field is optional at parse time so the route can report missing
    values in a fixed order (image first, then the text fields).
    """
    name: Optional[str] = None
    category: Optional[str] = None
    price: Optional[str] = None
    description: Optional[str] = None
    badge: Optional[str] = None
    image_base64: Optional[str] = Field(default=None, alias="imageBase64")
    image_name: Optional[str] = Field(default=None, alias="imageName")

    class Config:
        populate_by_name = True

    @field_validator("price", mode="before")
    @classmethod
    def price_as_text(cls, value: Union[str, int, float, None]):
        # Forms often send the price as a JSON number; store it as text
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    def missing_fields(self):
        return [field for field in ("name", "category", "price") if not getattr(self, field)]

class ProductResponse(ProductBase):
    id: int
    image: str
    created_at: datetime

    class Config:
        from_attributes = True

class DeleteResponse(BaseModel):
    success: bool = True
