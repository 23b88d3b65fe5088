# models/schemas/product.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Union


class Product(BaseModel):
    """A catalog record as stored and returned by the API."""

    id: str
    name: str
    details: Optional[str] = None
    # Kept exactly as submitted: form posts carry strings, JSON posts numbers
    price: Union[int, float, str]
    productImage: str


class ProductBase(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=3, strict=True)
    details: str = Field(..., min_length=3, max_length=200, strict=True)
    price: float = Field(..., allow_inf_nan=False)

    @field_validator("price", mode="before")
    @classmethod
    def _reject_booleans(cls, v: object) -> object:
        if isinstance(v, bool):
            raise ValueError("must be a number")
        return v


class ProductCreate(ProductBase):
    productImage: str = Field(..., strict=True)


class ProductUpdate(ProductBase):
    # Absent means the stored image is kept
    productImage: Optional[str] = Field(default=None, strict=True)
