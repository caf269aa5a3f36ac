# PRODUCTS/models.py
from pydantic import conlist, constr, model_validator
from typing import List, Optional, Union

from AGRICONNECT.utils.sanitize import SanitizedModel


def _as_number(value: float) -> Union[int, float]:
    return int(value) if float(value).is_integer() else value


class Variant(SanitizedModel):
    name: Optional[str] = None
    stock: Optional[float] = None
    price: Optional[float] = None

    @model_validator(mode="after")
    def check_variant(self):
        if not self.name or self.stock is None or self.price is None:
            raise ValueError("❌ Each variant must have name, stock, and price")
        if self.stock < 0:
            raise ValueError(f'❌ Variant "{self.name}" stock must be a non-negative number')
        if self.price <= 0:
            raise ValueError(f'❌ Variant "{self.name}" price must be a positive number')
        return self

    def to_document(self) -> dict:
        return {"name": self.name, "stock": _as_number(self.stock), "price": _as_number(self.price)}


class CreateProduct(SanitizedModel):
    productId: constr(min_length=1)
    storeId: constr(min_length=1)
    brandName: constr(min_length=1)
    ownerId: constr(min_length=1)
    ownerName: constr(min_length=1)
    productName: constr(min_length=1)
    categories: conlist(str, min_length=1)
    productDescription: Optional[str] = None
    productImages: conlist(str, min_length=1)
    unit: Optional[str] = None
    variants: Optional[List[Variant]] = None
    createdAt: Optional[str] = None


class UpdateProduct(SanitizedModel):
    storeId: Optional[str] = None
    storeName: Optional[str] = None
    ownerId: Optional[str] = None
    ownerName: Optional[str] = None
    brandName: Optional[str] = None
    productName: Optional[str] = None
    categories: Optional[conlist(str, min_length=1)] = None
    productDescription: Optional[str] = None
    productImages: Optional[conlist(str, min_length=1)] = None
    unit: Optional[str] = None
    variants: Optional[List[Variant]] = None
