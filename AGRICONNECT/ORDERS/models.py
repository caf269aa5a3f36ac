# ORDERS/models.py
from pydantic import ConfigDict, Field, constr, field_validator
from typing import Any, Dict, List, Optional, Union

from AGRICONNECT.utils.sanitize import SanitizedModel


class OrderLineItem(SanitizedModel):
    # product references carry whatever the app sends (productId, name, image...)
    model_config = ConfigDict(extra="allow")

    price: Union[int, float]
    quantity: Union[int, float]
    unit: Optional[str] = None


class CreateOrder(SanitizedModel):
    orderId: constr(min_length=1)
    userId: constr(min_length=1)
    products: List[OrderLineItem]
    deliveryAddress: Union[Dict[str, Any], str]
    distance: float = Field(0, ge=0)
    storeId: Optional[str] = None
    status: Optional[str] = None
    createdAt: Optional[str] = None

    @field_validator("deliveryAddress")
    @classmethod
    def address_not_empty(cls, v):
        if not v:
            raise ValueError("Missing required order fields: deliveryAddress")
        return v


class SellerOrder(SanitizedModel):
    sellerId: constr(min_length=1)
    orderId: constr(min_length=1)
    orderDetails: Optional[Dict[str, Any]] = None
