# location/models.py
from pydantic import constr
from typing import Optional

from AGRICONNECT.utils.sanitize import SanitizedModel


class DeliveryAddress(SanitizedModel):
    addressId: constr(min_length=1)
    userId: constr(min_length=1)
    name: constr(min_length=1)
    municipality: constr(min_length=1)
    barangay: constr(min_length=1)
    addressDetails: Optional[str] = None
    isDefault: Optional[bool] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    createdAt: Optional[str] = None


class RiderLocation(SanitizedModel):
    addressId: Optional[str] = None
    userId: constr(min_length=1)
    name: Optional[str] = None
    municipality: constr(min_length=1)
    barangay: constr(min_length=1)
    addressDetails: Optional[str] = None
    isDefault: Optional[bool] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    createdAt: Optional[str] = None
