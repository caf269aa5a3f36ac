# Store/models.py
from pydantic import constr
from typing import Any, Optional

from AGRICONNECT.utils.sanitize import SanitizedModel


class StoreDetails(SanitizedModel):
    brandName: Optional[str] = None
    storeName: Optional[str] = None
    branchName: Optional[str] = None
    description: Optional[str] = None
    storeHours: Optional[Any] = None
    contactDetails: Optional[Any] = None
    storeLogo: Optional[str] = None
    storeBackground: Optional[str] = None
    ownerId: Optional[str] = None
    ownerName: Optional[str] = None


class CreateStore(StoreDetails):
    storeId: constr(min_length=1)
    storeLocation: constr(min_length=1)


class UpdateStore(StoreDetails):
    storeLocation: Optional[str] = None


STORE_FIELDS = (
    "brandName",
    "storeName",
    "branchName",
    "storeLocation",
    "description",
    "storeHours",
    "contactDetails",
    "storeLogo",
    "storeBackground",
    "ownerId",
    "ownerName",
)
