# location/address.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status

from AGRICONNECT.core import config
from AGRICONNECT.core.firestore_adapter import FirestoreAdapter, get_firestore, utcnow
from AGRICONNECT.location.models import DeliveryAddress, RiderLocation

logger = logging.getLogger("location.address")

router = APIRouter(tags=["address"])


@router.post("/createaddress", status_code=status.HTTP_201_CREATED)
async def create_address(
    address: DeliveryAddress,
    firestore: FirestoreAdapter = Depends(get_firestore),
):
    if address.latitude is None or address.longitude is None:
        raise HTTPException(status_code=400, detail="❌ Missing geocoding coordinates (latitude & longitude)")

    try:
        now = utcnow()
        new_address = {
            "addressId": address.addressId,
            "userId": address.userId,
            "name": address.name,
            "municipality": address.municipality,
            "barangay": address.barangay,
            "addressDetails": address.addressDetails or "",
            "isDefault": bool(address.isDefault),
            "latitude": address.latitude,
            "longitude": address.longitude,
            "createdAt": address.createdAt or now.isoformat(),
            "updatedAt": now,
        }
        firestore.set(config.DELIVERY_ADDRESS, address.addressId, new_address)

        return {
            "message": "✅ Address created successfully",
            "addressId": address.addressId,
            "address": new_address,
        }
    except Exception as e:
        logger.exception("[CreateAddress Error] %s", e)
        raise HTTPException(status_code=500, detail=f"❌ Failed to create address: {str(e)}")


@router.post("/createriderlocation")
async def create_rider_location(
    location: RiderLocation,
    firestore: FirestoreAdapter = Depends(get_firestore),
):
    try:
        data = {
            "userId": location.userId,
            "name": location.name,
            "municipality": location.municipality,
            "barangay": location.barangay,
            "addressDetails": location.addressDetails,
            "isDefault": location.isDefault,
            "latitude": location.latitude,
            "longitude": location.longitude,
            "createdAt": location.createdAt or utcnow().isoformat(),
        }
        if location.addressId:
            firestore.set(config.RIDER_LOCATION, location.addressId, data)
            address_id = location.addressId
        else:
            address_id = firestore.add(config.RIDER_LOCATION, data)

        return {
            "success": True,
            "message": "Rider location saved successfully",
            "addressId": address_id,
        }
    except Exception as e:
        logger.exception("🔥 Error saving rider location: %s", e)
        raise HTTPException(status_code=500, detail=f"Error saving rider location: {str(e)}")
