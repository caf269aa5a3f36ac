# Store/store.py
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException

from AGRICONNECT.core import config
from AGRICONNECT.core.firestore_adapter import (
    FirestoreAdapter,
    geo_point,
    geo_point_to_dict,
    get_firestore,
    utcnow,
)
from AGRICONNECT.location.geocoding import GeocodingAdapter, GeocodingError, get_geocoder
from AGRICONNECT.Store.models import CreateStore, UpdateStore, STORE_FIELDS
from AGRICONNECT.utils.fields import supplied_fields

logger = logging.getLogger("store")

router = APIRouter(tags=["store"])


# ==============================
# CREATE STORE (geocoded)
# ==============================
@router.post("/createstore")
async def create_store(
    store: CreateStore,
    firestore: FirestoreAdapter = Depends(get_firestore),
    geocoder: GeocodingAdapter = Depends(get_geocoder),
):
    try:
        lat, lng = await geocoder.geocode(store.storeLocation)
    except GeocodingError:
        raise HTTPException(status_code=400, detail="Invalid location for geocoding")
    except Exception as e:
        logger.exception("🔥 [CreateStore Error] geocoding: %s", e)
        raise HTTPException(status_code=500, detail=f"Error creating store: {str(e)}")

    try:
        store_data = {field: getattr(store, field) for field in STORE_FIELDS}
        store_data.update({
            "storeId": store.storeId,
            "geoPoint": geo_point(lat, lng),
            "createdAt": utcnow(),
        })
        firestore.set(config.STORES, store.storeId, store_data)

        return {
            "message": "Store created successfully",
            "storeId": store.storeId,
            "geoPoint": {"lat": lat, "lng": lng},
        }
    except Exception as e:
        logger.exception("🔥 [CreateStore Error] %s", e)
        raise HTTPException(status_code=500, detail=f"Error creating store: {str(e)}")


# ==============================
# UPDATE STORE (supplied fields only)
# ==============================
@router.put("/updatestore/{storeId}")
async def update_store(
    storeId: str,
    store: Optional[UpdateStore] = None,
    firestore: FirestoreAdapter = Depends(get_firestore),
    geocoder: GeocodingAdapter = Depends(get_geocoder),
):
    if not storeId.strip():
        raise HTTPException(status_code=400, detail="storeId is required in URL")

    try:
        existing = firestore.get(config.STORES, storeId)
        if existing is None:
            raise HTTPException(status_code=404, detail="❌ Store not found")

        updates = supplied_fields(store or UpdateStore())

        # Re-geocode only when a new location is supplied; keep the old point if it fails
        point = existing.get("geoPoint")
        if updates.get("storeLocation"):
            try:
                lat, lng = await geocoder.geocode(updates["storeLocation"])
                point = geo_point(lat, lng)
            except GeocodingError as e:
                logger.warning("[UpdateStore] keeping previous geoPoint for %s: %s", storeId, e)

        if point is not None:
            updates["geoPoint"] = point
        updates["updatedAt"] = utcnow()
        firestore.update(config.STORES, storeId, updates)

        return {
            "message": "✅ Store updated successfully",
            "storeId": storeId,
            "geoPoint": geo_point_to_dict(point),
        }
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("🔥 [UpdateStore Error] %s", e)
        raise HTTPException(status_code=500, detail=f"Error updating store: {str(e)}")
