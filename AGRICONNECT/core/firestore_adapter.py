# AGRICONNECT/core/firestore_adapter.py
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from google.cloud import firestore

from AGRICONNECT.core.firebase import get_db

logger = logging.getLogger("core.firestore_adapter")

BATCH_LIMIT = 400  # stay under Firestore's 500 writes per batch


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def geo_point(lat: float, lng: float) -> firestore.GeoPoint:
    return firestore.GeoPoint(lat, lng)


def geo_point_to_dict(point: Any) -> Optional[Dict[str, float]]:
    """Render a stored GeoPoint as {"lat", "lng"} for JSON responses."""
    if point is None:
        return None
    if isinstance(point, dict):
        return point
    return {"lat": point.latitude, "lng": point.longitude}


class FirestoreAdapter:
    """
    Thin key/value view over Firestore collections.
    Every document is addressed as (collection, doc_id).
    """

    def __init__(self, client):
        self.client = client

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        snap = self.client.collection(collection).document(doc_id).get()
        if not snap.exists:
            return None
        return snap.to_dict() or {}

    def set(self, collection: str, doc_id: str, data: dict) -> None:
        self.client.collection(collection).document(doc_id).set(data)

    def add(self, collection: str, data: dict) -> str:
        ref = self.client.collection(collection).document()  # auto id
        ref.set(data)
        return ref.id

    def update(self, collection: str, doc_id: str, data: dict) -> None:
        self.client.collection(collection).document(doc_id).update(data)

    def delete(self, collection: str, doc_id: str) -> None:
        self.client.collection(collection).document(doc_id).delete()

    def delete_older_than(self, collection: str, field: str, cutoff: datetime) -> int:
        """
        Delete every document whose `field` is before `cutoff`.
        Returns the number of deleted documents.
        """
        stale = self.client.collection(collection).where(
            filter=firestore.FieldFilter(field, "<", cutoff)
        ).stream()

        batch = self.client.batch()
        count = 0
        deleted = 0
        for doc in stale:
            batch.delete(doc.reference)
            count += 1
            deleted += 1
            if count >= BATCH_LIMIT:
                batch.commit()
                batch = self.client.batch()
                count = 0
        if count > 0:
            batch.commit()
        return deleted


def get_firestore() -> FirestoreAdapter:
    return FirestoreAdapter(get_db())
