# AGRICONNECT/core/cleanup.py
import logging
from datetime import timedelta

from AGRICONNECT.core import config
from AGRICONNECT.core.firestore_adapter import FirestoreAdapter, get_firestore, utcnow

logger = logging.getLogger("core.cleanup")


def cleanup_stale_temp_users(firestore: FirestoreAdapter, max_age_minutes: int = None) -> int:
    """
    Delete temp_users records left behind by buyer signups that never
    reached the permanent users collection.
    """
    if max_age_minutes is None:
        max_age_minutes = config.TEMP_USER_TTL_MINUTES
    cutoff = utcnow() - timedelta(minutes=max_age_minutes)
    deleted = firestore.delete_older_than(config.TEMP_USERS, "createdAt", cutoff)
    if deleted:
        logger.info("🧹 Removed %d stale temp users (older than %s)", deleted, cutoff.isoformat())
    return deleted


def run_temp_user_sweep() -> None:
    """Scheduler entry point."""
    try:
        cleanup_stale_temp_users(get_firestore())
    except Exception as e:
        logger.exception("❌ temp user sweep failed: %s", e)
