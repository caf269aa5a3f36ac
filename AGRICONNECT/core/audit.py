# AGRICONNECT/core/audit.py
import uuid
import logging

from AGRICONNECT.core import config
from AGRICONNECT.core.firestore_adapter import FirestoreAdapter, utcnow
from AGRICONNECT.core.logger import log_to_cloud

logger = logging.getLogger("core.audit")


def log_event(
    firestore: FirestoreAdapter,
    actor: str,
    action: str,
    role: str = None,
    ip: str = None,
    category: str = "system",
    severity: str = "INFO",
    metadata: dict = None
):
    """
    Generic audit logger.
    Stores structured events under audit_logs/{log_id}. Never raises.
    """
    log_id = str(uuid.uuid4())
    log_to_cloud(category, severity, f"{action} actor={actor}", metadata)
    try:
        firestore.set(config.AUDIT_LOGS, log_id, {
            "actor": actor,
            "action": action,
            "role": role,
            "ip": ip,
            "category": category,       # e.g., signup, orders
            "severity": severity,       # INFO, WARN, ERROR
            "timestamp": utcnow().isoformat(),
            "metadata": metadata or {}
        })
    except Exception as e:
        logger.exception("audit log write failed for action=%s: %s", action, e)
