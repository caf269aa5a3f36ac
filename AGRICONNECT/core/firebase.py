# file: AGRICONNECT/core/firebase.py

import os
import json
import base64
import logging
import firebase_admin
from firebase_admin import credentials, firestore, storage

from AGRICONNECT.core import config

logger = logging.getLogger("core.firebase")
logger.setLevel(logging.INFO)


# ------------------------------
# Credentials
# ------------------------------
def load_service_account_info() -> dict:
    """
    Resolve the service account JSON.
    - FIREBASE_SERVICE_ACCOUNT_B64: base64-encoded JSON (preferred)
    - GOOGLE_APPLICATION_CREDENTIALS: a file path or a raw JSON string
    """
    if config.FIREBASE_SERVICE_ACCOUNT_B64:
        logger.info("Loading Firebase credentials from base64 env var")
        raw = base64.b64decode(config.FIREBASE_SERVICE_ACCOUNT_B64).decode("utf-8")
        return json.loads(raw)

    source = config.GOOGLE_APPLICATION_CREDENTIALS
    if not source:
        raise ValueError("FIREBASE_SERVICE_ACCOUNT_B64 or GOOGLE_APPLICATION_CREDENTIALS must be set")

    # Case 1: it's a file path
    if os.path.exists(source):
        logger.info("Loading Firebase credentials from file: %s", source)
        with open(source, "r", encoding="utf-8") as f:
            return json.load(f)

    # Case 2: it's a raw JSON string
    logger.info("Loading Firebase credentials from raw JSON string")
    return json.loads(source)


# ------------------------------
# App + shared clients
# ------------------------------
def init_firebase() -> firebase_admin.App:
    if not firebase_admin._apps:  # Prevent re-init if already done
        try:
            cred = credentials.Certificate(load_service_account_info())
            app = firebase_admin.initialize_app(cred, {
                "storageBucket": config.FIREBASE_STORAGE_BUCKET,
            })
            logger.info("🔥 Firebase initialized with project: %s", app.project_id)
        except Exception as e:
            logger.exception("Failed to initialize Firebase: %s", e)
            raise
    return firebase_admin.get_app()


def get_db():
    init_firebase()
    return firestore.client()


def get_bucket():
    init_firebase()
    return storage.bucket()


__all__ = ["init_firebase", "get_db", "get_bucket", "load_service_account_info"]
