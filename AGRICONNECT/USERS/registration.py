# AGRICONNECT/USERS/registration.py
"""
Signup workflows.

Buyers: the valid ID is uploaded and a temp_users record written *before*
the Firebase Auth account exists; once users/{uid} is written the temp
record is deleted. Between those writes both records exist. If the
account cannot be created the temp record is removed right away; anything
a crash leaves behind is reaped by core.cleanup.cleanup_stale_temp_users.

Sellers and riders: the account is created first, so the uploaded ID can
be named after the issued uid.
"""
import time
import logging
from typing import Optional, Tuple

from AGRICONNECT.core import config
from AGRICONNECT.core.firestore_adapter import FirestoreAdapter, utcnow
from AGRICONNECT.media.upload import MediaAdapter, decode_base64_image
from AGRICONNECT.USERS.identity import IdentityAdapter
from AGRICONNECT.USERS.models import Signup

logger = logging.getLogger("users.registration")

VALID_ID_FOLDER = "valid_ids"


def temp_valid_id_name(user: Signup) -> str:
    return f"{VALID_ID_FOLDER}/temp_{user.safe_email}_validID.jpg"


def valid_id_name(uid: str, user: Signup) -> str:
    return f"{VALID_ID_FOLDER}/{uid}_{user.safe_email}_validID.jpg"


def _decode_valid_id(user: Signup) -> Optional[bytes]:
    # decoded up front so a bad image is rejected before anything is written
    return decode_base64_image(user.validIdBase64) if user.validIdBase64 else None


def _upload_valid_id(media: MediaAdapter, name: str, image: Optional[bytes]) -> str:
    if image is None:
        return ""
    return media.upload_image(name, image)


def _save_user(firestore: FirestoreAdapter, uid: str, user: Signup, valid_id_url: str) -> None:
    firestore.set(config.USERS, uid, {
        "uid": uid,
        **user.profile(),
        "validIdUrl": valid_id_url,
        "createdAt": utcnow(),
    })
    logger.info("saved user %s (%s) to %s/%s", user.email, user.role, config.USERS, uid)


def register_buyer(
    firestore: FirestoreAdapter,
    identity: IdentityAdapter,
    media: MediaAdapter,
    user: Signup,
) -> Tuple[str, str]:
    """Returns (uid, validIdUrl)."""
    image = _decode_valid_id(user)
    valid_id_url = _upload_valid_id(media, temp_valid_id_name(user), image)

    temp_uid = f"temp_{int(time.time() * 1000)}"
    firestore.set(config.TEMP_USERS, temp_uid, {
        **user.profile(),
        "validIdUrl": valid_id_url,
        "createdAt": utcnow(),
    })

    try:
        uid = identity.create_account(user.email, user.password, user.display_name)
    except Exception:
        _discard_temp_user(firestore, temp_uid)
        raise

    _save_user(firestore, uid, user, valid_id_url)
    _discard_temp_user(firestore, temp_uid)
    return uid, valid_id_url


def register_with_identity_first(
    firestore: FirestoreAdapter,
    identity: IdentityAdapter,
    media: MediaAdapter,
    user: Signup,
) -> Tuple[str, str]:
    """Seller and rider flow. Returns (uid, validIdUrl)."""
    image = _decode_valid_id(user)
    uid = identity.create_account(user.email, user.password, user.display_name)
    valid_id_url = _upload_valid_id(media, valid_id_name(uid, user), image)
    _save_user(firestore, uid, user, valid_id_url)
    return uid, valid_id_url


def _discard_temp_user(firestore: FirestoreAdapter, temp_uid: str) -> None:
    try:
        firestore.delete(config.TEMP_USERS, temp_uid)
    except Exception as e:
        # left for the stale temp user sweep
        logger.exception("could not delete %s/%s: %s", config.TEMP_USERS, temp_uid, e)
