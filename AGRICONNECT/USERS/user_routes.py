# USERS/user_routes.py
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from AGRICONNECT.core.audit import log_event
from AGRICONNECT.core.firestore_adapter import FirestoreAdapter, get_firestore
from AGRICONNECT.core.rate_limit import signup_limit
from AGRICONNECT.media.upload import InvalidImageError, MediaAdapter, get_media
from AGRICONNECT.USERS.identity import EmailAlreadyInUseError, IdentityAdapter, get_identity
from AGRICONNECT.USERS.models import RiderSignup, Signup
from AGRICONNECT.USERS.registration import register_buyer, register_with_identity_first

logger = logging.getLogger("app.users")

router = APIRouter(prefix="/register", tags=["users"])


def _run_signup(workflow, request: Request, user: Signup, firestore, identity, media, flow: str) -> dict:
    """Run a signup workflow and translate its outcome into a response."""
    ip = request.client.host if request.client else None
    try:
        uid, image_url = workflow(firestore, identity, media, user)
    except EmailAlreadyInUseError:
        log_event(firestore, user.email, "signup_duplicate", role=user.role, ip=ip, category="signup",
                  severity="WARN", metadata={"flow": flow})
        raise HTTPException(status_code=400, detail="Email is already in use")
    except InvalidImageError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("[Register %s Error] %s", flow, e)
        log_event(firestore, user.email, "signup_error", role=user.role, ip=ip, category="signup",
                  severity="ERROR", metadata={"flow": flow, "error": str(e)})
        raise HTTPException(status_code=500, detail=f"Error registering {flow}: {str(e)}")

    log_event(firestore, uid, "signup_success", role=user.role, ip=ip, category="signup",
              metadata={"flow": flow, "email": user.email})
    return {
        "message": "User registered successfully",
        "uid": uid,
        "imageUrl": image_url,
    }


# ---------------------------
# SIGNUPS
# ---------------------------
@router.post("/buyer")
@signup_limit
async def register_buyer_route(
    request: Request,
    user: Signup,
    firestore: FirestoreAdapter = Depends(get_firestore),
    identity: IdentityAdapter = Depends(get_identity),
    media: MediaAdapter = Depends(get_media),
):
    return _run_signup(register_buyer, request, user, firestore, identity, media, "buyer")


@router.post("/seller")
@signup_limit
async def register_seller_route(
    request: Request,
    user: Signup,
    firestore: FirestoreAdapter = Depends(get_firestore),
    identity: IdentityAdapter = Depends(get_identity),
    media: MediaAdapter = Depends(get_media),
):
    return _run_signup(register_with_identity_first, request, user, firestore, identity, media, "seller")


@router.post("/rider")
@signup_limit
async def register_rider_route(
    request: Request,
    user: RiderSignup,
    firestore: FirestoreAdapter = Depends(get_firestore),
    identity: IdentityAdapter = Depends(get_identity),
    media: MediaAdapter = Depends(get_media),
):
    return _run_signup(register_with_identity_first, request, user, firestore, identity, media, "rider")
