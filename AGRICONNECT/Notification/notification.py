# AGRICONNECT/Notification/notification.py
import logging
from fastapi import APIRouter, Depends, HTTPException
from pydantic import constr

from AGRICONNECT.core import config
from AGRICONNECT.core.firestore_adapter import FirestoreAdapter
from AGRICONNECT.Notification.expo import ExpoPushClient, get_push_client
from AGRICONNECT.utils.sanitize import SanitizedModel

logger = logging.getLogger("notification")

router = APIRouter(tags=["notification"])


class PushRequest(SanitizedModel):
    expoPushToken: constr(min_length=1)
    title: constr(min_length=1)
    body: constr(min_length=1)


# -------------------------
# Ad-hoc send
# -------------------------
@router.post("/send-notification")
async def send_notification(
    payload: PushRequest,
    push: ExpoPushClient = Depends(get_push_client),
):
    try:
        expo_response = await push.send_message({
            "to": payload.expoPushToken,
            "sound": "default",
            "title": payload.title,
            "body": payload.body,
        })
        return {"success": True, "expoResponse": expo_response}
    except Exception as e:
        logger.exception("❌ Notification error: %s", e)
        raise HTTPException(status_code=500, detail=f"Error sending notification: {str(e)}")


# -------------------------
# New order → store owner (best effort)
# -------------------------
async def notify_store_owner(
    firestore: FirestoreAdapter,
    push: ExpoPushClient,
    store_id: str,
    order_id: str,
) -> bool:
    """
    Tell the owner of `store_id` about a new order.
    Every failure is logged and swallowed; returns True only when tickets came back.
    """
    try:
        store = firestore.get(config.STORES, store_id)
        if store is None:
            logger.warning("⚠️ Store not found for storeId: %s", store_id)
            return False

        owner_id = store.get("ownerId")
        if not owner_id:
            logger.warning("⚠️ No ownerId found in store document: %s", store_id)
            return False

        seller = firestore.get(config.USERS, owner_id)
        token = (seller or {}).get("expoPushToken")
        if not token:
            logger.warning("⚠️ No push token found for seller: %s", owner_id)
            return False

        message = {
            "to": token,
            "sound": "default",
            "title": "📦 New Order Received!",
            "body": f'A buyer just placed a new order for your store "{store.get("storeName")}".',
            "data": {"orderId": order_id},
        }
        tickets = await push.send_batched([message])
        if not tickets:
            logger.warning("⚠️ Invalid Expo push token for seller: %s", owner_id)
            return False

        logger.info("✅ Push notification sent to seller: %s", owner_id)
        return True
    except Exception as e:
        logger.exception("❌ Error during order notification for store %s: %s", store_id, e)
        return False
