# AGRICONNECT/ORDERS/order.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status

from AGRICONNECT.core import config
from AGRICONNECT.core.firestore_adapter import FirestoreAdapter, get_firestore, utcnow
from AGRICONNECT.Notification.expo import ExpoPushClient, get_push_client
from AGRICONNECT.Notification.notification import notify_store_owner
from AGRICONNECT.ORDERS.fees import calculate_fees
from AGRICONNECT.ORDERS.models import CreateOrder, SellerOrder

logger = logging.getLogger("orders")

router = APIRouter(tags=["orders"])


def build_order(payload: CreateOrder) -> dict:
    """Order document with server-derived totals; any client total is ignored."""
    products = [item.model_dump() for item in payload.products]
    fees = calculate_fees(products, payload.distance)
    now = utcnow()

    return {
        "orderId": payload.orderId,
        "userId": payload.userId,
        "products": products,
        "total": fees.subtotal,
        "deliveryAddress": payload.deliveryAddress,
        "distance": payload.distance,
        "totalWeightKg": fees.total_weight_kg,
        "deliveryFee": fees.delivery_fee,
        "grandTotal": fees.grand_total,
        "storeId": payload.storeId,
        "orderStatus": "pending",
        "status": payload.status or "pending",
        "createdAt": payload.createdAt or now.isoformat(),
        "updatedAt": now,
    }


# ==============================
# Full order: derived fees + store owner notification
# ==============================
@router.post("/createorder", status_code=status.HTTP_201_CREATED)
async def create_order(
    payload: CreateOrder,
    firestore: FirestoreAdapter = Depends(get_firestore),
    push: ExpoPushClient = Depends(get_push_client),
):
    try:
        order = build_order(payload)
        firestore.set(config.ORDERS, payload.orderId, order)
        logger.info("✅ Order saved: %s", payload.orderId)
    except Exception as e:
        logger.exception("[CreateOrder Error] %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to create order: {str(e)}")

    if payload.storeId:
        await notify_store_owner(firestore, push, payload.storeId, payload.orderId)

    return {
        "message": "✅ Order created and seller notified successfully",
        "orderId": payload.orderId,
        "order": order,
    }


# ==============================
# Minimal order: seller notified directly, failures reported
# ==============================
@router.post("/orders")
async def create_seller_order(
    payload: SellerOrder,
    firestore: FirestoreAdapter = Depends(get_firestore),
    push: ExpoPushClient = Depends(get_push_client),
):
    try:
        # An order created through /createorder keeps its items and totals
        if firestore.get(config.ORDERS, payload.orderId) is not None:
            firestore.update(config.ORDERS, payload.orderId, {
                "sellerId": payload.sellerId,
                "orderDetails": payload.orderDetails or {},
                "updatedAt": utcnow(),
            })
        else:
            firestore.set(config.ORDERS, payload.orderId, {
                "sellerId": payload.sellerId,
                "orderId": payload.orderId,
                "orderDetails": payload.orderDetails or {},
                "status": "pending",
                "createdAt": utcnow(),
            })

        seller = firestore.get(config.USERS, payload.sellerId)
        if seller is None:
            raise HTTPException(status_code=404, detail="Seller not found")

        token = seller.get("expoPushToken")
        if not token:
            raise HTTPException(status_code=400, detail="Seller has no push token")

        await push.send_message({
            "to": token,
            "sound": "default",
            "title": "New Order Received!",
            "body": f"You have a new order: {payload.orderId}",
            "data": {"orderId": payload.orderId},
        })
        return {"message": "Order created and notification sent!"}
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("❌ Error creating order: %s", e)
        raise HTTPException(status_code=500, detail=f"Something went wrong: {str(e)}")
