"""Orders: /createorder (derived fees, best-effort owner push) and /orders.

Invariants:
    - total / deliveryFee / grandTotal always come from the line items
    - A failed owner notification never fails order creation
    - /orders reports a missing seller or push token to the caller
"""

TOKEN = "ExponentPushToken[seller-device]"


def order(**overrides):
    body = {
        "orderId": "order-1",
        "userId": "buyer-1",
        "products": [
            {"productId": "p1", "price": 45.5, "quantity": 3, "unit": "kg"},
            {"productId": "p2", "price": 120, "quantity": 1, "unit": "sack"},
            {"productId": "p3", "price": 10, "quantity": 5, "unit": "piece"},
        ],
        "deliveryAddress": {"municipality": "Tagum", "barangay": "Visayan Village"},
        "distance": 4,
    }
    body.update(overrides)
    return body


def seed_store(firestore, token=TOKEN):
    firestore.set("stores", "store-1", {"storeName": "Green Farm", "ownerId": "seller-1"})
    seller = {"role": "seller"}
    if token is not None:
        seller["expoPushToken"] = token
    firestore.set("users", "seller-1", seller)


async def test_create_order_derives_totals(client, firestore):
    res = await client.post("/createorder", json=order(total=1, grandTotal=2))

    assert res.status_code == 201
    data = res.json()
    assert data["orderId"] == "order-1"

    saved = firestore.get("Orders", "order-1")
    assert saved["total"] == 306.5
    assert saved["totalWeightKg"] == 6.0
    # 4 * 2 for distance, 20 for the 5-10 kg bracket
    assert saved["deliveryFee"] == 28
    assert saved["grandTotal"] == 334.5
    assert saved["orderStatus"] == "pending"
    assert saved["status"] == "pending"
    assert data["order"]["grandTotal"] == 334.5


async def test_create_order_keeps_line_item_extras(client, firestore):
    await client.post("/createorder", json=order())

    products = firestore.get("Orders", "order-1")["products"]
    assert [p["productId"] for p in products] == ["p1", "p2", "p3"]


async def test_create_order_distance_defaults_to_zero(client, firestore):
    body = order(products=[{"price": 20, "quantity": 2, "unit": "kg"}])
    del body["distance"]

    res = await client.post("/createorder", json=body)

    assert res.status_code == 201
    saved = firestore.get("Orders", "order-1")
    assert saved["distance"] == 0
    assert saved["deliveryFee"] == 10
    assert saved["grandTotal"] == 50


async def test_create_order_notifies_store_owner(client, firestore, push):
    seed_store(firestore)

    res = await client.post("/createorder", json=order(storeId="store-1"))

    assert res.status_code == 201
    assert len(push.sent) == 1
    message = push.sent[0]
    assert message["to"] == TOKEN
    assert message["title"] == "📦 New Order Received!"
    assert "Green Farm" in message["body"]
    assert message["data"] == {"orderId": "order-1"}


async def test_create_order_with_unknown_store_still_succeeds(client, firestore, push):
    res = await client.post("/createorder", json=order(storeId="missing-store"))

    assert res.status_code == 201
    assert firestore.get("Orders", "order-1") is not None
    assert push.sent == []


async def test_create_order_with_invalid_token_still_succeeds(client, firestore, push):
    seed_store(firestore, token="not-a-token")

    res = await client.post("/createorder", json=order(storeId="store-1"))

    assert res.status_code == 201
    assert push.sent == []


async def test_create_order_push_failure_is_swallowed(client, firestore, push):
    seed_store(firestore)
    push.fail = True

    res = await client.post("/createorder", json=order(storeId="store-1"))

    assert res.status_code == 201


async def test_create_order_missing_fields(client, firestore):
    body = order()
    del body["userId"]

    res = await client.post("/createorder", json=body)

    assert res.status_code == 400
    assert "userId" in res.json()["detail"]
    assert firestore.docs("Orders") == {}


async def test_create_order_empty_delivery_address(client, firestore):
    res = await client.post("/createorder", json=order(deliveryAddress={}))

    assert res.status_code == 400
    assert firestore.docs("Orders") == {}


async def test_create_order_negative_distance(client):
    res = await client.post("/createorder", json=order(distance=-1))

    assert res.status_code == 400


async def test_seller_order_sends_push(client, firestore, push):
    firestore.set("users", "seller-1", {"expoPushToken": TOKEN})

    res = await client.post("/orders", json={
        "sellerId": "seller-1",
        "orderId": "order-9",
        "orderDetails": {"items": 2},
    })

    assert res.status_code == 200
    assert res.json() == {"message": "Order created and notification sent!"}
    assert firestore.get("Orders", "order-9")["orderDetails"] == {"items": 2}
    assert push.sent[0]["body"] == "You have a new order: order-9"


async def test_seller_order_unknown_seller(client):
    res = await client.post("/orders", json={"sellerId": "ghost", "orderId": "order-9"})

    assert res.status_code == 404
    assert res.json()["detail"] == "Seller not found"


async def test_seller_order_without_token(client, firestore):
    firestore.set("users", "seller-1", {"role": "seller"})

    res = await client.post("/orders", json={"sellerId": "seller-1", "orderId": "order-9"})

    assert res.status_code == 400
    assert res.json()["detail"] == "Seller has no push token"


async def test_seller_order_push_failure(client, firestore, push):
    firestore.set("users", "seller-1", {"expoPushToken": TOKEN})
    push.fail = True

    res = await client.post("/orders", json={"sellerId": "seller-1", "orderId": "order-9"})

    assert res.status_code == 500


async def test_seller_order_keeps_existing_full_order(client, firestore, push):
    firestore.set("users", "seller-1", {"expoPushToken": TOKEN})
    await client.post("/createorder", json=order())

    res = await client.post("/orders", json={
        "sellerId": "seller-1",
        "orderId": "order-1",
        "orderDetails": {"note": "leave at gate"},
    })

    assert res.status_code == 200
    saved = firestore.get("Orders", "order-1")
    assert saved["grandTotal"] == 334.5
    assert len(saved["products"]) == 3
    assert saved["total"] == 306.5
    assert saved["sellerId"] == "seller-1"
    assert saved["orderDetails"] == {"note": "leave at gate"}
    assert saved["status"] == "pending"
