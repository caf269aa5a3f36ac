# PRODUCTS/product.py
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status

from AGRICONNECT.core import config
from AGRICONNECT.core.firestore_adapter import FirestoreAdapter, get_firestore, utcnow
from AGRICONNECT.PRODUCTS.models import CreateProduct, UpdateProduct
from AGRICONNECT.utils.fields import supplied_fields

logger = logging.getLogger("products")

router = APIRouter(tags=["products"])


@router.post("/createproduct", status_code=status.HTTP_201_CREATED)
async def create_product(
    product: CreateProduct,
    firestore: FirestoreAdapter = Depends(get_firestore),
):
    """
    Create (or overwrite) products/{productId}; the client-generated id is the document id.
    """
    try:
        now = utcnow()
        new_product = {
            "productId": product.productId,
            "storeId": product.storeId,
            "brandName": product.brandName,
            "ownerId": product.ownerId,
            "ownerName": product.ownerName,
            "productName": product.productName,
            "categories": product.categories,
            "productDescription": product.productDescription or "",
            "productImages": product.productImages,
            "unit": product.unit or "kg",
            "variants": [v.to_document() for v in product.variants or []],
            "createdAt": product.createdAt or now.isoformat(),
            "updatedAt": now,
            "status": "active",
        }
        firestore.set(config.PRODUCTS, product.productId, new_product)

        return {
            "message": "✅ Product created successfully",
            "productId": product.productId,
            "product": new_product,
        }
    except Exception as e:
        logger.exception("[CreateProduct Error] %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to create product: {str(e)}")


@router.put("/updateproduct/{productId}")
async def update_product(
    productId: str,
    product: Optional[UpdateProduct] = None,
    firestore: FirestoreAdapter = Depends(get_firestore),
):
    try:
        if firestore.get(config.PRODUCTS, productId) is None:
            raise HTTPException(status_code=404, detail="❌ Product not found")

        updates = supplied_fields(product or UpdateProduct())
        if product is not None and product.variants is not None:
            updates["variants"] = [v.to_document() for v in product.variants]
        updates["updatedAt"] = utcnow()

        firestore.update(config.PRODUCTS, productId, updates)
        return {"message": "✅ Product updated successfully", "productId": productId}
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("🔥 [UpdateProduct Error] %s", e)
        raise HTTPException(status_code=500, detail=f"Error updating product: {str(e)}")
