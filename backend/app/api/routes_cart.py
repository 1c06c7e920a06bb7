from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_cart_service, parse_id, require_member
from app.api.errors import ValidationFailed
from app.schemas.cart_schema import CartItemIn, CartUpdateIn
from app.services.cart_service import CartItemNotFound, CartService, QuantityLimitExceeded
from app.services.product_service import ProductNotFound

router = APIRouter(prefix="/cart", tags=["cart"], dependencies=[Depends(require_member)])


@router.get("", summary="Get cart")
def get_cart(svc: CartService = Depends(get_cart_service)):
    return {"success": True, "data": svc.get_summary()}


@router.post("", summary="Add item to cart", status_code=status.HTTP_201_CREATED)
def add_item(payload: CartItemIn, svc: CartService = Depends(get_cart_service)):
    try:
        item = svc.add_item(payload)
    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except QuantityLimitExceeded as e:
        raise ValidationFailed([str(e)])
    return {
        "success": True,
        "message": "Product added to cart successfully",
        "data": item,
        "cart": svc.get_summary(),
    }


@router.put("/{item_id}", summary="Update cart item quantity")
def update_item(item_id: str, payload: CartUpdateIn, svc: CartService = Depends(get_cart_service)):
    iid = parse_id(item_id, "cart item ID")
    try:
        item = svc.update_item(iid, payload.quantity)
    except CartItemNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {
        "success": True,
        "message": "Cart item updated successfully",
        "data": item,
        "cart": svc.get_summary(),
    }


@router.delete("/{item_id}", summary="Remove item")
def remove_item(item_id: str, svc: CartService = Depends(get_cart_service)):
    iid = parse_id(item_id, "cart item ID")
    try:
        removed = svc.remove_item(iid)
    except CartItemNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {
        "success": True,
        "message": "Item removed from cart successfully",
        "data": removed,
        "cart": svc.get_summary(),
    }


@router.delete("", summary="Clear cart")
def clear_cart(svc: CartService = Depends(get_cart_service)):
    svc.clear()
    return {"success": True, "message": "Cart cleared successfully", "cart": svc.get_summary()}
