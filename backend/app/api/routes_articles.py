from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from app.api.deps import get_product_service, parse_id, require_admin, require_member
from app.api.errors import ValidationFailed
from app.schemas.product_schema import ProductIn, ProductOut
from app.services.cart_pricing import validate_product
from app.services.product_service import ProductNotFound, ProductService

router = APIRouter(prefix="/articles", tags=["articles"])


def _validated(payload: Any) -> ProductIn:
    fields = {"name": payload.get("name"), "price": payload.get("price")} if isinstance(payload, dict) else None
    errors = validate_product(fields)
    if errors:
        raise ValidationFailed(errors)
    return ProductIn.from_payload(fields)


def _out(p) -> dict:
    return ProductOut.model_validate(p).model_dump(exclude_none=True)


@router.get("", summary="List products", dependencies=[Depends(require_member)])
def list_products(svc: ProductService = Depends(get_product_service)):
    products = svc.list_products()
    return {"success": True, "count": len(products), "data": products}


@router.get("/{product_id}", summary="Get product by id", dependencies=[Depends(require_member)])
def get_product(product_id: str, svc: ProductService = Depends(get_product_service)):
    pid = parse_id(product_id, "product ID")
    try:
        return {"success": True, "data": svc.get_product(pid)}
    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post(
    "",
    summary="Create product",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_product(payload: Any = Body(None), svc: ProductService = Depends(get_product_service)):
    product = svc.create_product(_validated(payload))
    return {"success": True, "message": "Product created successfully", "data": _out(product)}


@router.put("/{product_id}", summary="Update product", dependencies=[Depends(require_admin)])
def update_product(
    product_id: str,
    payload: Any = Body(None),
    svc: ProductService = Depends(get_product_service),
):
    pid = parse_id(product_id, "product ID")
    data = _validated(payload)
    try:
        product = svc.update_product(pid, data)
    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True, "message": "Product updated successfully", "data": _out(product)}


@router.delete("/{product_id}", summary="Delete product", dependencies=[Depends(require_admin)])
def delete_product(product_id: str, svc: ProductService = Depends(get_product_service)):
    pid = parse_id(product_id, "product ID")
    try:
        deleted = svc.delete_product(pid)
    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True, "message": "Product deleted successfully", "data": deleted}


@router.delete("", summary="Delete all products", dependencies=[Depends(require_admin)])
def clear_products(svc: ProductService = Depends(get_product_service)):
    svc.clear_products()
    return {"success": True, "message": "All products deleted successfully"}
