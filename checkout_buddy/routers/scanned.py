from typing import Optional

from fastapi import APIRouter, Depends, Query

from checkout_buddy.controllers.scanned_controller import ScannedController
from checkout_buddy.dependencies import CurrentPrincipal, get_scanned_controller
from checkout_buddy.schemas import ScanRequest

router = APIRouter()


# Static paths are registered before "/{scanned_id}"

@router.get("/nearbystores")
async def nearby_stores(
    lat: Optional[float] = None,
    lng: Optional[float] = None,
    product_name: Optional[str] = Query(None, alias="productName"),
    price: Optional[float] = None,
    controller: ScannedController = Depends(get_scanned_controller),
):
    return await controller.nearby_stores(lat, lng, product_name, price)


@router.get("/search")
async def search_product(
    principal: CurrentPrincipal,
    barcode: str = Query(..., min_length=1),
    controller: ScannedController = Depends(get_scanned_controller),
):
    return await controller.search(principal, barcode)


@router.post("")
async def scan_barcode(
    data: ScanRequest,
    principal: CurrentPrincipal,
    controller: ScannedController = Depends(get_scanned_controller),
):
    return await controller.scan(principal, data.barcode)


@router.get("")
async def list_scanned(
    principal: CurrentPrincipal,
    controller: ScannedController = Depends(get_scanned_controller),
):
    return await controller.list_scanned(principal)


@router.get("/users/{user_id}")
async def list_scanned_by_user(
    user_id: str,
    principal: CurrentPrincipal,
    controller: ScannedController = Depends(get_scanned_controller),
):
    return await controller.list_by_user(principal, user_id)


@router.post("/barcode/{barcode}")
async def list_scanned_by_barcode(
    barcode: str,
    principal: CurrentPrincipal,
    controller: ScannedController = Depends(get_scanned_controller),
):
    return await controller.list_by_barcode(principal, barcode)


@router.get("/{scanned_id}")
async def get_scanned(
    scanned_id: str,
    principal: CurrentPrincipal,
    controller: ScannedController = Depends(get_scanned_controller),
):
    return await controller.get_scanned(principal, scanned_id)


@router.delete("/{scanned_id}")
async def delete_scanned(
    scanned_id: str,
    principal: CurrentPrincipal,
    controller: ScannedController = Depends(get_scanned_controller),
):
    return await controller.delete_scanned(principal, scanned_id)
