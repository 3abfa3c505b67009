from fastapi import APIRouter, Depends

from checkout_buddy.controllers.receipt_controller import ReceiptController
from checkout_buddy.dependencies import CurrentPrincipal, get_receipt_controller
from checkout_buddy.schemas import ReceiptRequest

router = APIRouter()


@router.post("")
async def send_receipt(
    data: ReceiptRequest,
    principal: CurrentPrincipal,
    controller: ReceiptController = Depends(get_receipt_controller),
):
    return await controller.send_receipt(principal, data)


@router.post("/attachment")
async def send_receipt_attachment(
    data: ReceiptRequest,
    principal: CurrentPrincipal,
    controller: ReceiptController = Depends(get_receipt_controller),
):
    return await controller.send_receipt_attachment(principal, data)
