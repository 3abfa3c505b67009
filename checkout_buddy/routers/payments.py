from fastapi import APIRouter, Depends

from checkout_buddy.controllers.payment_controller import PaymentController
from checkout_buddy.dependencies import get_payment_controller
from checkout_buddy.schemas import PaymentIntentCreate

router = APIRouter()


@router.post("/intents")
async def create_payment_intent(
    data: PaymentIntentCreate,
    controller: PaymentController = Depends(get_payment_controller),
):
    return await controller.create_payment_intent(data)
