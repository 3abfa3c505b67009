from fastapi.responses import JSONResponse

from checkout_buddy.core.exceptions import error_boundary
from checkout_buddy.core.responses import respond
from checkout_buddy.schemas.payments import PaymentIntentCreate
from checkout_buddy.services.payment_service import PaymentService


class PaymentController:

    def __init__(self, payment_service: PaymentService):
        self.payment_service = payment_service

    @error_boundary()
    async def create_payment_intent(self, data: PaymentIntentCreate) -> JSONResponse:
        """Create a payment intent and hand its client secret back to the app."""
        intent = await self.payment_service.create_intent(int(data.amount), data.currency)
        return respond("Request was successful", intent["client_secret"])
