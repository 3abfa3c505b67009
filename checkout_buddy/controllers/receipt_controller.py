"""
Emailed purchase receipts, inline HTML or PDF attachment.
"""
import logging

from fastapi.responses import JSONResponse

from checkout_buddy.core.exceptions import (
    ForbiddenError,
    NotFoundError,
    ValidationError,
    error_boundary,
)
from checkout_buddy.core.responses import respond
from checkout_buddy.schemas.receipts import ReceiptDetails, ReceiptRequest
from checkout_buddy.schemas.users import Principal
from checkout_buddy.services.email_service import EmailService
from checkout_buddy.services.receipt_pdf import render_receipt_pdf
from checkout_buddy.services.user_service import UserService

logger = logging.getLogger(__name__)


class ReceiptController:

    def __init__(self, user_service: UserService, email_service: EmailService):
        self.user_service = user_service
        self.email_service = email_service

    async def _receipt_details(self, principal: Principal, data: ReceiptRequest) -> ReceiptDetails:
        if principal.is_guest:
            raise ForbiddenError("User not logged in")

        user = await self.user_service.find_by_email(principal.email)
        if user is None:
            raise NotFoundError("User not found")

        missing = data.missing_fields()
        if missing:
            logger.info(f"Receipt request missing fields: {missing}")
            raise ValidationError("Missing required fields")

        return ReceiptDetails(email=user.email, name=user.name, **data.model_dump())

    @error_boundary("Failed to send receipt")
    async def send_receipt(self, principal: Principal, data: ReceiptRequest) -> JSONResponse:
        details = await self._receipt_details(principal, data)
        await self.email_service.send_receipt(details)
        logger.info(f"Receipt sent to {details.email}")
        return respond("Receipt sent successfully")

    @error_boundary("Failed to send receipt")
    async def send_receipt_attachment(self, principal: Principal, data: ReceiptRequest) -> JSONResponse:
        details = await self._receipt_details(principal, data)
        pdf = render_receipt_pdf(details)
        await self.email_service.send_receipt_attachment(details, pdf)
        logger.info(f"Receipt PDF sent to {details.email}")
        return respond("Receipt sent successfully")
