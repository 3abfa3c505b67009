"""
Transactional email through the Resend API.

Every send raises ``EmailDeliveryError`` on failure; callers decide whether
that is fatal. The Resend client is synchronous, so sends run in the thread
pool.
"""
import html
import logging
from typing import Any, Dict, List, Optional

import resend
from fastapi.concurrency import run_in_threadpool

from checkout_buddy.core.config import settings
from checkout_buddy.core.exceptions import EmailDeliveryError
from checkout_buddy.schemas.receipts import ReceiptDetails
from checkout_buddy.services.receipt_pdf import render_receipt_pdf

logger = logging.getLogger(__name__)

RECEIPT_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Receipt</title>
    <style>
        body {{ font-family: Arial, sans-serif; margin: 20px; color: #333; }}
        .container {{ max-width: 600px; margin: auto; padding: 20px; border: 1px solid #ddd;
                      border-radius: 8px; background-color: #f9f9f9; }}
        h1 {{ text-align: center; color: #333; }}
        p {{ margin: 10px 0; line-height: 1.5; }}
        .section {{ padding: 10px 0; }}
        .highlight {{ font-weight: bold; display: inline-block; width: 150px; }}
        .value {{ margin-left: 20px; }}
    </style>
</head>
<body>
    <div class="container">
        <h1>Receipt</h1>
        <p>Hello {name},</p>
        <p>Thank you for your purchase on {date}. Here is your receipt:</p>
        <hr>
        <div class="section">
            <p><span class="highlight">Product Name:</span><span class="value">{product_name}</span></p>
            <p><span class="highlight">Subtotal:</span><span class="value">${subtotal:.2f}</span></p>
            <p><span class="highlight">Tax (10%):</span><span class="value">${tax:.2f}</span></p>
            <p><span class="highlight">Total:</span><span class="value">${total:.2f}</span></p>
        </div>
        <hr>
        <div class="section">
            <p><span class="highlight">Payment Method:</span><span class="value">{payment_method}</span></p>
            <p><span class="highlight">Date:</span><span class="value">{date}</span></p>
        </div>
    </div>
</body>
</html>
"""


def render_receipt_html(details: ReceiptDetails) -> str:
    return RECEIPT_HTML.format(
        name=html.escape(details.name),
        date=html.escape(details.date),
        product_name=html.escape(details.product_name),
        subtotal=details.subtotal,
        tax=details.tax,
        total=details.total,
        payment_method=html.escape(details.payment_method),
    )



class EmailService:
    """Builds and sends the application's emails."""

    def __init__(
        self,
        api_key: str = settings.RESEND_API_KEY,
        from_address: str = settings.MAIL_FROM_ADDRESS,
        from_name: str = settings.MAIL_FROM_NAME,
    ):
        self.api_key = api_key
        self.from_address = from_address
        self.from_name = from_name

    def _payload(self, to: str, subject: str, text: str, html_body: Optional[str] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "from": f"{self.from_name} <{self.from_address}>",
            "to": [to],
            "subject": subject,
            "text": text,
        }
        if html_body:
            payload["html"] = html_body
        return payload

    def _deliver(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        previous_api_key = getattr(resend, "api_key", None)
        resend.api_key = self.api_key
        try:
            return resend.Emails.send(payload)
        finally:
            resend.api_key = previous_api_key

    async def send(self, payload: Dict[str, Any]) -> str:
        """Send ``payload`` and return the provider's message id."""
        recipients = ", ".join(payload["to"])
        if not self.api_key:
            logger.error(f"Cannot send '{payload['subject']}' to {recipients}: RESEND_API_KEY is not configured")
            raise EmailDeliveryError("Resend API key is not configured")

        try:
            response = await run_in_threadpool(self._deliver, payload)
        except Exception as e:
            logger.error(f"Failed to send '{payload['subject']}' to {recipients}: {e}")
            raise EmailDeliveryError(str(e)) from e

        if not isinstance(response, dict) or not response.get("id"):
            logger.error(f"Unexpected Resend response for '{payload['subject']}': {response}")
            raise EmailDeliveryError(f"Unexpected response: {response}")

        logger.info(f"Sent '{payload['subject']}' to {recipients} ({response['id']})")
        return response["id"]

    async def send_verification_code(self, email: str, name: str, code: str) -> None:
        await self.send(self._payload(
            email,
            "Verification code",
            f"Hello {name}, your verification code is: {code}",
        ))

    async def send_welcome_email(self, email: str, name: str) -> None:
        await self.send(self._payload(
            email,
            "Welcome to Check Out Buddy",
            f"Hello {name},\n\nWelcome to Check Out Buddy! We're excited to have you on board.\n\n"
            "Best regards,\nThe Check Out Buddy Team",
            f"<p>Hello {html.escape(name)},</p>"
            "<p>Welcome to Check Out Buddy! We're excited to have you on board.</p>"
            "<p>Best regards,<br>The Check Out Buddy Team</p>",
        ))

    async def send_forgot_password_email(self, email: str, name: str, code: str) -> None:
        await self.send(self._payload(
            email,
            "Password Reset Request",
            f"Hello {name},\n\nYou requested to reset your password. Please copy the code to reset it:\n\n"
            f"{code}\n\nIf you did not request this, please ignore this email.\n\n"
            "Best regards,\nCheck Out Buddy Team",
        ))

    async def send_receipt(self, details: ReceiptDetails) -> None:
        await self.send(self._payload(
            details.email,
            "Your Purchase Receipt",
            f"Hello {details.name},\n\nThank you for your purchase on {details.date}. "
            f"Total: ${details.total:.2f}",
            render_receipt_html(details),
        ))

    async def send_receipt_attachment(self, details: ReceiptDetails, pdf: Optional[bytes] = None) -> None:
        pdf = pdf if pdf is not None else render_receipt_pdf(details)
        payload = self._payload(
            details.email,
            "Your Purchase Receipt",
            f"Hello {details.name},\n\nPlease find your receipt attached.\n\n"
            "Best regards,\nThe Check Out Buddy Team",
        )
        attachments: List[Dict[str, Any]] = [{"filename": "receipt.pdf", "content": list(pdf)}]
        payload["attachments"] = attachments
        await self.send(payload)
