"""
Stripe payment intents through the official SDK.
"""
import logging
from typing import Any, Dict

import stripe
from fastapi.concurrency import run_in_threadpool

from checkout_buddy.core.config import settings
from checkout_buddy.core.exceptions import PaymentProviderError

logger = logging.getLogger(__name__)


class PaymentService:
    """Creates payment intents with Stripe."""

    def __init__(self, secret_key: str = settings.STRIPE_SECRET_KEY):
        self.secret_key = secret_key

    async def create_intent(self, amount: int, currency: str) -> Dict[str, Any]:
        """
        Create a payment intent.

        Args:
            amount: Amount in the smallest currency unit (e.g. cents)
            currency: ISO currency code

        Returns:
            ``id`` and ``client_secret`` of the intent; the secret confirms it client-side

        Raises:
            PaymentProviderError: If Stripe rejects the request or is unreachable
        """
        try:
            intent = await run_in_threadpool(
                stripe.PaymentIntent.create,
                api_key=self.secret_key,
                amount=amount,
                currency=currency.lower(),
                automatic_payment_methods={"enabled": True},
            )
        except stripe.StripeError as e:
            logger.error(f"Stripe rejected payment intent: {e.user_message or e}")
            raise PaymentProviderError(str(e)) from e

        logger.info(f"Payment intent created: {intent.id} ({amount} {currency})")
        return {"id": intent.id, "client_secret": intent.client_secret}
