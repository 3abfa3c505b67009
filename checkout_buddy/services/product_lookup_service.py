"""
Product lookup: Open Food Facts for the canonical product, RapidAPI's
real-time Amazon data search for price and photo.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from checkout_buddy.core.config import settings
from checkout_buddy.core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class ProductLookupService:
    """Queries the open product database and the commerce search API."""

    def __init__(
        self,
        rapid_api_key: str = settings.RAPID_API_KEY,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.rapid_api_key = rapid_api_key
        self._transport = transport

    async def fetch_product(self, barcode: str) -> Optional[Dict[str, Any]]:
        """
        Look a barcode up on Open Food Facts.

        Returns:
            ``{"name", "category"}`` or None when the product is unknown
        """
        url = f"{settings.OPEN_FOOD_FACTS_URL}/{barcode}"
        async with httpx.AsyncClient(transport=self._transport) as client:
            try:
                response = await client.get(url)
            except httpx.HTTPError as e:
                logger.error(f"Open Food Facts request failed for {barcode}: {e}")
                raise ExternalServiceError(f"Open Food Facts request failed: {e}") from e

        if response.status_code == 404:
            return None
        if response.is_error:
            raise ExternalServiceError(f"Open Food Facts returned {response.status_code}")

        payload = response.json()
        product = payload.get("product")
        if payload.get("status") == 0 or not product or not product.get("product_name"):
            return None

        return {
            "name": product["product_name"],
            "category": product.get("categories") or "Uncategorized",
        }

    async def search_offer(self, query: str) -> Optional[Dict[str, Any]]:
        """
        Search Amazon listings for ``query`` and return the most relevant one.

        Returns:
            The first product of the search result or None if nothing matched
        """
        params = {
            "query": query,
            "page": "1",
            "country": settings.PRODUCT_SEARCH_COUNTRY,
            "sort_by": "RELEVANCE",
            "product_condition": "ALL",
            "is_prime": "false",
        }
        headers = {
            "x-rapidapi-key": self.rapid_api_key,
            "x-rapidapi-host": settings.RAPID_API_HOST,
        }
        async with httpx.AsyncClient(transport=self._transport) as client:
            try:
                response = await client.get(
                    f"https://{settings.RAPID_API_HOST}/search", params=params, headers=headers
                )
                response.raise_for_status()
            except httpx.HTTPError as e:
                logger.error(f"Product search failed for '{query}': {e}")
                raise ExternalServiceError(f"Product search failed: {e}") from e

        products = (response.json().get("data") or {}).get("products") or []
        return products[0] if products else None
