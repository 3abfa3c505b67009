"""
Google Places: nearby search and place photos.
"""
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import httpx

from checkout_buddy.core.config import settings
from checkout_buddy.core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class PlacesService:
    """Thin client for the Places Nearby Search and Place Details APIs."""

    NEARBY_SEARCH_URL = "https://maps.googleapis.com/maps/api/place/nearbysearch/json"
    PLACE_DETAILS_URL = "https://maps.googleapis.com/maps/api/place/details/json"
    PLACE_PHOTO_URL = "https://maps.googleapis.com/maps/api/place/photo"

    def __init__(
        self,
        api_key: str = settings.PLACES_API_KEY,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self._transport = transport

    async def _get(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        async with httpx.AsyncClient(transport=self._transport) as client:
            try:
                response = await client.get(url, params={**params, "key": self.api_key})
                response.raise_for_status()
            except httpx.HTTPError as e:
                logger.error(f"Places request to {url} failed: {e}")
                raise ExternalServiceError(f"Places request failed: {e}") from e
        return response.json()

    async def nearby_search(
        self, lat: float, lng: float, keyword: str, radius: int = settings.PLACES_SEARCH_RADIUS
    ) -> List[Dict[str, Any]]:
        payload = await self._get(
            self.NEARBY_SEARCH_URL,
            {"location": f"{lat},{lng}", "radius": radius, "keyword": keyword},
        )
        return payload.get("results") or []

    def photo_url(self, photo_reference: str, max_width: int = 400) -> str:
        query = urlencode({"maxwidth": max_width, "photoreference": photo_reference, "key": self.api_key})
        return f"{self.PLACE_PHOTO_URL}?{query}"

    async def get_place_photo(self, place_id: str) -> Optional[str]:
        """Return a URL for the first photo of a place, or None if it has none."""
        payload = await self._get(self.PLACE_DETAILS_URL, {"place_id": place_id, "fields": "photos"})
        photos = (payload.get("result") or {}).get("photos") or []
        if not photos:
            return None
        return self.photo_url(photos[0]["photo_reference"])
