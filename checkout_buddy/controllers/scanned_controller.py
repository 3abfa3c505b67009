"""
Barcode scans, scan history and nearby stores.

A scan resolves the barcode on Open Food Facts, then looks the product name
up on the commerce search API for a price and a photo. Signed-in users get
the result persisted to their history; guests get it back unsaved.
"""
import asyncio
import logging
import random
from typing import Any, Dict, Optional, Tuple

from fastapi.responses import JSONResponse

from checkout_buddy.core.config import settings
from checkout_buddy.core.exceptions import (
    ForbiddenError,
    NotFoundError,
    ValidationError,
    error_boundary,
)
from checkout_buddy.core.responses import respond
from checkout_buddy.models.base import new_id, utcnow
from checkout_buddy.schemas.scanned import NearbyStore, ProductSearchResult, ScannedPublic
from checkout_buddy.schemas.users import Principal
from checkout_buddy.services.places_service import PlacesService
from checkout_buddy.services.product_lookup_service import ProductLookupService
from checkout_buddy.services.scanned_history_service import ScannedHistoryService

logger = logging.getLogger(__name__)


def generate_estimated_price(
    reference_price: float,
    variance_percentage: float = settings.PRICE_VARIANCE_PERCENTAGE,
    rng: random.Random = None,
) -> float:
    """
    Pick a display price within ``variance_percentage`` of ``reference_price``.

    The value is uniform in [P*(1-V/100), P*(1+V/100)], rounded to cents and
    clamped back into that interval so rounding can never leave it.
    """
    rng = rng or random
    low = reference_price * (1 - variance_percentage / 100)
    high = reference_price * (1 + variance_percentage / 100)
    if low > high:
        low, high = high, low
    estimate = round(rng.uniform(low, high), 2)
    return float(min(max(estimate, low), high))


class ScannedController:

    def __init__(
        self,
        scanned_service: ScannedHistoryService,
        product_lookup: ProductLookupService,
        places_service: PlacesService,
    ):
        self.scanned_service = scanned_service
        self.product_lookup = product_lookup
        self.places_service = places_service

    async def _lookup(self, barcode: str) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        product = await self.product_lookup.fetch_product(barcode)
        if product is None:
            raise NotFoundError(f"Product with barcode {barcode} not found")

        offer = await self.product_lookup.search_offer(product["name"])
        if offer is None:
            raise NotFoundError(f"{product['name']} not found")

        return product, offer

    async def _record(self, principal: Principal, fields: Dict[str, Any]) -> ScannedPublic:
        """Persist the scan for signed-in users; guests get an unsaved copy."""
        if principal.is_guest:
            now = utcnow()
            return ScannedPublic(created_at=now, updated_at=now, **fields)

        scanned = await self.scanned_service.save({"user_id": principal.id, **fields})
        logger.info(f"Scan saved: {scanned.barcode} for user {principal.id}")
        return ScannedPublic.model_validate(scanned)

    @error_boundary()
    async def scan(self, principal: Principal, barcode: str) -> JSONResponse:
        product, offer = await self._lookup(barcode)

        record = await self._record(principal, {
            "barcode": barcode,
            "name": product["name"],
            "price": str(offer.get("product_minimum_offer_price") or offer.get("product_price") or ""),
            "category": product["category"],
            "image_url": offer.get("product_photo") or "",
        })
        return respond("Request was successful", record)

    @error_boundary()
    async def search(self, principal: Principal, barcode: str) -> JSONResponse:
        product, offer = await self._lookup(barcode)

        price = str(offer.get("product_price") or offer.get("product_minimum_offer_price") or "")
        record = await self._record(principal, {
            "barcode": barcode,
            "name": product["name"],
            "price": price,
            "category": product["category"],
            "image_url": offer.get("product_photo") or "",
        })

        result = ProductSearchResult(
            asin=offer.get("asin"),
            barcode=barcode,
            name=product["name"],
            price=price,
            category=product["category"],
            image_url=record.image_url,
            scanned_id=record.id or None,
        )
        return respond("Request was successful", result)

    async def _store(self, place: Dict[str, Any], product_name: str, price: float) -> NearbyStore:
        place_id = place.get("place_id")
        image_url = await self.places_service.get_place_photo(place_id) if place_id else None
        return NearbyStore(
            id=new_id(),
            store_name=place.get("name", ""),
            name=product_name,
            image_url=image_url,
            price=generate_estimated_price(price),
        )

    @error_boundary()
    async def nearby_stores(
        self,
        lat: Optional[float],
        lng: Optional[float],
        product_name: Optional[str],
        price: Optional[float],
    ) -> JSONResponse:
        if lat is None or lng is None or not product_name or price is None:
            raise ValidationError("Latitude, longitude, productName and price are required")

        places = await self.places_service.nearby_search(lat, lng, product_name)
        stores = await asyncio.gather(*(self._store(place, product_name, price) for place in places))

        return respond("Request was successful", list(stores))

    @error_boundary()
    async def list_scanned(self, principal: Principal) -> JSONResponse:
        if principal.is_guest:
            return respond("Request was successful", [])

        history = await self.scanned_service.find_by_user_id(principal.id)
        return respond("Request was successful", [ScannedPublic.model_validate(item) for item in history])

    @error_boundary()
    async def list_by_user(self, principal: Principal, user_id: str) -> JSONResponse:
        if principal.is_guest:
            return respond("Request was successful", [])

        history = await self.scanned_service.find_by_user_id(user_id)
        return respond("Request was successful", [ScannedPublic.model_validate(item) for item in history])

    @error_boundary()
    async def list_by_barcode(self, principal: Principal, barcode: str) -> JSONResponse:
        if principal.is_guest:
            return respond("Request was successful", [])

        history = await self.scanned_service.find_by_barcode(barcode)
        return respond("Request was successful", [ScannedPublic.model_validate(item) for item in history])

    @error_boundary()
    async def get_scanned(self, principal: Principal, scanned_id: str) -> JSONResponse:
        if principal.is_guest:
            return respond("Request was successful", {})

        scanned = await self.scanned_service.find_by_id(scanned_id)
        if scanned is None:
            raise NotFoundError("Scanned history not found")

        return respond("Request was successful", ScannedPublic.model_validate(scanned))

    @error_boundary()
    async def delete_scanned(self, principal: Principal, scanned_id: str) -> JSONResponse:
        if principal.is_guest:
            raise ForbiddenError()

        if not await self.scanned_service.delete_by_id(scanned_id):
            raise NotFoundError("Scanned history not found")

        return respond("Scanned history deleted successfully")
