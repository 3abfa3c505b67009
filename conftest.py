"""
Shared fixtures: a throwaway SQLite database per test and in-memory fakes
for every outbound integration (mail, Stripe, product lookup, Places,
Google OAuth).
"""
import asyncio
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./checkout_buddy_test.db")
os.environ.setdefault("RUN_MIGRATIONS", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import checkout_buddy.models  # noqa: F401
from checkout_buddy.core.database import get_async_session
from checkout_buddy.core.exceptions import EmailDeliveryError, PaymentProviderError
from checkout_buddy.dependencies import (
    get_email_service,
    get_google_oauth_service,
    get_payment_service,
    get_places_service,
    get_product_lookup_service,
)
from checkout_buddy.main import app
from checkout_buddy.schemas.auth import GoogleUserInfo
from checkout_buddy.services.user_service import UserService

GUEST_HEADERS = {"Authorization": "Bearer guest"}


class FakeEmailService:
    def __init__(self):
        self.sent = []
        self.fail = False

    async def _record(self, kind, **fields):
        if self.fail:
            raise EmailDeliveryError("Mail provider unavailable")
        self.sent.append((kind, fields))

    def last(self, kind):
        matches = [fields for sent_kind, fields in self.sent if sent_kind == kind]
        return matches[-1] if matches else None

    async def send_verification_code(self, email, name, code):
        await self._record("verification", email=email, name=name, code=code)

    async def send_welcome_email(self, email, name):
        await self._record("welcome", email=email, name=name)

    async def send_forgot_password_email(self, email, name, code):
        await self._record("password_reset", email=email, name=name, code=code)

    async def send_receipt(self, details):
        await self._record("receipt", details=details)

    async def send_receipt_attachment(self, details, pdf=None):
        await self._record("receipt_attachment", details=details, pdf=pdf)


class FakePaymentService:
    def __init__(self):
        self.intents = []
        self.fail = False

    async def create_intent(self, amount, currency):
        if self.fail:
            raise PaymentProviderError("card_declined")
        self.intents.append((amount, currency))
        return {"id": "pi_test", "client_secret": "pi_test_secret_123"}


class FakeProductLookup:
    def __init__(self):
        self.products = {
            "5000112637922": {"name": "Coca-Cola Original", "category": "Beverages, Sodas"},
            "3017620422003": {"name": "Nutella", "category": "Spreads"},
        }
        self.offers = {
            "Coca-Cola Original": {
                "asin": "B00TEST001",
                "product_price": "£1.50",
                "product_minimum_offer_price": "£1.25",
                "product_photo": "https://images.example/coke.jpg",
            },
        }

    async def fetch_product(self, barcode):
        return self.products.get(barcode)

    async def search_offer(self, query):
        return self.offers.get(query)


class FakePlaces:
    def __init__(self):
        self.places = [
            {"place_id": "p1", "name": "Tesco Express"},
            {"place_id": "p2", "name": "Sainsbury's Local"},
            {"place_id": "p3", "name": "Corner Shop"},
        ]
        self.photos = {
            "p1": "https://maps.example/photo/p1",
            "p2": "https://maps.example/photo/p2",
        }
        self.searches = []

    async def nearby_search(self, lat, lng, keyword, radius=30000):
        self.searches.append((lat, lng, keyword))
        return self.places

    async def get_place_photo(self, place_id):
        return self.photos.get(place_id)


class FakeGoogleOAuth:
    VALID_STATE = "valid-state"

    def __init__(self):
        self.user_info = GoogleUserInfo(
            google_id="google-123",
            name="Gina Google",
            email="gina@gmail.com",
            picture="https://lh3.example/gina.png",
        )

    def generate_authorization_url(self):
        return {
            "authorization_url": f"https://accounts.google.com/o/oauth2/v2/auth?state={self.VALID_STATE}",
            "state": self.VALID_STATE,
        }

    async def exchange_code_for_user(self, code, state):
        if state != self.VALID_STATE:
            raise ValueError("Invalid state parameter")
        return self.user_info


async def _create_tables(engine):
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


@pytest.fixture
def session_maker(tmp_path):
    """Session factory for the HTTP tests, which run the app in TestClient's own loop."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'api.db'}", poolclass=NullPool)
    asyncio.run(_create_tables(engine))
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    asyncio.run(engine.dispose())


@pytest.fixture
async def db_session(tmp_path):
    """A session for service-level async tests."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'services.db'}", poolclass=NullPool)
    await _create_tables(engine)
    async with async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def email_service():
    return FakeEmailService()


@pytest.fixture
def payment_service():
    return FakePaymentService()


@pytest.fixture
def product_lookup():
    return FakeProductLookup()


@pytest.fixture
def places_service():
    return FakePlaces()


@pytest.fixture
def google_oauth():
    return FakeGoogleOAuth()


@pytest.fixture
def client(session_maker, email_service, payment_service, product_lookup, places_service, google_oauth):
    async def override_get_async_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_email_service] = lambda: email_service
    app.dependency_overrides[get_payment_service] = lambda: payment_service
    app.dependency_overrides[get_product_lookup_service] = lambda: product_lookup
    app.dependency_overrides[get_places_service] = lambda: places_service
    app.dependency_overrides[get_google_oauth_service] = lambda: google_oauth

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register a user through the API and return its id, token and auth headers."""

    def _register(email="ann@shopper.com", name="Ann", password="secret1"):
        response = client.post(
            "/api/auth/register",
            json={"email": email, "name": name, "password": password, "confirmPassword": password},
        )
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        return {
            "id": data["user"]["id"],
            "email": email,
            "password": password,
            "token": data["token"],
            "refresh_token": data["refreshToken"],
            "headers": {"Authorization": f"Bearer {data['token']}"},
        }

    return _register


@pytest.fixture
def load_user(session_maker):
    """Read a user row straight from the test database."""

    def _load(email):
        async def _find():
            async with session_maker() as session:
                return await UserService(session).find_by_email(email)

        return asyncio.run(_find())

    return _load


@pytest.fixture
def change_user(session_maker):
    """Write fields on a user row, bypassing the API."""

    def _change(email, **fields):
        async def _update():
            async with session_maker() as session:
                service = UserService(session)
                user = await service.find_by_email(email)
                return await service.update_user(user.id, fields)

        return asyncio.run(_update())

    return _change
