from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from checkout_buddy.controllers.auth_controller import AuthController
from checkout_buddy.controllers.order_controller import OrderController
from checkout_buddy.controllers.payment_controller import PaymentController
from checkout_buddy.controllers.receipt_controller import ReceiptController
from checkout_buddy.controllers.scanned_controller import ScannedController
from checkout_buddy.controllers.user_controller import UserController
from checkout_buddy.core.database import AsyncDBSession
from checkout_buddy.core.exceptions import UnauthorizedError
from checkout_buddy.schemas.users import GUEST_ROLE, Principal
from checkout_buddy.services.auth_service import AuthService
from checkout_buddy.services.email_service import EmailService
from checkout_buddy.services.google_oauth_service import GoogleOAuthService, google_oauth_service
from checkout_buddy.services.order_service import OrderService
from checkout_buddy.services.payment_service import PaymentService
from checkout_buddy.services.places_service import PlacesService
from checkout_buddy.services.product_lookup_service import ProductLookupService
from checkout_buddy.services.scanned_history_service import ScannedHistoryService
from checkout_buddy.services.user_service import UserService

# Security scheme; missing credentials are reported in the envelope, not by FastAPI
security = HTTPBearer(auto_error=False)


# Persistence services

def get_user_service(session: AsyncDBSession) -> UserService:
    return UserService(session)


def get_order_service(session: AsyncDBSession) -> OrderService:
    return OrderService(session)


def get_scanned_history_service(session: AsyncDBSession) -> ScannedHistoryService:
    return ScannedHistoryService(session)


# Integrations

def get_auth_service() -> AuthService:
    return AuthService()


def get_email_service() -> EmailService:
    return EmailService()


def get_payment_service() -> PaymentService:
    return PaymentService()


def get_product_lookup_service() -> ProductLookupService:
    return ProductLookupService()


def get_places_service() -> PlacesService:
    return PlacesService()


def get_google_oauth_service() -> GoogleOAuthService:
    return google_oauth_service


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    user_service: UserService = Depends(get_user_service),
    auth_service: AuthService = Depends(get_auth_service),
) -> Principal:
    """
    Resolve the bearer token into a Principal.

    The literal token ``guest`` yields the guest principal without a database
    lookup. Otherwise the access token must verify and name an existing user,
    whose role is read from the database.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Token not provided")

    token = credentials.credentials
    if token == GUEST_ROLE:
        return Principal.guest()

    payload = auth_service.verify_access_token(token)
    if payload is None:
        raise UnauthorizedError("Invalid token")

    user = await user_service.find_by_id(payload["sub"])
    if user is None:
        raise UnauthorizedError("Token not authorized")

    return Principal(id=user.id, email=user.email, role=user.role)


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]


# Controllers

def get_auth_controller(
    user_service: UserService = Depends(get_user_service),
    email_service: EmailService = Depends(get_email_service),
    auth_service: AuthService = Depends(get_auth_service),
    oauth_service: GoogleOAuthService = Depends(get_google_oauth_service),
) -> AuthController:
    return AuthController(user_service, email_service, auth_service, oauth_service)


def get_user_controller(user_service: UserService = Depends(get_user_service)) -> UserController:
    return UserController(user_service)


def get_order_controller(order_service: OrderService = Depends(get_order_service)) -> OrderController:
    return OrderController(order_service)


def get_payment_controller(
    payment_service: PaymentService = Depends(get_payment_service),
) -> PaymentController:
    return PaymentController(payment_service)


def get_receipt_controller(
    user_service: UserService = Depends(get_user_service),
    email_service: EmailService = Depends(get_email_service),
) -> ReceiptController:
    return ReceiptController(user_service, email_service)


def get_scanned_controller(
    scanned_service: ScannedHistoryService = Depends(get_scanned_history_service),
    product_lookup: ProductLookupService = Depends(get_product_lookup_service),
    places_service: PlacesService = Depends(get_places_service),
) -> ScannedController:
    return ScannedController(scanned_service, product_lookup, places_service)
