from .auth import (
    AuthPayload,
    CodeRequest,
    EmailRequest,
    GoogleCallbackRequest,
    GoogleUserInfo,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    ResetPasswordRequest,
)
from .orders import OrderCreate, OrderItemIn, OrderItemPublic, OrderPublic
from .payments import PaymentIntentCreate
from .receipts import ReceiptDetails, ReceiptRequest
from .scanned import NearbyStore, ProductSearchResult, ScannedPublic, ScanRequest
from .users import Principal, UserPublic, UserUpdate

__all__ = [
    "AuthPayload",
    "CodeRequest",
    "EmailRequest",
    "GoogleCallbackRequest",
    "GoogleUserInfo",
    "LoginRequest",
    "NearbyStore",
    "OrderCreate",
    "OrderItemIn",
    "OrderItemPublic",
    "OrderPublic",
    "PaymentIntentCreate",
    "Principal",
    "ProductSearchResult",
    "ReceiptDetails",
    "ReceiptRequest",
    "RefreshTokenRequest",
    "RegisterRequest",
    "ResetPasswordRequest",
    "ScannedPublic",
    "ScanRequest",
    "UserPublic",
    "UserUpdate",
]
