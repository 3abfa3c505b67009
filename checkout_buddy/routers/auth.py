from fastapi import APIRouter, Depends, status

from checkout_buddy.controllers.auth_controller import AuthController, CodePurpose
from checkout_buddy.dependencies import get_auth_controller
from checkout_buddy.schemas import (
    CodeRequest,
    EmailRequest,
    GoogleCallbackRequest,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    ResetPasswordRequest,
)

# Router instance
router = APIRouter()


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register_user(
    data: RegisterRequest,
    controller: AuthController = Depends(get_auth_controller),
):
    return await controller.register(data)


@router.post("/login")
async def login_user(
    data: LoginRequest,
    controller: AuthController = Depends(get_auth_controller),
):
    return await controller.login(data)


@router.post("/verify_email_code")
async def verify_email_code(
    data: CodeRequest,
    controller: AuthController = Depends(get_auth_controller),
):
    return await controller.verify_email_code(data.code)


@router.post("/verify_reset_code")
async def verify_reset_code(
    data: CodeRequest,
    controller: AuthController = Depends(get_auth_controller),
):
    return await controller.verify_reset_code(data.code)


@router.patch("/forgot_password")
async def forgot_password(
    data: EmailRequest,
    controller: AuthController = Depends(get_auth_controller),
):
    return await controller.forgot_password(data.email)


@router.patch("/reset_password")
async def reset_password(
    data: ResetPasswordRequest,
    controller: AuthController = Depends(get_auth_controller),
):
    return await controller.reset_password(data)


@router.patch("/resend_verification_code")
async def resend_verification_code(
    data: EmailRequest,
    controller: AuthController = Depends(get_auth_controller),
):
    return await controller.resend_code(data.email, CodePurpose.VERIFICATION)


@router.patch("/resend_password_code")
async def resend_password_code(
    data: EmailRequest,
    controller: AuthController = Depends(get_auth_controller),
):
    return await controller.resend_code(data.email, CodePurpose.PASSWORD_RESET)


@router.post("/refresh_token")
async def refresh_token(
    data: RefreshTokenRequest,
    controller: AuthController = Depends(get_auth_controller),
):
    return await controller.refresh_access_token(data.refresh_token)


@router.get("/google/url")
async def get_google_auth_url(controller: AuthController = Depends(get_auth_controller)):
    return await controller.google_authorization_url()


@router.post("/google/callback")
async def google_oauth_callback(
    data: GoogleCallbackRequest,
    controller: AuthController = Depends(get_auth_controller),
):
    return await controller.google_callback(data.code, data.state)
