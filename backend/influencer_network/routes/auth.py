"""
Influencer Network Backend: Auth Route Handlers
================================================

What:  /api/auth endpoints for account registration, login/logout, profile,
       password change/reset and email verification.
How:   Thin handlers over AuthService. Endpoints that issue a token also set
       it as an httpOnly cookie so the dashboard can authenticate without
       keeping the token in script-readable storage.

Route Inventory:
    POST  /api/auth/register
    POST  /api/auth/login
    POST  /api/auth/logout                 (authenticated)
    GET   /api/auth/me                     (authenticated)
    PATCH /api/auth/update-profile         (authenticated)
    PATCH /api/auth/change-password        (authenticated)
    POST  /api/auth/forgot-password
    PATCH /api/auth/reset-password/{token}
    PATCH /api/auth/verify-email/{token}
    POST  /api/auth/resend-verification    (authenticated)

No mail transport is configured, so reset and verification tokens are
returned in the response body.
"""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from influencer_network.config import settings
from influencer_network.database import get_db_session
from influencer_network.middleware.auth import get_current_user
from influencer_network.models.user import User
from influencer_network.schemas.common import COMMON_ERROR_RESPONSES, ApiResponse, ErrorResponse
from influencer_network.schemas.user import (
    AuthData,
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    ResetTokenData,
    UpdateProfileRequest,
    UserData,
    UserResponse,
    VerificationTokenData,
)
from influencer_network.services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"], responses=COMMON_ERROR_RESPONSES)


def set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.jwt_cookie_name,
        value=token,
        max_age=settings.jwt_cookie_expires_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


def auth_payload(user: User, token: str) -> AuthData:
    return AuthData(user=UserResponse.model_validate(user), token=token)


@router.post(
    "/register",
    status_code=201,
    response_model=ApiResponse[AuthData],
    responses={409: {"description": "Email already registered", "model": ErrorResponse}},
    summary="Create an account",
)
async def register(
    body: RegisterRequest,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[AuthData]:
    user, token = await auth_service.register(db, body)
    set_auth_cookie(response, token)
    return ApiResponse[AuthData](message="User registered successfully", data=auth_payload(user, token))


@router.post("/login", response_model=ApiResponse[AuthData], summary="Log in with email and password")
async def login(
    body: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[AuthData]:
    user, token = await auth_service.login(db, body.email, body.password)
    set_auth_cookie(response, token)
    return ApiResponse[AuthData](message="Login successful", data=auth_payload(user, token))


@router.post("/logout", response_model=ApiResponse[None], summary="Clear the auth cookie")
async def logout(response: Response, user: User = Depends(get_current_user)) -> ApiResponse[None]:
    response.delete_cookie(
        key=settings.jwt_cookie_name,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    logger.info("User %s logged out", user.id)
    return ApiResponse[None](message="Logged out successfully")


@router.get("/me", response_model=ApiResponse[UserData], summary="Current user")
async def me(user: User = Depends(get_current_user)) -> ApiResponse[UserData]:
    return ApiResponse[UserData](
        message="User retrieved successfully",
        data=UserData(user=UserResponse.model_validate(user)),
    )


@router.patch("/update-profile", response_model=ApiResponse[UserData], summary="Update own profile")
async def update_profile(
    body: UpdateProfileRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[UserData]:
    user = await auth_service.update_profile(db, user, body)
    return ApiResponse[UserData](
        message="Profile updated successfully",
        data=UserData(user=UserResponse.model_validate(user)),
    )


@router.patch("/change-password", response_model=ApiResponse[AuthData], summary="Change own password")
async def change_password(
    body: ChangePasswordRequest,
    response: Response,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[AuthData]:
    token = await auth_service.change_password(db, user, body.current_password, body.new_password)
    set_auth_cookie(response, token)
    return ApiResponse[AuthData](message="Password changed successfully", data=auth_payload(user, token))


@router.post(
    "/forgot-password",
    response_model=ApiResponse[ResetTokenData],
    summary="Request a password reset token",
)
async def forgot_password(
    body: ForgotPasswordRequest,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[ResetTokenData]:
    reset_token = await auth_service.forgot_password(db, body.email)
    return ApiResponse[ResetTokenData](
        message="Password reset token generated",
        data=ResetTokenData(reset_token=reset_token),
    )


@router.patch(
    "/reset-password/{token}",
    response_model=ApiResponse[AuthData],
    summary="Reset password with a reset token",
)
async def reset_password(
    token: str,
    body: ResetPasswordRequest,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[AuthData]:
    user, access_token = await auth_service.reset_password(db, token, body.password)
    set_auth_cookie(response, access_token)
    return ApiResponse[AuthData](message="Password reset successful", data=auth_payload(user, access_token))


@router.patch(
    "/verify-email/{token}",
    response_model=ApiResponse[UserData],
    summary="Verify email address",
)
async def verify_email(
    token: str,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[UserData]:
    user = await auth_service.verify_email(db, token)
    return ApiResponse[UserData](
        message="Email verified successfully",
        data=UserData(user=UserResponse.model_validate(user)),
    )


@router.post(
    "/resend-verification",
    response_model=ApiResponse[VerificationTokenData],
    summary="Issue a new email verification token",
)
async def resend_verification(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[VerificationTokenData]:
    verification_token = await auth_service.resend_verification(db, user)
    return ApiResponse[VerificationTokenData](
        message="Verification token generated",
        data=VerificationTokenData(verification_token=verification_token),
    )
