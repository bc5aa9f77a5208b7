"""
Influencer Network Backend: Auth Route Tests
=============================================

What:  End-to-end tests for /api/auth through the ASGI app.
How:   Requests go through the full middleware stack and exception handlers
       with an HTTPX AsyncClient; the database is the per-test SQLite file.
"""

import uuid
from datetime import timedelta

import pytest
from jose import jwt

from influencer_network.config import settings
from influencer_network.database import utcnow
from influencer_network.models.user import User

TEST_PASSWORD = "password123"

REGISTER_BODY = {
    "firstName": "Neha",
    "lastName": "Verma",
    "email": "Neha.Verma@Example.com",
    "password": "supersecret",
    "role": "manager",
    "phoneNumber": "+91 98200 11223",
}


def stale_token(user, age: timedelta = timedelta(hours=1)) -> str:
    """A validly signed token whose iat lies `age` in the past."""
    issued = utcnow() - age
    claims = {
        "userId": str(user.id),
        "email": user.email,
        "role": user.role,
        "iat": int(issued.timestamp()),
        "exp": int((issued + timedelta(days=1)).timestamp()),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


class TestRegisterAndLogin:

    @pytest.mark.asyncio
    async def test_register(self, client):
        response = await client.post("/api/auth/register", json=REGISTER_BODY)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["token"]
        user = body["data"]["user"]
        assert user["email"] == "neha.verma@example.com"
        assert user["fullName"] == "Neha Verma"
        assert user["role"] == "manager"
        assert user["isEmailVerified"] is False
        assert user["phoneNumber"] == "+91 98200 11223"
        assert "passwordHash" not in user
        assert response.headers["set-cookie"].startswith(f"{settings.jwt_cookie_name}=")

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, client):
        await client.post("/api/auth/register", json=REGISTER_BODY)
        response = await client.post("/api/auth/register", json=dict(REGISTER_BODY, email="neha.verma@example.com"))

        assert response.status_code == 409
        assert response.json()["error"] == "conflict"

    @pytest.mark.asyncio
    async def test_admin_cannot_self_register(self, client):
        response = await client.post("/api/auth/register", json=dict(REGISTER_BODY, role="admin"))

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"]["errors"][0]["field"] == "role"

    @pytest.mark.asyncio
    async def test_register_short_password(self, client):
        response = await client.post("/api/auth/register", json=dict(REGISTER_BODY, password="123"))
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_login(self, client, staff_user):
        response = await client.post(
            "/api/auth/login", json={"email": "MANAGER@example.com", "password": TEST_PASSWORD}
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user"]["id"] == str(staff_user.id)
        assert data["user"]["lastLogin"] is not None

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client, staff_user):
        response = await client.post(
            "/api/auth/login", json={"email": staff_user.email, "password": "not-the-password"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Incorrect email or password"

    @pytest.mark.asyncio
    async def test_login_missing_fields(self, client):
        response = await client.post("/api/auth/login", json={"email": "someone@example.com"})

        assert response.status_code == 400
        assert response.json()["message"] == "Please provide email and password"

    @pytest.mark.asyncio
    async def test_login_deactivated(self, client, make_user):
        user = await make_user(is_active=False)
        response = await client.post("/api/auth/login", json={"email": user.email, "password": TEST_PASSWORD})
        assert response.status_code == 401


class TestCurrentUser:

    @pytest.mark.asyncio
    async def test_me_requires_token(self, client):
        response = await client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json()["message"] == "Access token is required"

    @pytest.mark.asyncio
    async def test_me_rejects_garbage_token(self, client):
        response = await client.get("/api/auth/me", headers={"Authorization": "Bearer nonsense"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_me(self, client, staff_user, staff_headers):
        response = await client.get("/api/auth/me", headers=staff_headers)

        assert response.status_code == 200
        assert response.json()["data"]["user"]["email"] == "manager@example.com"

    @pytest.mark.asyncio
    async def test_token_for_deleted_user(self, client, headers_for):
        ghost = User(id=uuid.uuid4(), email="ghost@example.com", role="user")
        response = await client.get("/api/auth/me", headers=headers_for(ghost))

        assert response.status_code == 401
        assert response.json()["message"] == "User not found"

    @pytest.mark.asyncio
    async def test_update_profile(self, client, staff_headers):
        response = await client.patch(
            "/api/auth/update-profile",
            headers=staff_headers,
            json={
                "firstName": "Maxine",
                "phoneNumber": "+91 98765-43210",
                "bio": "Campaign manager for lifestyle brands",
                "website": "https://maxine.in",
                "companyName": "Orbit Media",
                "location": "Mumbai",
                "socialMedia": {"instagram": "@maxine", "linkedin": "in/maxine"},
            },
        )

        assert response.status_code == 200
        user = response.json()["data"]["user"]
        assert user["fullName"] == "Maxine User"
        assert user["phoneNumber"] == "+91 98765-43210"
        assert user["bio"] == "Campaign manager for lifestyle brands"
        assert user["website"] == "https://maxine.in"
        assert user["companyName"] == "Orbit Media"
        assert user["location"] == "Mumbai"
        assert user["socialMedia"]["instagram"] == "@maxine"
        assert user["socialMedia"]["twitter"] is None

        response = await client.get("/api/auth/me", headers=staff_headers)
        assert response.json()["data"]["user"]["companyName"] == "Orbit Media"

    @pytest.mark.asyncio
    async def test_update_profile_rejects_invalid_phone_number(self, client, staff_headers):
        response = await client.patch(
            "/api/auth/update-profile", headers=staff_headers, json={"phoneNumber": "ring me"}
        )

        assert response.status_code == 400
        assert response.json()["details"]["errors"][0]["field"] == "phoneNumber"

    @pytest.mark.asyncio
    async def test_logout_clears_cookie(self, client, staff_headers):
        response = await client.post("/api/auth/logout", headers=staff_headers)

        assert response.status_code == 200
        assert settings.jwt_cookie_name in response.headers["set-cookie"]


class TestPasswords:

    @pytest.mark.asyncio
    async def test_change_password_invalidates_older_tokens(self, client, staff_user, headers_for):
        old_headers = {"Authorization": f"Bearer {stale_token(staff_user)}"}

        response = await client.patch(
            "/api/auth/change-password",
            headers=old_headers,
            json={"currentPassword": TEST_PASSWORD, "newPassword": "brand-new-pass"},
        )
        assert response.status_code == 200
        new_token = response.json()["data"]["token"]

        response = await client.get("/api/auth/me", headers=old_headers)
        assert response.status_code == 401
        assert "changed password" in response.json()["message"]

        response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {new_token}"})
        assert response.status_code == 200

        response = await client.post(
            "/api/auth/login", json={"email": staff_user.email, "password": "brand-new-pass"}
        )
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_change_password_wrong_current(self, client, staff_headers):
        response = await client.patch(
            "/api/auth/change-password",
            headers=staff_headers,
            json={"currentPassword": "wrong", "newPassword": "brand-new-pass"},
        )

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "currentPassword"

    @pytest.mark.asyncio
    async def test_forgot_and_reset_password(self, client, staff_user):
        response = await client.post("/api/auth/forgot-password", json={"email": staff_user.email})
        assert response.status_code == 200
        reset_token = response.json()["data"]["resetToken"]

        response = await client.patch(
            f"/api/auth/reset-password/{reset_token}", json={"password": "after-reset"}
        )
        assert response.status_code == 200
        assert response.json()["data"]["token"]

        # Tokens are single use
        response = await client.patch(
            f"/api/auth/reset-password/{reset_token}", json={"password": "again-reset"}
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Token is invalid or has expired"

        response = await client.post("/api/auth/login", json={"email": staff_user.email, "password": "after-reset"})
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_forgot_password_unknown_email(self, client):
        response = await client.post("/api/auth/forgot-password", json={"email": "nobody@example.com"})
        assert response.status_code == 404


class TestEmailVerification:

    @pytest.mark.asyncio
    async def test_resend_and_verify(self, client, make_user, headers_for):
        user = await make_user(is_email_verified=False)
        headers = headers_for(user)

        response = await client.post("/api/auth/resend-verification", headers=headers)
        assert response.status_code == 200
        verification_token = response.json()["data"]["verificationToken"]

        response = await client.patch(f"/api/auth/verify-email/{verification_token}")
        assert response.status_code == 200
        assert response.json()["data"]["user"]["isEmailVerified"] is True

        response = await client.post("/api/auth/resend-verification", headers=headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Email is already verified"

    @pytest.mark.asyncio
    async def test_verify_with_unknown_token(self, client):
        response = await client.patch(f"/api/auth/verify-email/{'0' * 64}")
        assert response.status_code == 400
