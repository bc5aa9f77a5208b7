"""Admin user management under /api/users."""

import uuid

import pytest


class TestAccessControl:

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client):
        response = await client.get("/api/users")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_non_admin_forbidden(self, client, staff_headers):
        response = await client.get("/api/users", headers=staff_headers)

        assert response.status_code == 403
        body = response.json()
        assert body["error"] == "permission_denied"
        assert body["details"]["required_roles"] == ["admin"]


class TestUserAdministration:

    @pytest.mark.asyncio
    async def test_list_with_filters(self, client, admin_headers, staff_user, make_user):
        await make_user(email="inactive@example.com", is_active=False)

        response = await client.get("/api/users", headers=admin_headers)
        assert response.status_code == 200
        assert response.headers["X-Total-Count"] == "3"
        body = response.json()
        assert body["pagination"]["totalCount"] == 3

        response = await client.get("/api/users", params={"isActive": "false"}, headers=admin_headers)
        assert [u["email"] for u in response.json()["data"]] == ["inactive@example.com"]

        response = await client.get("/api/users", params={"role": "manager"}, headers=admin_headers)
        assert [u["id"] for u in response.json()["data"]] == [str(staff_user.id)]

        response = await client.get("/api/users", params={"search": "MANAGER@"}, headers=admin_headers)
        assert response.json()["pagination"]["totalCount"] == 1

    @pytest.mark.asyncio
    async def test_pagination_limits(self, client, admin_headers):
        response = await client.get("/api/users", params={"limit": 0}, headers=admin_headers)
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_stats(self, client, admin_headers, staff_user, make_user):
        await make_user(is_email_verified=False)

        response = await client.get("/api/users/stats", headers=admin_headers)

        assert response.status_code == 200
        stats = response.json()["data"]["stats"]
        assert stats["totalUsers"] == 3
        assert stats["unverifiedUsers"] == 1
        assert stats["roleBreakdown"] == {"admin": 1, "manager": 1, "user": 1}

    @pytest.mark.asyncio
    async def test_update_role_and_names(self, client, admin_headers, staff_user):
        response = await client.patch(
            f"/api/users/{staff_user.id}",
            headers=admin_headers,
            json={"role": "user", "lastName": "Power"},
        )

        assert response.status_code == 200
        user = response.json()["data"]["user"]
        assert user["role"] == "user"
        assert user["fullName"] == "Max Power"

    @pytest.mark.asyncio
    async def test_deactivate_blocks_existing_tokens(self, client, admin_headers, staff_user, staff_headers):
        response = await client.patch(f"/api/users/{staff_user.id}/deactivate", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["user"]["isActive"] is False

        response = await client.get("/api/auth/me", headers=staff_headers)
        assert response.status_code == 401
        assert response.json()["message"] == "Account is deactivated"

        response = await client.patch(f"/api/users/{staff_user.id}/activate", headers=admin_headers)
        assert response.json()["data"]["user"]["isActive"] is True

    @pytest.mark.asyncio
    async def test_delete_user(self, client, admin_headers, staff_user):
        response = await client.delete(f"/api/users/{staff_user.id}", headers=admin_headers)
        assert response.status_code == 200

        response = await client.get(f"/api/users/{staff_user.id}", headers=admin_headers)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_admin_cannot_delete_self(self, client, admin_headers, admin_user):
        response = await client.delete(f"/api/users/{admin_user.id}", headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "You cannot delete your own account"

    @pytest.mark.asyncio
    async def test_unknown_user(self, client, admin_headers):
        missing = uuid.uuid4()
        response = await client.get(f"/api/users/{missing}", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["message"] == f"User with ID '{missing}' was not found"

    @pytest.mark.asyncio
    async def test_malformed_id(self, client, admin_headers):
        response = await client.get("/api/users/not-a-uuid", headers=admin_headers)
        assert response.status_code == 400
