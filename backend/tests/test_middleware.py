"""
Influencer Network Backend: Middleware Tests
=============================================

What:  Request ids, the error envelope, both rate limiters and the verified-email guard.
How:   The IP limiter runs on a minimal FastAPI app with a fake clock so the
       window can be advanced without sleeping.
"""

import pytest
from fastapi import Depends, FastAPI
from httpx import ASGITransport, AsyncClient

from influencer_network.exceptions import RateLimitExceededError
from influencer_network.middleware.auth import UserRateLimiter, require_verified_email
from influencer_network.middleware.rate_limit import RateLimitMiddleware
from influencer_network.models.user import User


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def limited_app(clock: FakeClock, max_requests: int = 2, window_seconds: int = 60) -> FastAPI:
    app = FastAPI()
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=max_requests,
        window_seconds=window_seconds,
        clock=clock,
    )

    @app.get("/api/ping")
    async def ping():
        return {"pong": True}

    @app.get("/api/health")
    async def health():
        return {"status": "healthy"}

    @app.get("/public")
    async def public():
        return {"ok": True}

    return app


class TestRequestID:

    @pytest.mark.asyncio
    async def test_echoes_incoming_id(self, client):
        response = await client.get("/health", headers={"X-Request-ID": "trace-42"})
        assert response.headers["X-Request-ID"] == "trace-42"

    @pytest.mark.asyncio
    async def test_generates_short_id(self, client):
        response = await client.get("/health")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_error_envelope_carries_request_id(self, client):
        response = await client.get("/api/clients", headers={"X-Request-ID": "abc12345"})

        assert response.status_code == 401
        assert response.json()["request_id"] == "abc12345"


class TestErrorEnvelope:

    @pytest.mark.asyncio
    async def test_unknown_route(self, client):
        response = await client.get("/nope")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "not_found"
        assert body["message"] == "Route GET /nope not found"
        assert body["path"] == "/nope"
        assert body["method"] == "GET"

    @pytest.mark.asyncio
    async def test_request_validation(self, client, staff_headers):
        response = await client.post("/api/clients", headers=staff_headers, json={})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        fields = [error["field"] for error in body["details"]["errors"]]
        assert "businessName" in fields

    @pytest.mark.asyncio
    async def test_unexpected_error_is_hidden(self, app, client):
        async def boom():
            raise RuntimeError("secret connection string")

        app.add_api_route("/api/boom", boom)

        response = await client.get("/api/boom")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "internal_server_error"
        assert "secret" not in body["message"]


class TestIPRateLimit:

    @pytest.mark.asyncio
    async def test_blocks_after_limit_until_window_passes(self):
        clock = FakeClock()
        transport = ASGITransport(app=limited_app(clock))
        async with AsyncClient(transport=transport, base_url="http://test") as http:
            assert (await http.get("/api/ping")).status_code == 200
            clock.now += 10
            assert (await http.get("/api/ping")).status_code == 200

            response = await http.get("/api/ping")
            assert response.status_code == 429
            assert response.headers["Retry-After"] == "51"
            body = response.json()
            assert body["error"] == "rate_limit_exceeded"
            assert body["details"]["retry_after"] == 51

            # The first request ages out of the window
            clock.now += 51
            assert (await http.get("/api/ping")).status_code == 200

    @pytest.mark.asyncio
    async def test_health_and_non_api_paths_are_exempt(self):
        clock = FakeClock()
        transport = ASGITransport(app=limited_app(clock, max_requests=1))
        async with AsyncClient(transport=transport, base_url="http://test") as http:
            await http.get("/api/ping")
            for _ in range(3):
                assert (await http.get("/api/health")).status_code == 200
                assert (await http.get("/public")).status_code == 200
            assert (await http.get("/api/ping")).status_code == 429


class TestUserRateLimiter:

    def test_limits_within_window(self):
        clock = FakeClock()
        limiter = UserRateLimiter(max_requests=2, window_seconds=60, clock=clock)
        limiter.hit("user-1")
        limiter.hit("user-1")

        clock.now += 15
        with pytest.raises(RateLimitExceededError) as exc_info:
            limiter.hit("user-1")
        assert exc_info.value.retry_after == 45

        # Other users have their own window
        limiter.hit("user-2")

    def test_window_resets(self):
        clock = FakeClock()
        limiter = UserRateLimiter(max_requests=1, window_seconds=60, clock=clock)
        limiter.hit("user-1")

        clock.now += 60
        limiter.hit("user-1")

    def test_purge_drops_only_elapsed_windows(self):
        clock = FakeClock()
        limiter = UserRateLimiter(max_requests=5, window_seconds=60, clock=clock)
        limiter.hit("user-1")
        clock.now += 30
        limiter.hit("user-2")

        clock.now += 30
        assert limiter.purge_expired() == 1
        assert limiter.tracked_keys == 1

        clock.now += 30
        assert limiter.purge_expired() == 1
        assert limiter.tracked_keys == 0

    def test_expired_windows_are_evicted_while_counting(self):
        clock = FakeClock()
        limiter = UserRateLimiter(max_requests=5, window_seconds=60, clock=clock, cleanup_every=3)
        limiter.hit("user-1")
        limiter.hit("user-2")

        clock.now += 61
        # Third hit triggers the sweep; only the fresh window survives
        limiter.hit("user-3")
        assert limiter.tracked_keys == 1

    def test_reset_clears_counts(self):
        limiter = UserRateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())
        limiter.hit("user-1")
        limiter.reset()
        limiter.hit("user-1")

    @pytest.mark.asyncio
    async def test_protected_routes_return_429(self, app, client, staff_headers):
        app.state.user_rate_limiter = UserRateLimiter(max_requests=1, window_seconds=60)

        assert (await client.get("/api/clients", headers=staff_headers)).status_code == 200

        response = await client.get("/api/clients", headers=staff_headers)
        assert response.status_code == 429
        assert int(response.headers["Retry-After"]) > 0
        assert response.json()["message"] == "Too many requests from this user, please try again later."


class TestVerifiedEmailGuard:

    @staticmethod
    def mount_guarded_route(app: FastAPI) -> None:
        async def media_kit(user: User = Depends(require_verified_email)):
            return {"email": user.email}

        app.add_api_route("/api/media-kit", media_kit)

    @pytest.mark.asyncio
    async def test_unverified_user_forbidden(self, app, client, make_user, headers_for):
        self.mount_guarded_route(app)
        user = await make_user(is_email_verified=False)

        response = await client.get("/api/media-kit", headers=headers_for(user))

        assert response.status_code == 403
        body = response.json()
        assert body["error"] == "permission_denied"
        assert body["message"] == "Please verify your email address"

    @pytest.mark.asyncio
    async def test_verified_user_passes(self, app, client, staff_user, staff_headers):
        self.mount_guarded_route(app)

        response = await client.get("/api/media-kit", headers=staff_headers)

        assert response.status_code == 200
        assert response.json() == {"email": staff_user.email}

    @pytest.mark.asyncio
    async def test_still_requires_a_token(self, app, client):
        self.mount_guarded_route(app)

        response = await client.get("/api/media-kit")
        assert response.status_code == 401
