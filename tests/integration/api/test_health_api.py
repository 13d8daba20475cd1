"""
Integration Tests for health endpoints and app-wide request handling.
"""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from admin_shell.guards import ThrottlerGuard


class TestHealth:
    @pytest.mark.asyncio
    async def test_liveness_is_not_enveloped(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    @pytest.mark.asyncio
    async def test_readiness(self, client, api):
        response = await client.get("/health/ready")

        data = api.assert_success(response)["data"]
        assert data["status"] == "healthy"
        assert data["checks"]["database"]["status"] == "healthy"
        assert data["checks"]["redis"]["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_readiness_reports_unhealthy_redis(self, client, fake_redis, api):
        fake_redis.ping = AsyncMock(side_effect=ConnectionError("connection refused"))

        response = await client.get("/health/ready")

        data = api.assert_error(response, 503, "HTTP_503")
        checks = data["error"]["details"]["checks"]
        assert checks["redis"]["status"] == "unhealthy"
        assert checks["database"]["status"] == "healthy"


class TestRequestHandling:
    @pytest.mark.asyncio
    async def test_request_id_generated(self, client):
        response = await client.get("/health")

        assert response.headers["X-Request-ID"]
        assert response.headers["X-Response-Time"].endswith("ms")

    @pytest.mark.asyncio
    async def test_request_id_propagated_into_envelope(self, client, api):
        response = await client.get("/health/ready", headers={"X-Request-ID": "req-42"})

        assert response.headers["X-Request-ID"] == "req-42"
        assert api.assert_success(response)["metadata"]["request_id"] == "req-42"

    @pytest.mark.asyncio
    async def test_unknown_route_uses_error_envelope(self, client, api):
        response = await client.get("/api/v1/does-not-exist")
        api.assert_error(response, 404, "RES_NOT_FOUND")

    @pytest.mark.asyncio
    async def test_wrong_method(self, client, api):
        response = await client.put("/health")
        api.assert_error(response, 405, "REQ_METHOD_NOT_ALLOWED")


class TestThrottling:
    @pytest.mark.asyncio
    async def test_limit_per_route(self, db_session_factory, fake_redis, api):
        from admin_shell.core.database import set_session_factory
        from admin_shell.main import create_app

        set_session_factory(db_session_factory)
        app = create_app(guards=[ThrottlerGuard(ttl=60, limit=2)], use_lifespan=False)
        transport = ASGITransport(app=app, raise_app_exceptions=False)

        async with AsyncClient(transport=transport, base_url="http://test") as client:
            assert (await client.get("/health")).status_code == 200
            assert (await client.get("/health")).status_code == 200

            response = await client.get("/health")
            api.assert_error(response, 429, "RATE_LIMITED")
            assert 1 <= int(response.headers["Retry-After"]) <= 61

            # Separate window per route
            assert (await client.get("/health/ready")).status_code == 200

    @pytest.mark.asyncio
    async def test_rotating_forwarded_header_does_not_escape_limit(
        self, db_session_factory, fake_redis, api,
    ):
        from admin_shell.core.database import set_session_factory
        from admin_shell.main import create_app

        set_session_factory(db_session_factory)
        throttler = ThrottlerGuard(ttl=60, limit=2)
        app = create_app(guards=[throttler], use_lifespan=False)
        transport = ASGITransport(app=app, raise_app_exceptions=False)

        async with AsyncClient(transport=transport, base_url="http://test") as client:
            statuses = []
            for n in range(5):
                headers = {"X-Forwarded-For": f"203.0.113.{n}"}
                statuses.append((await client.get("/health", headers=headers)).status_code)

        assert statuses == [200, 200, 429, 429, 429]
        assert throttler.tracked_keys == 1
