"""
Notes API — Middleware and Configuration Tests
================================================

What:  Tests for rate limiting, request-id log tagging and Settings validators.
How:   The rate limiter is exercised both directly (check()) and mounted on
       a minimal FastAPI app with a tiny limit.
"""

import logging

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from notes_api.config import Settings
from notes_api.exceptions import RateLimitExceededError
from notes_api.middleware.logging import level_for_status
from notes_api.middleware.rate_limit import RateLimitMiddleware
from notes_api.middleware.request_id import RequestIDLogFilter, request_id_var


class FakeTime:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestRateLimitWindow:
    """Sliding window bookkeeping, without HTTP."""

    def make_limiter(self, limit=3, window=60):
        self.clock = FakeTime()
        return RateLimitMiddleware(FastAPI(), limit=limit, window=window, enabled=True, clock=self.clock)

    def test_allows_up_to_limit(self):
        limiter = self.make_limiter()
        for _ in range(3):
            limiter.check("10.0.0.1")

    def test_rejects_over_limit(self):
        limiter = self.make_limiter()
        for _ in range(3):
            limiter.check("10.0.0.1")

        with pytest.raises(RateLimitExceededError) as exc_info:
            limiter.check("10.0.0.1")
        assert exc_info.value.retry_after == 61

    def test_clients_are_independent(self):
        limiter = self.make_limiter(limit=1)
        limiter.check("10.0.0.1")
        limiter.check("10.0.0.2")

    def test_window_slides(self):
        limiter = self.make_limiter(limit=2, window=10)
        limiter.check("c")
        self.clock.now += 5
        limiter.check("c")

        self.clock.now += 6
        limiter.check("c")

        with pytest.raises(RateLimitExceededError):
            limiter.check("c")


class TestRateLimitHttp:

    @pytest.mark.asyncio
    async def test_429_with_retry_after(self):
        app = FastAPI()

        @app.get("/ping")
        async def ping():
            return {"ok": True}

        @app.get("/health")
        async def health():
            return {"status": "healthy"}

        app.add_middleware(RateLimitMiddleware, limit=2, window=60, enabled=True)

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            assert (await client.get("/ping")).status_code == 200
            assert (await client.get("/ping")).status_code == 200

            response = await client.get("/ping")
            assert response.status_code == 429
            assert response.json()["error"] == "rate_limit_exceeded"
            assert int(response.headers["Retry-After"]) > 0

            assert (await client.get("/health")).status_code == 200

    @pytest.mark.asyncio
    async def test_disabled_passes_everything(self):
        app = FastAPI()

        @app.get("/ping")
        async def ping():
            return {"ok": True}

        app.add_middleware(RateLimitMiddleware, limit=1, window=60, enabled=False)

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            for _ in range(5):
                assert (await client.get("/ping")).status_code == 200


class TestLogging:

    @pytest.mark.parametrize(
        "status, level",
        [(200, logging.INFO), (201, logging.INFO), (404, logging.WARNING), (500, logging.ERROR)],
    )
    def test_level_for_status(self, status, level):
        assert level_for_status(status) == level

    def test_request_id_filter(self):
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
        token = request_id_var.set("abc12345")
        try:
            assert RequestIDLogFilter().filter(record) is True
        finally:
            request_id_var.reset(token)

        assert record.request_id == "abc12345"

    def test_request_id_filter_outside_request(self):
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
        RequestIDLogFilter().filter(record)

        assert record.request_id == "-"


class TestSettings:

    def test_log_level_uppercased(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValueError):
            Settings(log_level="LOUD")

    @pytest.mark.parametrize("raw, expected", [("api", "/api"), ("/v1/", "/v1"), ("", ""), ("/", "")])
    def test_api_prefix_normalized(self, raw, expected):
        assert Settings(api_prefix=raw).api_prefix == expected

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.test, http://b.test,")

        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]
