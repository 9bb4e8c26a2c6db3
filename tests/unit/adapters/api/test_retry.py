"""
Tests unitaires de la relance sur 429 du service de traduction amont.

Ces tests verifient:
- Retry-After est lu et respecte (plafonne a max_wait)
- send_with_retry relance les 429, les autres codes sont retournes tels quels
- les erreurs reseau ne sont pas relancees
"""

import httpx
import pytest
import respx

from letzview.adapters.api.retry import RateLimitError, send_with_retry, throttle_retry

UPSTREAM = "https://upstream.test/translate"


class TestRateLimitError:
    """Tests pour l'exception RateLimitError."""

    def test_stores_retry_after(self) -> None:
        error = RateLimitError(retry_after=60)
        assert error.retry_after == 60
        assert "60" in str(error)


class TestThrottleRetry:
    """Tests pour la politique throttle_retry."""

    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self) -> None:
        calls = 0

        async def flaky() -> str:
            nonlocal calls
            calls += 1
            if calls < 2:
                raise RateLimitError(retry_after=0)
            return "success"

        result = await throttle_retry(max_attempts=3, max_wait=1)(flaky)

        assert result == "success"
        assert calls == 2

    @pytest.mark.asyncio
    async def test_other_exceptions_not_retried(self) -> None:
        calls = 0

        async def broken() -> str:
            nonlocal calls
            calls += 1
            raise ValueError("boom")

        with pytest.raises(ValueError):
            await throttle_retry(max_attempts=3, max_wait=1)(broken)
        assert calls == 1


class TestSendWithRetry:
    """Tests pour send_with_retry."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_429_is_retried(self) -> None:
        route = respx.post(UPSTREAM).mock(
            side_effect=[
                httpx.Response(429, headers={"Retry-After": "0"}),
                httpx.Response(200, json={"ok": True}),
            ]
        )
        async with httpx.AsyncClient() as client:
            response = await send_with_retry(client, "POST", UPSTREAM)

        assert response.status_code == 200
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_retry_after_capped(self) -> None:
        route = respx.post(UPSTREAM).mock(
            side_effect=[
                httpx.Response(429, headers={"Retry-After": "3600"}),
                httpx.Response(200),
            ]
        )
        async with httpx.AsyncClient() as client:
            response = await send_with_retry(client, "POST", UPSTREAM, max_wait=0.01)

        assert response.status_code == 200
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_persistent_429_raises(self) -> None:
        route = respx.post(UPSTREAM).mock(
            return_value=httpx.Response(429, headers={"Retry-After": "0"})
        )
        async with httpx.AsyncClient() as client:
            with pytest.raises(RateLimitError) as exc_info:
                await send_with_retry(client, "POST", UPSTREAM, max_attempts=2)

        assert exc_info.value.retry_after == 0
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_other_errors_returned_as_is(self) -> None:
        route = respx.post(UPSTREAM).mock(
            return_value=httpx.Response(403, json={"error": {"message": "denied"}})
        )
        async with httpx.AsyncClient() as client:
            response = await send_with_retry(client, "POST", UPSTREAM)

        assert response.status_code == 403
        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_error_not_retried(self) -> None:
        route = respx.post(UPSTREAM).mock(side_effect=httpx.ConnectError("down"))
        async with httpx.AsyncClient() as client:
            with pytest.raises(httpx.ConnectError):
                await send_with_retry(client, "POST", UPSTREAM)

        assert route.call_count == 1
