"""
Tests pour les clients des proxys LetzView (respx).

- KVProxyClient : lecture / ecriture du blob via /api/db
- TranslateProxyClient : traduction via /api/translate
"""

import json

import httpx
import pytest
import pytest_asyncio
import respx

from letzview.adapters.api.kv_client import KVProxyClient
from letzview.adapters.api.translate_client import TranslateProxyClient
from letzview.core.exceptions import TranslationError

BASE_URL = "http://letzview.test"


@pytest_asyncio.fixture
async def kv_client():
    client = KVProxyClient(base_url=BASE_URL + "/", password="secret")
    yield client
    await client.close()


@pytest_asyncio.fixture
async def translate_client():
    client = TranslateProxyClient(base_url=BASE_URL)
    yield client
    await client.close()


class TestKVProxyClient:
    """Tests pour KVProxyClient."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_read_blob(self, kv_client: KVProxyClient) -> None:
        respx.get(f"{BASE_URL}/api/db").mock(
            return_value=httpx.Response(200, json={"series": [{"id": "a"}]})
        )
        assert await kv_client.read_blob() == {"series": [{"id": "a"}]}

    @pytest.mark.asyncio
    @respx.mock
    async def test_read_blob_without_series_key(self, kv_client: KVProxyClient) -> None:
        respx.get(f"{BASE_URL}/api/db").mock(return_value=httpx.Response(200, json={}))
        assert await kv_client.read_blob() == {"series": []}

    @pytest.mark.asyncio
    @respx.mock
    async def test_write_blob_sends_password(self, kv_client: KVProxyClient) -> None:
        route = respx.post(f"{BASE_URL}/api/db").mock(
            return_value=httpx.Response(200, json={"ok": True})
        )

        await kv_client.write_blob({"series": []})

        assert json.loads(route.calls.last.request.content) == {
            "password": "secret",
            "data": {"series": []},
        }

    @pytest.mark.asyncio
    @respx.mock
    async def test_write_refused(self, kv_client: KVProxyClient) -> None:
        respx.post(f"{BASE_URL}/api/db").mock(
            return_value=httpx.Response(401, json={"error": "Unauthorized"})
        )
        with pytest.raises(httpx.HTTPStatusError):
            await kv_client.write_blob({"series": []})


class TestTranslateProxyClient:
    """Tests pour TranslateProxyClient."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_translate(self, translate_client: TranslateProxyClient) -> None:
        route = respx.post(f"{BASE_URL}/api/translate").mock(
            return_value=httpx.Response(200, json={"text": "Pilote"})
        )

        assert await translate_client.translate("Pilot", "fr") == "Pilote"
        assert json.loads(route.calls.last.request.content) == {
            "text": "Pilot",
            "target": "fr",
            "source": "en",
        }

    @pytest.mark.asyncio
    @respx.mock
    async def test_proxy_error(self, translate_client: TranslateProxyClient) -> None:
        respx.post(f"{BASE_URL}/api/translate").mock(
            return_value=httpx.Response(500, json={"error": "Missing translate API key"})
        )
        with pytest.raises(TranslationError) as exc_info:
            await translate_client.translate("Pilot", "fr")
        assert exc_info.value.status_code == 500
        assert "Missing translate API key" in str(exc_info.value)
