"""Tests for the encrypt-pin HTTP endpoint."""
import logging
import threading

import pytest
import pytest_asyncio
from aiohttp import test_utils

from am_e2ee.client.am_errors import RandomGenerationFailure
from am_e2ee.client.am_hash import AmHashAlgorithm
from am_e2ee.config import AmE2eeConfig
from am_e2ee.server import create_app

ENCRYPT_PIN_URL = "/api/encrypt-pin"


class BrokenRandom:
    """Random source simulating an unavailable RNG."""

    def fill_random(self, buffer: bytearray) -> None:
        raise RandomGenerationFailure("no entropy")


class ThreadRecordingRandom:
    """Random source that records the threads it was called from."""

    def __init__(self):
        self.thread_ids = set()

    def fill_random(self, buffer: bytearray) -> None:
        self.thread_ids.add(threading.get_ident())
        buffer[:] = bytes(len(buffer))


@pytest_asyncio.fixture
async def client():
    async with test_utils.TestClient(test_utils.TestServer(create_app())) as test_client:
        yield test_client


@pytest.fixture
def body(pub_key_1024, server_random):
    return {
        "e2eeSid": "sid-1",
        "pubKey": pub_key_1024,
        "serverRandom": server_random,
        "pin": "9137",
    }


class TestEncryptPinEndpoint:
    """Test suite for POST /api/encrypt-pin."""

    @pytest.mark.asyncio
    async def test_success_defaults_to_sha1(self, client, body, pub_key_1024):
        resp = await client.post(ENCRYPT_PIN_URL, json=body)
        data = await resp.json()

        assert resp.status == 200
        assert data["success"] is True
        assert data["algorithm"] == "SHA-1"
        session_id, segment = data["encryptedPin"].split(",")
        assert session_id == "sid-1"
        assert len(segment.split(":")[1]) == len(pub_key_1024.split(",")[0])

    @pytest.mark.asyncio
    async def test_success_with_alias(self, client, body):
        resp = await client.post(ENCRYPT_PIN_URL, json={**body, "oaepHashAlgo": "SHA256"})
        data = await resp.json()

        assert resp.status == 200
        assert data["algorithm"] == "SHA-256"

    @pytest.mark.asyncio
    async def test_change_pin(self, client, body):
        resp = await client.post(ENCRYPT_PIN_URL, json={**body, "newPin": "5678"})
        data = await resp.json()

        assert resp.status == 200
        assert len(data["encryptedPin"].split(",")) == 3

    @pytest.mark.asyncio
    async def test_configured_default_hash(self, body):
        app = create_app(AmE2eeConfig(default_hash=AmHashAlgorithm.SHA_256))
        async with test_utils.TestClient(test_utils.TestServer(app)) as test_client:
            resp = await test_client.post(ENCRYPT_PIN_URL, json=body)
            data = await resp.json()

        assert data["algorithm"] == "SHA-256"

    @pytest.mark.asyncio
    async def test_wrong_content_type(self, client):
        resp = await client.post(ENCRYPT_PIN_URL, data="pin=1234")
        data = await resp.json()

        assert resp.status == 400
        assert data["error"] == "Content-Type must be application/json"

    @pytest.mark.asyncio
    async def test_invalid_json(self, client):
        resp = await client.post(
            ENCRYPT_PIN_URL, data="{not json", headers={"Content-Type": "application/json"}
        )
        data = await resp.json()

        assert resp.status == 400
        assert data["error"] == "Invalid JSON format"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["e2eeSid", "pubKey", "serverRandom", "pin"])
    async def test_missing_parameter(self, client, body, missing):
        del body[missing]
        resp = await client.post(ENCRYPT_PIN_URL, json=body)
        data = await resp.json()

        assert resp.status == 400
        assert data["error"].startswith("Missing required parameters")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("pin", ["123", "1234567890123", "12a4", "1234\n", 1234])
    async def test_invalid_pin(self, client, body, pin):
        resp = await client.post(ENCRYPT_PIN_URL, json={**body, "pin": pin})
        data = await resp.json()

        assert resp.status == 400
        assert data["error"] == "PIN must be a string between 4 and 12 characters"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("new_pin", ["12", "5678\n"])
    async def test_invalid_new_pin(self, client, body, new_pin):
        resp = await client.post(ENCRYPT_PIN_URL, json={**body, "newPin": new_pin})

        assert resp.status == 400

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "override,code",
        [
            ({"pubKey": ","}, "InvalidPublicKey"),
            ({"pubKey": "ff" * 4096 + ",3"}, "InvalidPublicKey"),
            ({"oaepHashAlgo": "MD5"}, "UnsupportedHashAlgorithm"),
            ({"oaepHashAlgo": "SHA-512"}, "MessageTooLong"),
            ({"serverRandom": "xyz"}, "InvalidServerRandom"),
        ],
    )
    async def test_encryption_client_errors(self, client, body, override, code):
        resp = await client.post(ENCRYPT_PIN_URL, json={**body, **override})
        data = await resp.json()

        assert resp.status == 400
        assert data == {"error": "Encryption failed", "code": code}

    @pytest.mark.asyncio
    async def test_random_failure(self, body):
        app = create_app(random_source=BrokenRandom())
        async with test_utils.TestClient(test_utils.TestServer(app)) as test_client:
            resp = await test_client.post(ENCRYPT_PIN_URL, json=body)
            data = await resp.json()

        assert resp.status == 500
        assert data == {"error": "Encryption failed"}

    @pytest.mark.asyncio
    async def test_encryption_runs_off_event_loop_thread(self, body):
        random_source = ThreadRecordingRandom()
        app = create_app(random_source=random_source)
        async with test_utils.TestClient(test_utils.TestServer(app)) as test_client:
            resp = await test_client.post(ENCRYPT_PIN_URL, json=body)

        assert resp.status == 200
        assert random_source.thread_ids
        assert threading.get_ident() not in random_source.thread_ids

    @pytest.mark.asyncio
    async def test_pin_is_never_logged(self, client, body, caplog):
        caplog.set_level(logging.DEBUG)

        await client.post(ENCRYPT_PIN_URL, json={**body, "pin": "80417263"})
        await client.post(ENCRYPT_PIN_URL, json={**body, "pin": "80417263", "pubKey": ","})

        assert "80417263" not in caplog.text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["get", "put", "delete"])
    async def test_method_not_allowed(self, client, method):
        resp = await getattr(client, method)(ENCRYPT_PIN_URL)
        data = await resp.json()

        assert resp.status == 405
        assert data["error"] == "Method not allowed. Use POST to encrypt PIN."


class TestHealthEndpoint:
    """Test suite for GET /api/health."""

    @pytest.mark.asyncio
    async def test_health(self, client):
        resp = await client.get("/api/health")

        assert resp.status == 200
        assert await resp.json() == {"status": "ok"}
