"""KV Backend — REST GET/SET commands against httpx.MockTransport."""

import json

import httpx
import pytest

from intake.core.errors import StorageBackendError
from intake.infrastructure.kv_backend import KVBackend
from intake.infrastructure.record_store import RecordStore


def _kv_server(store: dict, calls: list):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["authorization"] == "Bearer secret-token"
        command = json.loads(request.content)
        calls.append(command)
        if command[0] == "GET":
            return httpx.Response(200, json={"result": store.get(command[1])})
        if command[0] == "SET":
            store[command[1]] = command[2]
            return httpx.Response(200, json={"result": "OK"})
        return httpx.Response(400, json={"error": "unknown command"})
    return handler


@pytest.fixture
def kv_state():
    return {"store": {}, "calls": []}


@pytest.fixture
async def backend(kv_state):
    backend = KVBackend(
        "https://kv.example.com", "secret-token", prefix="test",
        transport=httpx.MockTransport(_kv_server(kv_state["store"], kv_state["calls"])),
    )
    yield backend
    await backend.aclose()


async def test_missing_key_reads_none(backend, kv_state):
    assert await backend.read("requests") is None
    assert kv_state["calls"] == [["GET", "test:requests"]]


async def test_write_stores_json_text_under_prefixed_key(backend, kv_state):
    await backend.write("reviews", [{"id": "1"}])
    assert kv_state["store"] == {"test:reviews": '[{"id": "1"}]'}
    assert await backend.read("reviews") == [{"id": "1"}]


async def test_pre_decoded_list_is_accepted(backend, kv_state):
    kv_state["store"]["test:requests"] = [{"id": "a"}]
    assert await backend.read("requests") == [{"id": "a"}]


async def test_non_list_value_raises(backend, kv_state):
    kv_state["store"]["test:requests"] = '{"id": "a"}'
    with pytest.raises(StorageBackendError):
        await backend.read("requests")


@pytest.mark.parametrize("value", ['[1, "x"]', [{"id": "a"}, "b"]])
async def test_non_object_entries_raise(backend, kv_state, value):
    kv_state["store"]["test:reviews"] = value
    with pytest.raises(StorageBackendError):
        await backend.read("reviews")
    assert await RecordStore(backend).load("reviews") == []


async def test_http_error_status_raises():
    backend = KVBackend(
        "https://kv.example.com", "secret-token",
        transport=httpx.MockTransport(lambda request: httpx.Response(401, json={"error": "no"})),
    )
    with pytest.raises(StorageBackendError):
        await backend.read("requests")
    await backend.aclose()


async def test_error_body_raises():
    backend = KVBackend(
        "https://kv.example.com", "secret-token",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"error": "WRONGTYPE"})),
    )
    with pytest.raises(StorageBackendError):
        await backend.write("requests", [])
    await backend.aclose()


async def test_network_error_degrades_to_empty_through_store():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    backend = KVBackend(
        "https://kv.example.com", "secret-token", transport=httpx.MockTransport(handler),
    )
    store = RecordStore(backend)
    assert await store.load("requests") == []
    await store.save("requests", [{"id": "1"}], 10)
    await backend.aclose()


async def test_store_semantics_match_file_backend(backend):
    store = RecordStore(backend)
    for i in range(7):
        await store.append("requests", {"id": str(i)}, 3)
    assert [r["id"] for r in await store.load("requests")] == ["4", "5", "6"]
