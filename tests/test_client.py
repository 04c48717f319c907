# tests/test_client.py

import asyncio
import warnings
from decimal import Decimal

import aiohttp
import pytest
from aiohttp import web
from aiohttp import test_utils

from salamoonder import (
    ConfigError,
    Config,
    DecodeError,
    KasadaOptions,
    KasadaSolution,
    NotReady,
    Reese84Options,
    Reese84Solution,
    Reese84SubmitPayloadSolution,
    Salamoonder,
    ServerError,
    TaskError,
    TaskVariant,
    TransportError,
    TransportTimeout,
    TwitchIntegrityOptions,
    TwitchLocalIntegrityOptions,
    TwitchPublicIntegrityOptions,
    TwitchScraperOptions,
    UnsupportedVariant,
    UtmvcOptions,
)

from .test_poller import KASADA_SOLUTION


def created(task_id: str) -> dict:
    return {"error_code": 0, "error_description": "", "taskId": task_id}


# =============================================================================
# CONSTRUCTION
# =============================================================================

def test_missing_api_key_is_config_error() -> None:
    with pytest.raises(ConfigError):
        Salamoonder("")


def test_from_config_without_api_key_is_config_error() -> None:
    with pytest.raises(ConfigError):
        Salamoonder.from_config(Config())


@pytest.mark.asyncio
async def test_from_config_uses_api_settings(api) -> None:
    config = Config()
    config.api.api_key = "cfg-key"
    config.api.base_url = api.base_url
    api.reply("/createTask", created("c-1"))

    async with Salamoonder.from_config(config) as client:
        assert await client.create_task(TwitchScraperOptions()) == "c-1"

    assert api.bodies("/createTask")[0]["api_key"] == "cfg-key"


# =============================================================================
# CREATE
# =============================================================================

@pytest.mark.asyncio
async def test_create_kasada_task(api, client) -> None:
    api.reply("/createTask", created("task-1"))

    task_id = await client.create_kasada_task(KasadaOptions(pjs="pjs-code", cd_only=True))

    assert task_id == "task-1"
    assert api.bodies("/createTask") == [
        {
            "api_key": "test-api-key",
            "task": {"type": "KasadaCaptchaSolver", "pjs": "pjs-code", "cdOnly": True},
        }
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "options,tag",
    [
        (Reese84Options(website="https://example.com", submit_payload=True), "IncapsulaReese84Solver"),
        (UtmvcOptions(website="https://example.com"), "IncapsulaUTMVCSolver"),
        (TwitchScraperOptions(), "Twitch_Scraper"),
        (TwitchIntegrityOptions(access_token="acc"), "Twitch_PublicIntegrity"),
    ],
)
async def test_create_task_dispatches_on_options(api, client, options, tag) -> None:
    api.reply("/createTask", created("t-1"))

    assert await client.create_task(options) == "t-1"
    assert api.bodies("/createTask")[0]["task"]["type"] == tag


@pytest.mark.asyncio
async def test_create_failure_is_server_error(api, client) -> None:
    api.reply("/createTask", {"error_code": 1, "error_description": "invalid key", "taskId": ""})

    with pytest.raises(ServerError) as exc_info:
        await client.create_task(UtmvcOptions(website="https://example.com"))

    assert exc_info.value.code == 1
    assert exc_info.value.message == "invalid key"


@pytest.mark.asyncio
async def test_create_success_without_task_id_is_decode_error(api, client) -> None:
    api.reply("/createTask", {"error_code": 0, "error_description": ""})

    with pytest.raises(DecodeError):
        await client.create_task(TwitchScraperOptions())


@pytest.mark.asyncio
async def test_unsupported_options_never_reach_the_server(api, client) -> None:
    with pytest.raises(UnsupportedVariant):
        await client.create_task("invalid")

    with pytest.raises(UnsupportedVariant):
        await client.create_kasada_task(UtmvcOptions(website="https://example.com"))

    assert api.requests == []


@pytest.mark.asyncio
async def test_legacy_integrity_tasks_warn(api, client) -> None:
    api.reply("/createTask", created("li-1"))

    with pytest.deprecated_call():
        task_id = await client.create_twitch_local_integrity_task(
            TwitchLocalIntegrityOptions(proxy="prx", device_id="dev", client_id="cid")
        )
    with pytest.deprecated_call():
        await client.create_twitch_public_integrity_task(
            TwitchPublicIntegrityOptions(proxy="prx", access_token="acc")
        )

    assert task_id == "li-1"
    local, public = api.bodies("/createTask")
    assert local["task"] == {"type": "Twitch_LocalIntegrity", "proxy": "prx", "deviceId": "dev", "clientId": "cid"}
    assert public["task"]["deviceId"] == ""


@pytest.mark.asyncio
async def test_deprecation_warning_points_at_the_caller(api, client) -> None:
    api.reply("/createTask", created("li-2"))

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        await client.create_twitch_local_integrity_task(
            TwitchLocalIntegrityOptions(proxy="prx", device_id="dev", client_id="cid")
        )
        await client.create_twitch_public_integrity_task(TwitchPublicIntegrityOptions(proxy="prx", access_token="acc"))
        await client.create_task(TwitchPublicIntegrityOptions(proxy="prx", access_token="acc"))
        await client.create_task(TwitchIntegrityOptions(proxy="prx", access_token="acc"))

    legacy = [w for w in caught if "may be rejected by the service" in str(w.message)]
    assert [w.category for w in legacy] == [DeprecationWarning] * 3
    assert [w.filename for w in legacy] == [__file__] * 3
    assert "TwitchLocalIntegrityOptions" in str(legacy[0].message)


# =============================================================================
# FETCH
# =============================================================================

@pytest.mark.asyncio
async def test_get_kasada_result(api, client, ready) -> None:
    api.reply("/getTaskResult", ready(KASADA_SOLUTION))

    got = await client.get_kasada_result("task-1")

    assert isinstance(got, KasadaSolution)
    assert got.user_agent == "UA"
    assert api.bodies("/getTaskResult") == [{"api_key": "test-api-key", "taskId": "task-1"}]


@pytest.mark.asyncio
async def test_pending_result_is_not_ready(api, client) -> None:
    api.reply("/getTaskResult", {"errorId": 0, "status": "pending", "solution": None})

    with pytest.raises(NotReady):
        await client.get_kasada_result("task-1")


@pytest.mark.asyncio
async def test_failed_result_is_task_error(api, client) -> None:
    api.reply("/getTaskResult", {"errorId": 12, "status": "", "solution": None})

    with pytest.raises(TaskError) as exc_info:
        await client.get_task_result(TaskVariant.UTMVC, "u-1")

    assert exc_info.value.task_id == "u-1"
    assert exc_info.value.code == 12


@pytest.mark.asyncio
async def test_failed_result_with_null_status_is_task_error(api, client) -> None:
    api.reply("/getTaskResult", {"errorId": 1, "status": None, "solution": None})

    with pytest.raises(TaskError) as exc_info:
        await client.get_kasada_result("k-1")

    assert exc_info.value.code == 1


@pytest.mark.asyncio
async def test_create_failure_with_null_task_id_is_server_error(api, client) -> None:
    api.reply("/createTask", {"error_code": 2, "error_description": None, "taskId": None})

    with pytest.raises(ServerError) as exc_info:
        await client.create_task(TwitchScraperOptions())

    assert exc_info.value.code == 2


@pytest.mark.asyncio
async def test_reese84_result_shape_follows_submit_payload(api, client, ready) -> None:
    api.reply("/getTaskResult", ready({"payload": "p", "user-agent": "UA", "accept-language": "en"}))
    assert isinstance(await client.get_reese84_result("r-1"), Reese84Solution)

    api.reply("/getTaskResult", ready({"token": "tok", "renewInSec": 30, "user-agent": "UA"}))
    got = await client.get_reese84_result("r-1", submit_payload=True)
    assert isinstance(got, Reese84SubmitPayloadSolution)
    assert got.renew_in_sec == 30


@pytest.mark.asyncio
async def test_create_then_fetch_integrity(api, client, ready) -> None:
    api.reply("/createTask", created("pi-1"))
    api.reply("/getTaskResult", ready({
        "device_id": "dev",
        "integrity_token": "token",
        "user-agent": "UA",
        "client-id": "CID",
    }))

    task_id = await client.create_twitch_integrity_task(TwitchIntegrityOptions(access_token="acc", device_id="dev"))
    got = await client.get_twitch_integrity_result(task_id)

    assert got.device_id == "dev"
    assert got.client_id == "CID"


@pytest.mark.asyncio
async def test_raw_result_keeps_solution_undecoded(api, client) -> None:
    api.reply("/getTaskResult", {"errorId": 0, "status": "pending"})

    got = await client.get_raw_task_result("task-1")

    assert got.status == "pending"
    assert got.solution is None


@pytest.mark.asyncio
async def test_get_task_result_rejects_unknown_variant(api, client) -> None:
    with pytest.raises(UnsupportedVariant):
        await client.get_task_result("kasada", "task-1")
    assert api.requests == []


# =============================================================================
# BALANCE
# =============================================================================

@pytest.mark.asyncio
async def test_get_balance(api, client) -> None:
    api.reply("/createTask", {"error_code": 0, "error_description": "", "wallet": "123.45"})

    assert await client.get_balance() == Decimal("123.45")
    assert api.bodies("/createTask")[0]["task"] == {"type": "getBalance"}


@pytest.mark.asyncio
async def test_get_balance_rejects_non_numeric_wallet(api, client) -> None:
    api.reply("/createTask", {"error_code": 0, "error_description": "", "wallet": "abc"})

    with pytest.raises(DecodeError):
        await client.get_balance()


@pytest.mark.asyncio
async def test_get_balance_server_error(api, client) -> None:
    api.reply("/createTask", {"error_code": 3, "error_description": "zero balance"})

    with pytest.raises(ServerError):
        await client.get_balance()


@pytest.mark.asyncio
async def test_get_balance_null_code_with_wallet(api, client) -> None:
    api.reply("/createTask", {"error_code": None, "error_description": None, "wallet": "1.00"})

    assert await client.get_balance() == Decimal("1.00")


@pytest.mark.asyncio
async def test_two_call_balance(api, client, ready) -> None:
    api.reply("/createTask", created("b-1"))
    api.reply("/getTaskResult", ready("7.50"))

    task_id = await client.create_balance_task()

    assert await client.get_balance_result(task_id) == Decimal("7.50")


# =============================================================================
# TRANSPORT
# =============================================================================

@pytest.mark.asyncio
async def test_http_error_status_is_transport_error(api, client) -> None:
    api.reply("/createTask", "bad gateway", status=502)

    with pytest.raises(TransportError) as exc_info:
        await client.create_task(TwitchScraperOptions())

    assert exc_info.value.status == 502


@pytest.mark.asyncio
async def test_non_json_body_is_decode_error(api, client) -> None:
    api.reply("/getTaskResult", "<html>oops</html>")

    with pytest.raises(DecodeError):
        await client.get_kasada_result("task-1")


@pytest.mark.asyncio
async def test_connection_failure_is_transport_error() -> None:
    async with Salamoonder("key", base_url="http://127.0.0.1:1") as client:
        with pytest.raises(TransportError):
            await client.get_balance()


@pytest.mark.asyncio
async def test_timeout_is_transport_timeout() -> None:
    async def slow(request):
        await asyncio.sleep(0.5)
        return web.json_response({})

    app = web.Application()
    app.router.add_post("/createTask", slow)
    server = test_utils.TestServer(app)
    await server.start_server()
    try:
        async with Salamoonder("key", base_url=f"http://{server.host}:{server.port}") as client:
            with pytest.raises(TransportTimeout):
                await client.create_task(TwitchScraperOptions(), timeout=0.05)
    finally:
        await server.close()


@pytest.mark.asyncio
async def test_cancellation_propagates_unwrapped() -> None:
    received = asyncio.Event()
    hits = []

    async def slow(request):
        hits.append(request.path)
        received.set()
        await asyncio.sleep(0.5)
        return web.json_response(created("late"))

    app = web.Application()
    app.router.add_post("/createTask", slow)
    server = test_utils.TestServer(app)
    await server.start_server()
    try:
        async with Salamoonder("key", base_url=f"http://{server.host}:{server.port}") as client:
            pending = asyncio.create_task(client.create_task(TwitchScraperOptions()))
            await asyncio.wait_for(received.wait(), timeout=5)
            pending.cancel()

            with pytest.raises(asyncio.CancelledError):
                await pending

        assert pending.cancelled()
        assert hits == ["/createTask"]
    finally:
        await server.close()


@pytest.mark.asyncio
async def test_injected_session_is_left_open(api) -> None:
    api.reply("/createTask", created("s-1"))

    async with aiohttp.ClientSession() as session:
        async with Salamoonder("key", session=session, base_url=api.base_url) as client:
            await client.create_task(TwitchScraperOptions())
        assert not session.closed


@pytest.mark.asyncio
async def test_concurrent_calls_share_one_client(api, client) -> None:
    api.reply("/createTask", created("same"))

    ids = await asyncio.gather(*(client.create_task(TwitchScraperOptions()) for _ in range(5)))

    assert ids == ["same"] * 5
    assert len(api.bodies("/createTask")) == 5
