# tests/test_upstream.py
import asyncio

import httpx

from changup.services.upstream import fetch_json, gather_soft

from fakes import FakeUpstream

URL = "https://upstream.test/api/thing"


async def test_fetch_json_success():
    fake = FakeUpstream({"thing": {"ok": True}})
    async with fake.client() as client:
        assert await fetch_json(client, "thing", URL, params={"a": 1}) == {"ok": True}
    assert fake.calls[0].url.params["a"] == "1"


async def test_fetch_json_failures_become_none():
    for action in (
        httpx.Response(404, json={"message": "nope"}),
        httpx.Response(200, content=b"not json"),
        httpx.Response(200, json=["list"]),
        httpx.ConnectError("refused"),
    ):
        fake = FakeUpstream({"thing": action})
        async with fake.client() as client:
            assert await fetch_json(client, "thing", URL) is None


async def test_fetch_json_deadline():
    async def slow(request):
        await asyncio.sleep(1)
        return httpx.Response(200, json={"late": True})

    fake = FakeUpstream({"thing": slow})
    async with fake.client() as client:
        assert await fetch_json(client, "thing", URL, timeout=0.05) is None


async def test_gather_soft_keeps_siblings():
    async def ok(value):
        return {"v": value}

    async def broken():
        raise RuntimeError("boom")

    results = await gather_soft(ok(1), broken(), ok(3))
    assert results == [{"v": 1}, None, {"v": 3}]
