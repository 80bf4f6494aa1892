import argparse

import httpx
import pytest

from user_registry import loadgen
from user_registry.main import create_app
from user_registry.registry import UserRegistry


@pytest.mark.asyncio
async def test_concurrent_gets_against_single_entry_all_agree():
    registry = UserRegistry()
    registry.create("Alice")
    transport = httpx.ASGITransport(app=create_app(registry=registry))

    async with httpx.AsyncClient(transport=transport, base_url="http://registry") as client:
        result = await loadgen.stress_test("asgi", "http://registry/user/1", 1000, client=client)

    assert result.successes == 1000
    assert result.bodies == {b'{"name":"Alice"}'}
    assert result.elapsed_seconds > 0
    assert result.summary().startswith("asgi: 1000/1000 successful responses in ")


@pytest.mark.asyncio
async def test_non_200_and_transport_errors_count_as_failures():
    calls = {"n": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["n"] += 1
        if calls["n"] % 3 == 0:
            raise httpx.ConnectError("refused", request=request)
        if calls["n"] % 3 == 1:
            return httpx.Response(404, json={"detail": "User ID not found"})
        return httpx.Response(200, text="ok")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        result = await loadgen.stress_test("mock", "http://example.test/", 30, client=client)

    assert calls["n"] == 30
    assert result.requests == 30
    assert result.successes == 10
    assert result.bodies == {b"ok"}


def test_parse_target():
    assert loadgen._parse_target("standard=http://localhost:8080") == ("standard", "http://localhost:8080")
    with pytest.raises(argparse.ArgumentTypeError):
        loadgen._parse_target("http://localhost:8080")


def test_cli_defaults():
    args = loadgen.build_parser().parse_args([])
    assert args.requests == 1000
    assert args.targets is None

    args = loadgen.build_parser().parse_args(["-n", "5", "-t", "a=http://x", "-t", "b=http://y"])
    assert args.requests == 5
    assert args.targets == [("a", "http://x"), ("b", "http://y")]


def test_main_reports_each_target(monkeypatch, capsys):
    async def fake_stress(name, url, requests, *, timeout_seconds=30.0, client=None):
        res = loadgen.StressResult(name=name, url=url, requests=requests, successes=requests, elapsed_seconds=0.5)
        return res

    monkeypatch.setattr(loadgen, "stress_test", fake_stress)

    code = loadgen.main(["-n", "3", "-t", "one=http://a", "-t", "two=http://b"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Starting stress tests with 3 requests each..." in out
    assert "one: 3/3 successful responses in 0.500s" in out
    assert "two: 3/3 successful responses in 0.500s" in out


def test_main_rejects_non_positive_requests(capsys):
    assert loadgen.main(["-n", "0"]) == 2
