import json
import logging

import httpx
import pytest

from app.infra.failbot import FailBot


def raise_and_catch(exc):
    try:
        raise exc
    except Exception as e:  # noqa: BLE001
        return e


@pytest.fixture
def captured():
    return []


@pytest.fixture
def make_failbot(captured):
    def _make_failbot(status_code=200, url="https://haystack.example.com/report", **kwargs):
        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(status_code, json={"ok": status_code < 400})

        return FailBot(url, transport=httpx.MockTransport(handler), **kwargs)

    return _make_failbot


@pytest.mark.asyncio
async def test_report_without_haystack_url_is_noop(make_failbot, captured):
    failbot = make_failbot(url=None)

    result = await failbot.report(RuntimeError("boom"), {"path": "/"})

    assert result is None
    assert failbot.enabled is False
    assert captured == []


@pytest.mark.asyncio
async def test_report_posts_error_payload(make_failbot, captured):
    failbot = make_failbot(app_name="docs", env="production")
    error = raise_and_catch(ValueError("bad input"))

    result = await failbot.report(error, {"path": "/get-started"})

    assert result is not None
    assert result.status_code == 200
    assert len(captured) == 1

    request = captured[0]
    assert request.method == "POST"
    assert str(request.url) == "https://haystack.example.com/report"

    payload = json.loads(request.content)
    assert payload["app"] == "docs"
    assert payload["class"] == "ValueError"
    assert payload["message"] == "bad input"
    assert payload["env"] == "production"
    assert payload["path"] == "/get-started"
    assert "ValueError: bad input" in payload["backtrace"]
    assert "raise_and_catch" in payload["backtrace"]
    assert "created_at" in payload
    assert "request_id" in payload


@pytest.mark.asyncio
async def test_report_http_error_is_logged_not_raised(make_failbot, captured, caplog):
    failbot = make_failbot(status_code=503)

    with caplog.at_level(logging.WARNING, logger="app.infra.failbot"):
        result = await failbot.report(RuntimeError("boom"))

    assert result is None
    assert len(captured) == 1
    assert "Failed to report RuntimeError" in caplog.text


@pytest.mark.asyncio
async def test_report_transport_error_is_logged_not_raised(caplog):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    failbot = FailBot("https://haystack.example.com/report", transport=httpx.MockTransport(handler))

    with caplog.at_level(logging.WARNING, logger="app.infra.failbot"):
        result = await failbot.report(RuntimeError("boom"))

    assert result is None
    assert "connection refused" in caplog.text


def test_from_settings(make_settings):
    failbot = FailBot.from_settings(
        make_settings(HAYSTACK_URL="https://haystack.example.com/report", FAILBOT_APP_NAME="docs-staging")
    )

    assert failbot.enabled is True
    payload = failbot.build_payload(RuntimeError("boom"))
    assert payload["app"] == "docs-staging"
    assert payload["env"] == "test"
