import json

import httpx
import pytest

from offboard_tenancy.adapter.services.http_email_dispatcher import HttpEmailDispatcher

MAIL_URL = "http://mail.test/send"


def _dispatcher(handler, api_key=None):
    return HttpEmailDispatcher(
        MAIL_URL, api_key=api_key, transport=httpx.MockTransport(handler)
    )


@pytest.mark.asyncio
async def test_accepted_email_reports_message_id():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(202, json={"messageId": "msg-1"})

    result = await _dispatcher(handler, api_key="mail-key").send(
        "invitation", ["new@acme.com"], {"inviteLink": "http://app.test/invite/abc"}
    )

    assert result.success is True
    assert result.message_id == "msg-1"
    assert str(seen[0].url) == MAIL_URL
    assert seen[0].headers["Authorization"] == "Bearer mail-key"
    assert json.loads(seen[0].content) == {
        "type": "invitation",
        "to": ["new@acme.com"],
        "data": {"inviteLink": "http://app.test/invite/abc"},
    }


@pytest.mark.asyncio
async def test_accepted_email_without_json_body():
    result = await _dispatcher(lambda request: httpx.Response(204)).send(
        "trial_ended", ["owner@acme.com"], {}
    )

    assert result.success is True
    assert result.message_id is None


@pytest.mark.asyncio
async def test_unreadable_json_body_still_counts_as_sent():
    def handler(request):
        return httpx.Response(
            200,
            content=b"<html>ok</html>",
            headers={"content-type": "application/json"},
        )

    result = await _dispatcher(handler).send("invitation", ["new@acme.com"], {})

    assert result.success is True
    assert result.message_id is None


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [400, 422, 500, 503])
async def test_rejected_email_reports_failure(status_code):
    result = await _dispatcher(
        lambda request: httpx.Response(status_code, text="nope")
    ).send("invitation", ["new@acme.com"], {})

    assert result.success is False
    assert result.message_id is None


@pytest.mark.asyncio
async def test_unreachable_mail_service_reports_failure():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    result = await _dispatcher(handler).send("invitation", ["new@acme.com"], {})

    assert result.success is False


@pytest.mark.asyncio
async def test_no_authorization_header_without_api_key():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={})

    await _dispatcher(handler).send("invitation", ["new@acme.com"], {})

    assert "Authorization" not in seen[0].headers


@pytest.mark.asyncio
async def test_logging_dispatcher_reports_not_sent(caplog):
    from offboard_tenancy.adapter.services.logging_email_dispatcher import (
        LoggingEmailDispatcher,
    )

    with caplog.at_level("INFO"):
        result = await LoggingEmailDispatcher().send("invitation", ["new@acme.com"], {})

    assert result.success is False
    assert "new@acme.com" in caplog.text
