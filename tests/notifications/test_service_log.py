# tests/notifications/test_service_log.py
"""
Unit tests for the service log notification using pytest-asyncio and respx.
"""

import json

import httpx
import pytest
import respx
from httpx import Response

from infraresize.core.exceptions import NotificationError
from infraresize.models.notification import ServiceLog
from infraresize.notifications.service_log import (
    ServiceLogSender,
    build_service_log,
    manual_command,
    parse_template_params,
    render_template,
)

TEMPLATE_URL = "https://templates.example.com/infranode_resized_auto.json"
OCM_URL = "https://api.ocm.example.com"

TEMPLATE = {
    "severity": "Info",
    "service_name": "SREManualAction",
    "summary": "Infra nodes resized",
    "description": "Your cluster's infra nodes were resized to ${INSTANCE_TYPE} to keep up with demand.",
    "internal_only": False,
}


@pytest.fixture
def service_log():
    return build_service_log("r5.xlarge", "abc123", template=TEMPLATE_URL)


def test_build_service_log_defaults_to_configured_template():
    log = build_service_log("r5.xlarge", "abc123")

    assert log.template.endswith("infranode_resized_auto.json")
    assert log.template_params == ["INSTANCE_TYPE=r5.xlarge"]
    assert log.cluster_id == "abc123"


def test_manual_command(service_log):
    assert manual_command(service_log) == f"osdctl servicelog post abc123 -t {TEMPLATE_URL} -p INSTANCE_TYPE=r5.xlarge"


def test_manual_command_quotes_values():
    log = ServiceLog(cluster_id="abc123", template=TEMPLATE_URL, template_params=["REASON=high load", "A=b"])

    assert manual_command(log).endswith("-p 'REASON=high load' -p A=b")


def test_parse_template_params_rejects_malformed():
    assert parse_template_params(["A=1", "B=x=y"]) == {"A": "1", "B": "x=y"}
    with pytest.raises(NotificationError):
        parse_template_params(["INSTANCE_TYPE"])


def test_render_template_substitutes_nested_strings():
    rendered = render_template({"a": "${X}", "b": ["${X}-${Y}", 3], "c": {"d": True}}, {"X": "1", "Y": "2"})

    assert rendered == {"a": "1", "b": ["1-2", 3], "c": {"d": True}}


def test_render_template_missing_parameter():
    with pytest.raises(NotificationError, match="INSTANCE_TYPE"):
        render_template({"description": "${INSTANCE_TYPE}"}, {})


@pytest.mark.asyncio
@respx.mock
async def test_send_posts_rendered_template(service_log):
    respx.get(TEMPLATE_URL).mock(return_value=Response(200, json=TEMPLATE))
    post = respx.post(f"{OCM_URL}/api/service_logs/v1/cluster_logs").mock(
        return_value=Response(201, json={"id": "log-1"})
    )
    sender = ServiceLogSender(ocm_url=OCM_URL, token="secret")

    result = await sender.send(service_log)

    assert result == {"id": "log-1"}
    request = post.calls.last.request
    assert request.headers["Authorization"] == "Bearer secret"
    body = json.loads(request.content)
    assert body["cluster_id"] == "abc123"
    assert "resized to r5.xlarge" in body["description"]
    assert body["severity"] == "Info"


@pytest.mark.asyncio
@respx.mock
async def test_template_fetch_does_not_send_token(service_log):
    template_route = respx.get(TEMPLATE_URL).mock(return_value=Response(200, json=TEMPLATE))
    respx.post(f"{OCM_URL}/api/service_logs/v1/cluster_logs").mock(return_value=Response(201, json={}))

    await ServiceLogSender(ocm_url=OCM_URL, token="secret").send(service_log)

    assert "Authorization" not in template_route.calls.last.request.headers


@pytest.mark.asyncio
async def test_send_without_token(service_log):
    with pytest.raises(NotificationError, match="OCM_TOKEN"):
        await ServiceLogSender(ocm_url=OCM_URL, token="").send(service_log)


@pytest.mark.asyncio
@respx.mock
async def test_send_template_fetch_error(service_log):
    respx.get(TEMPLATE_URL).mock(return_value=Response(404))

    with pytest.raises(NotificationError, match="failed to fetch"):
        await ServiceLogSender(ocm_url=OCM_URL, token="secret").send(service_log)


@pytest.mark.asyncio
@respx.mock
async def test_send_template_not_json(service_log):
    respx.get(TEMPLATE_URL).mock(return_value=Response(200, text="<html>"))

    with pytest.raises(NotificationError, match="not valid JSON"):
        await ServiceLogSender(ocm_url=OCM_URL, token="secret").send(service_log)


@pytest.mark.asyncio
@respx.mock
async def test_send_post_error(service_log):
    respx.get(TEMPLATE_URL).mock(return_value=Response(200, json=TEMPLATE))
    respx.post(f"{OCM_URL}/api/service_logs/v1/cluster_logs").mock(side_effect=httpx.ConnectError("refused"))

    with pytest.raises(NotificationError, match="failed to post"):
        await ServiceLogSender(ocm_url=OCM_URL, token="secret").send(service_log)


@pytest.mark.parametrize("error", [httpx.InvalidURL("bad host"), httpx.StreamNotRead()])
@pytest.mark.asyncio
@respx.mock
async def test_send_wraps_non_http_errors_on_post(service_log, error):
    respx.get(TEMPLATE_URL).mock(return_value=Response(200, json=TEMPLATE))
    respx.post(f"{OCM_URL}/api/service_logs/v1/cluster_logs").mock(side_effect=error)

    with pytest.raises(NotificationError, match="failed to post"):
        await ServiceLogSender(ocm_url=OCM_URL, token="secret").send(service_log)


@pytest.mark.asyncio
@respx.mock
async def test_send_wraps_invalid_template_url(service_log):
    respx.get(TEMPLATE_URL).mock(side_effect=httpx.InvalidURL("bad host"))

    with pytest.raises(NotificationError, match="failed to fetch"):
        await ServiceLogSender(ocm_url=OCM_URL, token="secret").send(service_log)


@pytest.mark.asyncio
async def test_malformed_ocm_url_is_a_notification_error(service_log, mocker):
    mocker.patch.object(ServiceLogSender, "fetch_template", new=mocker.AsyncMock(return_value=TEMPLATE))
    sender = ServiceLogSender(ocm_url="https://api.ocm.example.com:notaport", token="secret")

    with pytest.raises(NotificationError, match="failed to post"):
        await sender.send(service_log)
