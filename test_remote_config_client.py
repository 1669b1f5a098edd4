import json
from types import SimpleNamespace

import firebase_admin
import httpx
import pytest

from app.core.exceptions import UpstreamError
from app.services import remote_config_client as client_module
from app.services.remote_config_client import RemoteConfigClient, RemoteConfigTemplate
from app.services.remote_config_service import RemoteConfigService

TEMPLATE_URL = "https://firebaseremoteconfig.googleapis.com/v1/projects/duka-test/remoteConfig"


@pytest.fixture
def firebase_app(monkeypatch):
    app = SimpleNamespace(
        project_id="duka-test",
        credential=SimpleNamespace(get_access_token=lambda: SimpleNamespace(access_token="token-123")),
    )
    monkeypatch.setattr(client_module, "initialize_firebase", lambda: True)
    monkeypatch.setattr(firebase_admin, "get_app", lambda: app)
    return app


def recording_transport(requests, handler):
    def _handle(request):
        requests.append(request)
        return handler(request)
    return httpx.MockTransport(_handle)


def template_server(request):
    if request.method == "GET":
        body = {"parameters": {"legacy_flag": {"defaultValue": {"value": "on"}}}, "version": {"versionNumber": "4"}}
        return httpx.Response(200, json=body, headers={"ETag": "etag-4"})
    return httpx.Response(200, json=json.loads(request.content), headers={"ETag": "etag-5"})


@pytest.mark.asyncio
async def test_set_config_fetches_validates_then_publishes(firebase_app):
    requests = []
    service = RemoteConfigService()
    service.client = RemoteConfigClient(transport=recording_transport(requests, template_server))

    await service.set_config({"maintenance_mode": True})

    fetch, validate, publish = requests
    assert (fetch.method, str(fetch.url)) == ("GET", TEMPLATE_URL)
    assert fetch.headers["Authorization"] == "Bearer token-123"

    assert validate.method == "PUT"
    assert validate.url.params.get("validateOnly") == "true"
    assert validate.headers["If-Match"] == "*"

    assert publish.method == "PUT"
    assert str(publish.url) == TEMPLATE_URL
    assert publish.headers["If-Match"] == "*"

    sent = json.loads(publish.content)
    assert sent["parameters"]["legacy_flag"] == {"defaultValue": {"value": "on"}}
    assert sent["parameters"]["maintenance_mode"]["defaultValue"] == {"value": "true"}
    assert "version" not in sent


@pytest.mark.asyncio
async def test_get_template_keeps_etag(firebase_app):
    client = RemoteConfigClient(transport=recording_transport([], template_server))

    template = await client.get_template()

    assert template.etag == "etag-4"
    assert "legacy_flag" in template.parameters


@pytest.mark.asyncio
async def test_google_error_message_is_surfaced(firebase_app):
    def forbidden(request):
        return httpx.Response(403, json={"error": {"code": 403, "message": "The caller does not have permission"}})

    client = RemoteConfigClient(transport=recording_transport([], forbidden))

    with pytest.raises(UpstreamError) as exc_info:
        await client.get_template()

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "The caller does not have permission"


@pytest.mark.asyncio
async def test_non_json_error_reports_status(firebase_app):
    def bad_gateway(request):
        return httpx.Response(502, text="upstream unavailable")

    client = RemoteConfigClient(transport=recording_transport([], bad_gateway))

    with pytest.raises(UpstreamError) as exc_info:
        await client.publish_template(RemoteConfigTemplate({"parameters": {}}))

    assert "502" in exc_info.value.message
    assert "upstream unavailable" in exc_info.value.message


@pytest.mark.asyncio
async def test_missing_credential_is_upstream_error(monkeypatch):
    monkeypatch.setattr(client_module, "initialize_firebase", lambda: False)

    with pytest.raises(UpstreamError):
        await RemoteConfigClient().get_template()
