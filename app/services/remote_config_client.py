"""
Firebase Remote Config template transport.

The Admin SDK for Python only evaluates server templates, so the client
template is fetched, validated and published through the Remote Config
REST API using the Firebase app's service-account access token.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import firebase_admin
import httpx

from ..core.exceptions import UpstreamError
from ..core.firebase_init import initialize_firebase

logger = logging.getLogger(__name__)

REMOTE_CONFIG_URL = "https://firebaseremoteconfig.googleapis.com/v1/projects/{project_id}/remoteConfig"


class RemoteConfigTemplate:
    """A Remote Config template plus the ETag it was read with"""

    def __init__(self, data: Optional[Dict[str, Any]] = None, etag: str = "*"):
        data = data or {}
        self.parameters: Dict[str, Any] = data.get("parameters") or {}
        self.conditions = data.get("conditions") or []
        self.parameter_groups: Dict[str, Any] = data.get("parameterGroups") or {}
        self.version: Optional[Dict[str, Any]] = data.get("version")
        self.etag = etag

    def to_json(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "conditions": self.conditions,
            "parameters": self.parameters,
            "parameterGroups": self.parameter_groups,
        }
        # version metadata is server-assigned except for its description
        if self.version and self.version.get("description"):
            body["version"] = {"description": self.version["description"]}
        return body


def _error_message(response: httpx.Response) -> str:
    try:
        return response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return f"Remote Config request failed with status {response.status_code}: {response.text}"


class RemoteConfigClient:
    def __init__(self, timeout: float = 30.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout
        self.transport = transport

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def _request_context(self):
        if not initialize_firebase():
            raise UpstreamError("Firebase is not initialized - no service account credential available")

        app = firebase_admin.get_app()
        if not app.project_id:
            raise UpstreamError("Firebase project id could not be determined from the credential")

        token = await asyncio.to_thread(app.credential.get_access_token)
        url = REMOTE_CONFIG_URL.format(project_id=app.project_id)
        headers = {
            "Authorization": f"Bearer {token.access_token}",
            "Accept-Encoding": "gzip",
        }
        return url, headers

    async def get_template(self) -> RemoteConfigTemplate:
        url, headers = await self._request_context()
        async with self._http_client() as client:
            response = await client.get(url, headers=headers)

        if response.status_code != 200:
            raise UpstreamError(_error_message(response))

        return RemoteConfigTemplate(response.json(), etag=response.headers.get("etag", "*"))

    async def _put_template(self, template: RemoteConfigTemplate, validate_only: bool) -> RemoteConfigTemplate:
        url, headers = await self._request_context()
        headers["Content-Type"] = "application/json; UTF-8"
        # Unconditional write: concurrent publishers race and the last one wins
        headers["If-Match"] = "*"
        params = {"validateOnly": "true"} if validate_only else None

        async with self._http_client() as client:
            response = await client.put(url, headers=headers, params=params, json=template.to_json())

        if response.status_code != 200:
            raise UpstreamError(_error_message(response))

        return RemoteConfigTemplate(response.json(), etag=response.headers.get("etag", template.etag))

    async def validate_template(self, template: RemoteConfigTemplate) -> RemoteConfigTemplate:
        return await self._put_template(template, validate_only=True)

    async def publish_template(self, template: RemoteConfigTemplate) -> RemoteConfigTemplate:
        published = await self._put_template(template, validate_only=False)
        logger.info(f"✅ Published Remote Config template (etag {published.etag})")
        return published


remote_config_client = RemoteConfigClient()
