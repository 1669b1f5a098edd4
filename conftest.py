import copy
import itertools
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.core.config import settings
from app.database.database_service import SERVER_TIMESTAMP
from app.services.fcm_service import FCMService
from app.services.notification_service import notification_service
from app.services.remote_config_client import RemoteConfigTemplate
from app.services.remote_config_service import remote_config_service
from app.services.resource_service import coupon_service, review_service, service_status_service

TEST_PASSWORD = "test-admin-pass"


class FakeDB:
    def __init__(self):
        # storage keyed by collection -> id -> doc
        self.storage = {}
        self._ids = itertools.count(1)
        self._clock = itertools.count(1)
        self.fail_creates = False

    def _server_time(self):
        return datetime(2025, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=next(self._clock))

    def _resolve(self, data):
        return {k: (self._server_time() if v is SERVER_TIMESTAMP else v) for k, v in data.items()}

    async def create_document(self, collection: str, data: dict, document_id: str = None):
        if self.fail_creates:
            return False, None, "deadline exceeded"
        coll = self.storage.setdefault(collection, {})
        doc_id = document_id or f"doc_{next(self._ids)}"
        coll[doc_id] = self._resolve(data)
        return True, doc_id, None

    async def get_document(self, collection: str, document_id: str):
        doc = self.storage.get(collection, {}).get(document_id)
        return True, (dict(doc) if doc is not None else None), None

    async def update_document(self, collection: str, document_id: str, data: dict):
        coll = self.storage.get(collection, {})
        if document_id not in coll:
            return False, f"404 No document to update: {collection}/{document_id}"
        coll[document_id].update(data)
        return True, None

    async def set_document(self, collection: str, document_id: str, data: dict, merge: bool = False):
        coll = self.storage.setdefault(collection, {})
        if merge and document_id in coll:
            coll[document_id].update(data)
        else:
            coll[document_id] = dict(data)
        return True, None

    async def delete_document(self, collection: str, document_id: str):
        self.storage.get(collection, {}).pop(document_id, None)
        return True, None

    async def query_documents(self, collection: str, filters: list = None, limit: int = None, order_by: list = None):
        docs = [{"id": doc_id, **doc} for doc_id, doc in self.storage.get(collection, {}).items()]
        for field, direction in reversed(order_by or []):
            docs.sort(key=lambda d: d.get(field), reverse=direction == "desc")
        return True, docs[:limit] if limit else docs, None

    async def count_documents(self, collection: str):
        return True, len(self.storage.get(collection, {})), None

    def docs(self, collection: str):
        return list(self.storage.get(collection, {}).values())


class FakeFCM:
    """Builds real firebase_admin Message objects but never touches the network"""

    def __init__(self):
        self.sent = []
        self.error = None
        self._builder = FCMService(topic="updates")

    def build_topic_message(self, **kwargs):
        return self._builder.build_topic_message(**kwargs)

    async def send(self, message):
        if self.error:
            raise self.error
        self.sent.append(message)
        return f"projects/test/messages/{len(self.sent)}"


class FakeScheduler:
    def __init__(self):
        self.jobs = []

    def schedule(self, run_at, func, *args):
        self.jobs.append((run_at, func, args))
        return f"job_{len(self.jobs)}"

    async def fire_all(self):
        jobs, self.jobs = self.jobs, []
        for _, func, args in jobs:
            await func(*args)


class FakeRemoteConfigClient:
    def __init__(self, parameters=None):
        self.template = {"parameters": parameters or {}} if parameters is not None else None
        self.validated = []
        self.published = []
        self.fetch_error = None

    async def get_template(self):
        if self.fetch_error:
            raise self.fetch_error
        if self.template is None:
            raise RuntimeError("404 template not found")
        return RemoteConfigTemplate(copy.deepcopy(self.template), etag="etag-1")

    async def validate_template(self, template):
        self.validated.append(template)
        return template

    async def publish_template(self, template):
        self.published.append(template)
        self.template = template.to_json()
        return template


@pytest.fixture
def fake_db(monkeypatch):
    db = FakeDB()
    for service in (notification_service, review_service, coupon_service, service_status_service):
        monkeypatch.setattr(service, "db", db)
    return db


@pytest.fixture
def fake_fcm(monkeypatch):
    fcm = FakeFCM()
    monkeypatch.setattr(notification_service, "fcm", fcm)
    return fcm


@pytest.fixture
def fake_scheduler(monkeypatch):
    scheduler = FakeScheduler()
    monkeypatch.setattr(notification_service, "schedule", scheduler.schedule)
    return scheduler


@pytest.fixture
def fake_remote_config(monkeypatch):
    client = FakeRemoteConfigClient(parameters={})
    monkeypatch.setattr(remote_config_service, "client", client)
    return client


@pytest.fixture
def client(monkeypatch, fake_db, fake_fcm, fake_scheduler, fake_remote_config):
    """Anonymous HTTP client; no startup hooks, so Firebase and the scheduler stay off"""
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", TEST_PASSWORD)
    from app.main import app
    return TestClient(app)


@pytest.fixture
def admin_client(client):
    response = client.post("/api/login", json={"password": TEST_PASSWORD})
    assert response.status_code == 200
    return client
