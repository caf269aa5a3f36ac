"""Root conftest: in-memory fakes for every external service + API client.

Invariants:
    - No test touches Firebase, Google Maps or Expo
    - Every route dependency (get_firestore, get_identity, get_media,
      get_geocoder, get_push_client) is overridden with a fake
    - Rate limiting is disabled so signup tests can run back to back
"""

import copy
import itertools
import os
import uuid

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("TEMP_USER_SWEEP_MINUTES", "0")
os.environ.setdefault("SIGNUP_RATE_LIMIT", "5/minute")

import pytest
from httpx import ASGITransport, AsyncClient

from AGRICONNECT.core.firestore_adapter import get_firestore
from AGRICONNECT.core.rate_limit import limiter
from AGRICONNECT.location.geocoding import GeocodingError, get_geocoder
from AGRICONNECT.main import app
from AGRICONNECT.media.upload import get_media
from AGRICONNECT.Notification.expo import PushGatewayError, get_push_client, is_expo_push_token
from AGRICONNECT.USERS.identity import EmailAlreadyInUseError, get_identity


class FakeFirestore:
    """Dict-backed stand-in for FirestoreAdapter."""

    def __init__(self):
        self.collections = {}

    def docs(self, collection: str) -> dict:
        return self.collections.setdefault(collection, {})

    def get(self, collection, doc_id):
        doc = self.docs(collection).get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    def set(self, collection, doc_id, data):
        self.docs(collection)[doc_id] = copy.deepcopy(data)

    def add(self, collection, data):
        doc_id = uuid.uuid4().hex[:20]
        self.set(collection, doc_id, data)
        return doc_id

    def update(self, collection, doc_id, data):
        if doc_id not in self.docs(collection):
            raise KeyError(f"{collection}/{doc_id} not found")
        self.docs(collection)[doc_id].update(copy.deepcopy(data))

    def delete(self, collection, doc_id):
        self.docs(collection).pop(doc_id, None)

    def delete_older_than(self, collection, field, cutoff):
        stale = [k for k, v in self.docs(collection).items() if v.get(field) is not None and v[field] < cutoff]
        for k in stale:
            del self.docs(collection)[k]
        return len(stale)


class FakeIdentity:
    def __init__(self):
        self.accounts = {}
        self.fail_with = None
        self._ids = itertools.count(1)

    def create_account(self, email, password, display_name):
        if self.fail_with is not None:
            raise self.fail_with
        if email in self.accounts:
            raise EmailAlreadyInUseError(email)
        uid = f"uid{next(self._ids)}"
        self.accounts[email] = {"uid": uid, "password": password, "display_name": display_name}
        return uid


class FakeMedia:
    bucket_name = "test-bucket"

    def __init__(self):
        self.objects = {}

    def upload_image(self, name, data):
        self.objects[name] = data
        return f"https://storage.googleapis.com/{self.bucket_name}/{name}"


class FakeGeocoder:
    def __init__(self):
        self.places = {}
        self.calls = []
        self.error = None

    async def geocode(self, address):
        self.calls.append(address)
        if self.error is not None:
            raise self.error
        if address not in self.places:
            raise GeocodingError("ZERO_RESULTS", address)
        return self.places[address]


class FakePush:
    def __init__(self):
        self.sent = []
        self.fail = False

    async def send_message(self, message):
        if self.fail:
            raise PushGatewayError("Expo request error: connection refused")
        self.sent.append(message)
        return {"data": {"status": "ok", "id": "ticket-1"}}

    async def send_batched(self, messages):
        if self.fail:
            raise PushGatewayError("Expo request error: connection refused")
        valid = [m for m in messages if is_expo_push_token(m.get("to"))]
        self.sent.extend(valid)
        return [{"status": "ok"} for _ in valid]


@pytest.fixture
def firestore():
    return FakeFirestore()


@pytest.fixture
def identity():
    return FakeIdentity()


@pytest.fixture
def media():
    return FakeMedia()


@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
def push():
    return FakePush()


@pytest.fixture
async def client(firestore, identity, media, geocoder, push):
    """FastAPI test client with every external service replaced by a fake."""
    app.dependency_overrides[get_firestore] = lambda: firestore
    app.dependency_overrides[get_identity] = lambda: identity
    app.dependency_overrides[get_media] = lambda: media
    app.dependency_overrides[get_geocoder] = lambda: geocoder
    app.dependency_overrides[get_push_client] = lambda: push
    limiter.enabled = False

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
