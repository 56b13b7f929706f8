import json
import os
import sys

import httpx
import pytest

# Ensure project root is on sys.path
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from vendors.services import vendor_client  # noqa: E402
from vendors.services.vendor_client import VendorClient  # noqa: E402

COLLECTION = "/api/vendors"


class FakeBackend:
    """In-memory stand-in for the vendor REST API.

    ``failures`` maps ``(method, path)`` to either an HTTP status code or an
    ``httpx`` exception class to raise for that request.
    """

    def __init__(self, vendors=None):
        self.vendors = {str(v["id"]): dict(v) for v in vendors or []}
        self.next_id = max((int(k) for k in self.vendors), default=0) + 1
        self.requests = []
        self.failures = {}

    def count(self, method, path=COLLECTION):
        return sum(1 for r in self.requests if r[0] == method and r[1] == path)

    def handle(self, request: httpx.Request) -> httpx.Response:
        method, path = request.method, request.url.path
        body = json.loads(request.content) if request.content else None
        self.requests.append((method, path, body))

        failure = self.failures.get((method, path))
        if isinstance(failure, int):
            return httpx.Response(failure, json={"error": "failure"})
        if failure is not None:
            raise failure("backend unavailable", request=request)

        if path == COLLECTION:
            if method == "GET":
                return httpx.Response(200, json=list(self.vendors.values()))
            if method == "POST":
                record = dict(body, id=self.next_id)
                self.vendors[str(self.next_id)] = record
                self.next_id += 1
                return httpx.Response(201, json=record)
            return httpx.Response(405)

        vendor_id = path.rsplit("/", 1)[-1]
        if vendor_id not in self.vendors:
            return httpx.Response(404, json={"error": "Vendor not found"})
        if method == "GET":
            return httpx.Response(200, json=self.vendors[vendor_id])
        if method == "PUT":
            self.vendors[vendor_id] = dict(body)
            return httpx.Response(200, json=self.vendors[vendor_id])
        if method == "DELETE":
            del self.vendors[vendor_id]
            return httpx.Response(204)
        return httpx.Response(405)


ACME = {
    "id": 1,
    "name": "Acme",
    "contact": "Jo",
    "email": "jo@acme.com",
    "phone": "555",
    "address": "1 Road",
    "category": "Utensils",
}
BETA = {
    "id": 2,
    "name": "Beta",
    "contact": "Al",
    "email": "al@beta.com",
    "phone": "556",
    "address": "2 Lane",
    "category": "Packaging",
}


@pytest.fixture
def vendor_rows():
    return [dict(ACME), dict(BETA)]


@pytest.fixture
def backend(vendor_rows):
    return FakeBackend(vendor_rows)


@pytest.fixture
def api_client(backend):
    client = VendorClient("http://backend.test", transport=httpx.MockTransport(backend.handle))
    yield client
    client.close()


@pytest.fixture
def portal(monkeypatch, api_client, backend):
    """Point the portal's cached vendor client at the fake backend."""

    monkeypatch.setattr(vendor_client, "_client", api_client)
    return backend


@pytest.fixture
def vendor_form_data():
    def build(**overrides):
        data = {
            "name": "Gamma",
            "contact": "Kim",
            "email": "kim@gamma.io",
            "phone": "557",
            "address": "3 Street",
            "category": "Containers",
        }
        data.update(overrides)
        return data

    return build
