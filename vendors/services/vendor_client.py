"""HTTP client for the vendor REST backend.

Every operation maps onto one REST call under ``/api/vendors``. Transport
failures, non-2xx responses and unreadable bodies all surface as
:class:`~vendors.exceptions.VendorServiceError` carrying an operator-facing
message; the distinction between them is only kept in the logs.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, List, Optional

import httpx
from django.conf import settings

from ..exceptions import VendorNotFoundError, VendorServiceError
from ..models import Vendor, VendorId

logger = logging.getLogger(__name__)

COLLECTION_PATH = "/api/vendors"

LIST_FAILED = "Failed to fetch vendors."
NOT_FOUND = "Vendor not found"
CREATE_FAILED = "Failed to add vendor."
UPDATE_FAILED = "Failed to update vendor."
DELETE_FAILED = "Failed to delete vendor."


class VendorClient:
    """Thin wrapper over :class:`httpx.Client` for the vendor endpoints."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._http = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def __enter__(self) -> "VendorClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    @staticmethod
    def item_path(vendor_id: VendorId) -> str:
        return f"{COLLECTION_PATH}/{vendor_id}"

    def _request(
        self,
        method: str,
        path: str,
        error: type[VendorServiceError],
        message: str,
        **kwargs: Any,
    ) -> httpx.Response:
        logger.debug("%s %s", method, path)
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise error(message) from exc
        if not response.is_success:
            logger.warning(
                "%s %s returned HTTP %s", method, path, response.status_code
            )
            raise error(message, status_code=response.status_code)
        return response

    @staticmethod
    def _json(
        response: httpx.Response,
        expected: type,
        error: type[VendorServiceError],
        message: str,
    ) -> Any:
        try:
            data = response.json()
        except ValueError as exc:
            logger.warning("Unreadable response body from %s", response.request.url)
            raise error(message, status_code=response.status_code) from exc
        if not isinstance(data, expected):
            logger.warning(
                "Expected %s from %s, got %s",
                expected.__name__, response.request.url, type(data).__name__,
            )
            raise error(message, status_code=response.status_code)
        return data

    def list_vendors(self) -> List[Vendor]:
        response = self._request("GET", COLLECTION_PATH, VendorServiceError, LIST_FAILED)
        data = self._json(response, list, VendorServiceError, LIST_FAILED)
        return [Vendor.from_dict(row) for row in data if isinstance(row, dict)]

    def get_vendor(self, vendor_id: VendorId) -> Vendor:
        response = self._request(
            "GET", self.item_path(vendor_id), VendorNotFoundError, NOT_FOUND
        )
        data = self._json(response, dict, VendorNotFoundError, NOT_FOUND)
        return Vendor.from_dict(data)

    def create_vendor(self, vendor: Vendor) -> Vendor:
        response = self._request(
            "POST", COLLECTION_PATH, VendorServiceError, CREATE_FAILED,
            json=vendor.payload(),
        )
        data = self._json(response, dict, VendorServiceError, CREATE_FAILED)
        created = Vendor.from_dict(data)
        logger.info("Created vendor %s (%s)", created.id, created.name)
        return created

    def update_vendor(self, vendor_id: VendorId, vendor: Vendor) -> Vendor:
        # Whole-record replace; the body always carries the id being updated.
        body = vendor.with_id(vendor_id).to_dict()
        response = self._request(
            "PUT", self.item_path(vendor_id), VendorServiceError, UPDATE_FAILED,
            json=body,
        )
        data = self._json(response, dict, VendorServiceError, UPDATE_FAILED)
        logger.info("Updated vendor %s", vendor_id)
        return Vendor.from_dict(data)

    def delete_vendor(self, vendor_id: VendorId) -> None:
        self._request(
            "DELETE", self.item_path(vendor_id), VendorServiceError, DELETE_FAILED
        )
        logger.info("Deleted vendor %s", vendor_id)


_client: VendorClient | None = None
_lock = threading.Lock()


def get_vendor_client() -> VendorClient:
    """Return a cached client configured from Django settings.

    The client is created on first use from ``VENDOR_API_URL`` and
    ``VENDOR_API_TIMEOUT`` and reused for subsequent requests.
    """

    global _client
    with _lock:
        if _client is None:
            _client = VendorClient(
                settings.VENDOR_API_URL, timeout=settings.VENDOR_API_TIMEOUT
            )
            logger.info("Vendor backend configured at %s", _client.base_url)
        return _client


def reset_vendor_client() -> None:
    """Close and forget the cached client."""

    global _client
    with _lock:
        if _client is not None:
            _client.close()
        _client = None
