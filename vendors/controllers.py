"""State holders behind the vendor pages.

The controllers know nothing about HTTP requests or templates. Views create
one per request, feed it the user's input and turn the results into
responses and messages.

List: ``loading -> ready``. After a successful delete the held collection
is updated in place and the controller stays ``ready`` without re-fetching.

Add/Edit: ``idle -> validating -> submitting -> success``, or back to
``idle`` with errors. Edit starts in ``loading`` until the vendor arrives.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .exceptions import VendorError, VendorNotFoundError
from .models import Vendor, VendorId
from .services import list_utils
from .services.validation import validate_vendor
from .services.vendor_client import VendorClient

logger = logging.getLogger(__name__)

LOADING = "loading"
READY = "ready"
IDLE = "idle"
VALIDATING = "validating"
SUBMITTING = "submitting"
SUCCESS = "success"


@dataclass(frozen=True)
class ListPage:
    """One rendered page of the vendor table."""

    state: list_utils.ListState
    vendors: List[Vendor]
    matches: List[Vendor]
    pages: int

    @property
    def total(self) -> int:
        return len(self.matches)

    @property
    def page(self) -> int:
        return self.state.page

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.pages


class VendorListController:
    def __init__(self, client: VendorClient, vendors: Optional[List[Vendor]] = None):
        self.client = client
        self.vendors: List[Vendor] = list(vendors) if vendors is not None else []
        self.status = READY if vendors is not None else LOADING

    def load(self) -> Optional[str]:
        """Fetch the collection; return an error message on failure."""
        self.status = LOADING
        try:
            self.vendors = self.client.list_vendors()
        except VendorError as exc:
            logger.error("Failed to fetch vendors: %s", exc)
            self.vendors = []
            return exc.message
        finally:
            self.status = READY
        return None

    def derive(self, state: list_utils.ListState) -> ListPage:
        matches = list_utils.filter_vendors(self.vendors, state.query, state.field)
        matches = list_utils.sort_vendors(matches, state.sort, state.direction)
        pages = list_utils.page_count(len(matches), state.page_size)
        if state.page >= pages:
            state = state.with_page(pages - 1)
        visible = list_utils.paginate(matches, state.page, state.page_size)
        return ListPage(state=state, vendors=visible, matches=matches, pages=pages)

    def find(self, vendor_id: VendorId) -> Optional[Vendor]:
        for vendor in self.vendors:
            if str(vendor.id) == str(vendor_id):
                return vendor
        return None

    def delete(self, vendor_id: VendorId) -> Tuple[bool, str]:
        try:
            self.client.delete_vendor(vendor_id)
        except VendorError as exc:
            logger.error("Failed to delete vendor %s: %s", vendor_id, exc)
            return False, exc.message
        self.vendors = [v for v in self.vendors if str(v.id) != str(vendor_id)]
        return True, "Vendor deleted successfully."


@dataclass
class SubmitResult:
    ok: bool
    message: str = ""
    errors: Dict[str, str] = field(default_factory=dict)
    vendor: Optional[Vendor] = None


class VendorFormController:
    """Drives the add form (``vendor_id is None``) or the edit form."""

    def __init__(self, client: VendorClient, vendor_id: Optional[VendorId] = None):
        self.client = client
        self.vendor_id = vendor_id
        self.vendor: Optional[Vendor] = None
        self.status = LOADING if self.is_edit else IDLE

    @property
    def is_edit(self) -> bool:
        return self.vendor_id is not None

    def load(self) -> Vendor:
        """Fetch the vendor being edited.

        Raises :class:`VendorNotFoundError` when it cannot be loaded.
        """
        if not self.is_edit:
            raise ValueError("Only the edit form loads an existing vendor")
        try:
            self.vendor = self.client.get_vendor(self.vendor_id)
        except VendorError as exc:
            logger.warning("Could not load vendor %s: %s", self.vendor_id, exc)
            raise VendorNotFoundError(exc.message) from exc
        self.status = IDLE
        return self.vendor

    def submit(self, record: Mapping[str, Any]) -> SubmitResult:
        if self.status == SUBMITTING:
            return SubmitResult(False, "A submission is already in progress.")
        if self.status == LOADING:
            return SubmitResult(False, "Vendor is still loading.")

        self.status = VALIDATING
        errors = validate_vendor(record)
        if errors:
            self.status = IDLE
            return SubmitResult(False, errors=errors)

        # Edits keep the backend's own id (and its type), not the URL text.
        record_id = self.vendor.id if self.is_edit else None
        vendor = Vendor.from_dict({**record, "id": record_id})
        self.status = SUBMITTING
        try:
            if self.is_edit:
                saved = self.client.update_vendor(record_id, vendor)
                message = "Vendor updated successfully!"
            else:
                saved = self.client.create_vendor(vendor)
                message = "Vendor added successfully!"
        except VendorError as exc:
            logger.error("Vendor submission failed: %s", exc)
            self.status = IDLE
            return SubmitResult(False, exc.message)
        self.vendor = saved
        self.status = SUCCESS
        return SubmitResult(True, message, vendor=saved)
