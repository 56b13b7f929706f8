"""Vendor record types.

Vendors are owned by the external REST backend, so nothing here is a Django
ORM model. ``Category`` uses ``TextChoices`` to get a closed set that also
plugs straight into form choices.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, replace
from typing import Any, Mapping, Optional, Union

from django.db import models

logger = logging.getLogger(__name__)

VendorId = Union[int, str]

TEXT_FIELDS = ("name", "contact", "email", "phone", "address")


class Category(models.TextChoices):
    UTENSILS = "Utensils", "Utensils"
    PACKAGING = "Packaging", "Packaging"
    CONTAINERS = "Containers", "Containers"

    @classmethod
    def parse(cls, value: Any) -> Optional["Category"]:
        """Return the matching member or ``None`` for blank/unknown values."""
        text = (value or "").strip() if isinstance(value, str) else value
        if not text:
            return None
        try:
            return cls(text)
        except ValueError:
            return None


@dataclass(frozen=True)
class Vendor:
    """A supplier record as exchanged with the backend."""

    id: Optional[VendorId] = None
    name: str = ""
    contact: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    category: Optional[Category] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Vendor":
        raw_category = data.get("category")
        category = Category.parse(raw_category)
        if category is None and raw_category:
            logger.warning("Ignoring unknown vendor category %r", raw_category)
        values = {field: _text(data.get(field)) for field in TEXT_FIELDS}
        return cls(id=data.get("id"), category=category, **values)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["category"] = self.category.value if self.category else ""
        return data

    def payload(self) -> dict[str, Any]:
        """Return the request body for create calls (everything but ``id``)."""
        data = self.to_dict()
        data.pop("id")
        return data

    def with_id(self, vendor_id: VendorId) -> "Vendor":
        return replace(self, id=vendor_id)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)
