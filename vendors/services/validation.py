"""Field checks run before a vendor is sent to the backend."""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, Mapping

from ..models import Category

REQUIRED_FIELDS = ("name", "contact", "email", "phone", "address", "category")

# Deliberately loose: something@something.something
EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")


def validate_vendor(
    record: Mapping[str, Any], required_fields: Iterable[str] = REQUIRED_FIELDS
) -> Dict[str, str]:
    """Return a mapping of field name to error message.

    Every required field that is missing or blank after trimming is reported
    as ``"<Field> is required."``. A non-blank email that does not look like
    ``local@domain.tld`` is reported as ``"Valid email is required."`` and a
    non-blank category outside :class:`Category` is rejected as well. An
    empty mapping means the record may be submitted.
    """

    errors: Dict[str, str] = {}
    for field in required_fields:
        value = _as_text(record.get(field))
        if not value:
            errors[field] = f"{field.capitalize()} is required."
            continue
        if field == "email" and not EMAIL_PATTERN.match(value):
            errors[field] = "Valid email is required."
        elif field == "category" and Category.parse(value) is None:
            allowed = ", ".join(Category.values)
            errors[field] = f"Category must be one of {allowed}."
    return errors


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()
