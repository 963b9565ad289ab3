"""Domain helpers for email normalization and syntax checks."""
from __future__ import annotations

import re
from typing import Optional

from .errors import ValidationError

EMAIL_MAX_LENGTH = 255
# local-part@label(.label)+ ; the domain must contain at least one dot
EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s.]+(\.[^@\s.]+)+")


def normalize_email(raw: str | None) -> str:
    """Return the canonical form used for lookups and uniqueness checks."""
    return (raw or "").strip().lower()


def validate_email_syntax(raw: str | None, field: str = "email") -> Optional[ValidationError]:
    """Return a ValidationError bound to `field`, or None when the address is usable."""
    value = (raw or "").strip()
    if not value:
        return ValidationError(field=field, message="Email is required.")
    if len(value) > EMAIL_MAX_LENGTH:
        return ValidationError(field=field, message=f"Email must be at most {EMAIL_MAX_LENGTH} characters.")
    if not EMAIL_PATTERN.fullmatch(value):
        return ValidationError(field=field, message="Email is not a valid address.")
    return None
