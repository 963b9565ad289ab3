"""
Account identity and credential policy.

Everything in this package is pure: no database, no HTTP, no hashing of its
own. Collaborators (email lookup, hash/verify) are passed in by the caller.
"""

from .emails import normalize_email, validate_email_syntax
from .policy import (
    AccountError,
    Change,
    ConflictError,
    EmailLookup,
    NoChange,
    NotFoundError,
    PasswordChange,
    PasswordError,
    PasswordErrorCode,
    ValidationError,
    change_password,
    handle_missing_account,
    resolve_update_target,
    validate_new_password,
    validate_required,
)

__all__ = [
    "AccountError",
    "Change",
    "ConflictError",
    "EmailLookup",
    "NoChange",
    "NotFoundError",
    "PasswordChange",
    "PasswordError",
    "PasswordErrorCode",
    "ValidationError",
    "change_password",
    "handle_missing_account",
    "normalize_email",
    "resolve_update_target",
    "validate_email_syntax",
    "validate_new_password",
    "validate_required",
]
