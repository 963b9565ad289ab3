"""
Account identity and credential-update rules.

The functions here decide; they never write. Callers apply a `Change` or a
`PasswordChange.new_hash` to the store themselves, and the store's unique
index on the canonical email is what makes the check-then-act sequence safe
under concurrency.
"""
from __future__ import annotations

from typing import Callable, List, Optional, Protocol, Union

from .emails import normalize_email, validate_email_syntax
from .errors import (
    AccountError,
    Change,
    ConflictError,
    NoChange,
    NotFoundError,
    PasswordChange,
    PasswordError,
    PasswordErrorCode,
    ValidationError,
)

__all__ = [
    "AccountError",
    "AccountRef",
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
    "resolve_update_target",
    "validate_new_password",
    "validate_required",
]

UpdateDecision = Union[NoChange, Change]


class AccountRef(Protocol):
    id: str
    email: str


class EmailLookup(Protocol):
    """Persistence query used to detect identity collisions."""

    def find_by_email(self, email: str) -> Optional[AccountRef]:
        """Return the account stored under the given canonical email, if any."""

        ...


def validate_required(value: str | None, field: str, label: str) -> Optional[ValidationError]:
    if not (value or "").strip():
        return ValidationError(field=field, message=f"{label} is required.")
    return None


def validate_new_password(value: str | None, min_length: int = 1, field: str = "new_password") -> Optional[ValidationError]:
    """Password policy shared by signup and password change."""
    password = value or ""
    if not password:
        return ValidationError(field=field, message="Password must not be empty.")
    if len(password) < min_length:
        return ValidationError(field=field, message=f"Password must have at least {min_length} characters.")
    return None


def resolve_update_target(
    account_id: str,
    current_email: str,
    requested_email: str,
    lookup: EmailLookup,
) -> Union[UpdateDecision, ValidationError, ConflictError]:
    """
    Decide what an update request means for the account's email.

    Returns `NoChange` when the request only differs by case or whitespace,
    `Change(email)` with the canonical form when the slot is free (or already
    held by this same account), a `ValidationError` for a malformed address
    and a `ConflictError` when another account owns the canonical email.
    """
    invalid = validate_email_syntax(requested_email)
    if invalid:
        return invalid

    canonical = normalize_email(requested_email)
    if canonical == normalize_email(current_email):
        return NoChange()

    existing = lookup.find_by_email(canonical)
    if existing is not None and existing.id != account_id:
        return ConflictError(field="email", message="An account with this email already exists.")
    return Change(email=canonical)


def change_password(
    account_id: str,
    old_password: str | None,
    new_password: str | None,
    confirm_new_password: str | None,
    current_hash: str,
    verify: Callable[[str, str], bool],
    hash: Callable[[str], str],
    min_length: int = 1,
) -> PasswordChange:
    """
    Authorize a password change and produce the new stored credential.

    Every check runs so each offending field gets its own error; the errors
    keep the order new password policy, confirmation, old password.
    """
    errors: List[PasswordError] = []

    invalid = validate_new_password(new_password, min_length)
    if invalid:
        errors.append(
            PasswordError(field="new_password", message=invalid.message, code=PasswordErrorCode.INVALID_NEW_PASSWORD)
        )
    if (new_password or "") != (confirm_new_password or ""):
        errors.append(
            PasswordError(
                field="confirm_new_password",
                message="Passwords do not match.",
                code=PasswordErrorCode.CONFIRMATION_MISMATCH,
            )
        )
    if not verify(old_password or "", current_hash):
        errors.append(
            PasswordError(
                field="old_password",
                message="Current password is incorrect.",
                code=PasswordErrorCode.OLD_PASSWORD_INCORRECT,
            )
        )
    if errors:
        return PasswordChange(errors=errors)

    new_hash = hash(new_password)
    if new_hash == new_password:
        raise ValueError(f"hasher returned the plaintext for account {account_id}")
    return PasswordChange(new_hash=new_hash)


def handle_missing_account(account_id: str | None) -> NotFoundError:
    return NotFoundError(field=None, message="Account not found.", account_id=account_id)
