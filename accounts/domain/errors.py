"""Outcome types returned by the account policy.

These are values, not exceptions: the policy reports expected conditions
(bad input, identity collisions, wrong password, missing account) so the
calling layer can pick a view. Only infrastructure failures raise.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


@dataclass(frozen=True)
class AccountError:
    """Base class for field-scoped policy failures."""

    field: Optional[str]
    message: str


@dataclass(frozen=True)
class ValidationError(AccountError):
    """Malformed input the user can correct."""


@dataclass(frozen=True)
class ConflictError(AccountError):
    """The requested email already belongs to another account."""


class PasswordErrorCode(str, Enum):
    INVALID_NEW_PASSWORD = "invalid_new_password"
    CONFIRMATION_MISMATCH = "confirmation_mismatch"
    OLD_PASSWORD_INCORRECT = "old_password_incorrect"


@dataclass(frozen=True)
class PasswordError(AccountError):
    code: PasswordErrorCode = PasswordErrorCode.INVALID_NEW_PASSWORD


@dataclass(frozen=True)
class NotFoundError(AccountError):
    """The referenced account does not exist. Not bound to a form field."""

    account_id: Optional[str] = None


@dataclass(frozen=True)
class NoChange:
    """The requested email is the account's current canonical email."""


@dataclass(frozen=True)
class Change:
    email: str


@dataclass(frozen=True)
class PasswordChange:
    """Result of a password change check: a new hash or the ordered field errors."""

    new_hash: Optional[str] = None
    errors: List[PasswordError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors and self.new_hash is not None
