"""
Account use cases: signup, profile update and password change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from accounts.core.config import get_settings
from accounts.core.security import hash_password, verify_password
from accounts.db.models import Account
from accounts.domain import (
    AccountError,
    Change,
    ConflictError,
    NotFoundError,
    ValidationError,
    change_password,
    handle_missing_account,
    normalize_email,
    resolve_update_target,
    validate_email_syntax,
    validate_new_password,
    validate_required,
)
from accounts.repositories.sql_repository import EmailTakenError, SQLRepository
from accounts.services.session_service import Principal

logger = logging.getLogger(__name__)

_EMAIL_TAKEN = "An account with this email already exists."


@dataclass
class SignupForm:
    username: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""
    first_name: str = ""
    last_name: str = ""


@dataclass
class ProfileForm:
    username: str = ""
    email: str = ""
    first_name: str = ""
    last_name: str = ""


@dataclass
class PasswordForm:
    old_password: str = ""
    new_password: str = ""
    confirm_new_password: str = ""


@dataclass
class AccountResult:
    """Outcome of a use case. `not_found` is set instead of `errors` for unknown accounts."""

    account: Optional[Account] = None
    errors: List[AccountError] = field(default_factory=list)
    not_found: Optional[NotFoundError] = None

    @property
    def ok(self) -> bool:
        return not self.errors and self.not_found is None

    def errors_for(self, field_name: str) -> List[AccountError]:
        return [err for err in self.errors if err.field == field_name]


@dataclass
class AccountService:
    """Applies the identity and credential policy against the SQL store."""

    hasher: Callable[[str], str] = hash_password
    verifier: Callable[[str, str], bool] = verify_password

    def __post_init__(self):
        self.settings = get_settings()
        self.repository = SQLRepository()

    # -------------------------------------- helpers --------------------------------------
    def _resolve(self, principal: Principal) -> Account | NotFoundError:
        account = self.repository.find_by_email(normalize_email(principal.email))
        if not account or (principal.account_id and account.id != principal.account_id):
            logger.warning("Account not found for %s", principal.email)
            return handle_missing_account(principal.account_id)
        return account

    def _display_errors(self, username: str, first_name: str, last_name: str) -> List[AccountError]:
        checks = (
            validate_required(username, "username", "Username"),
            validate_required(first_name, "first_name", "First name"),
            validate_required(last_name, "last_name", "Last name"),
        )
        return [err for err in checks if err]

    def get_account(self, principal: Principal) -> Account | NotFoundError:
        return self._resolve(principal)

    # -------------------------------------- signup --------------------------------------
    def signup(self, form: SignupForm) -> AccountResult:
        errors = self._display_errors(form.username, form.first_name, form.last_name)
        invalid_email = validate_email_syntax(form.email)
        if invalid_email:
            errors.append(invalid_email)
        invalid_password = validate_new_password(form.password, self.settings.password_min_length, field="password")
        if invalid_password:
            errors.append(invalid_password)
        if form.password != form.confirm_password:
            errors.append(ValidationError(field="confirm_password", message="Passwords do not match."))

        email = normalize_email(form.email)
        if not invalid_email and self.repository.find_by_email(email):
            errors.append(ConflictError(field="email", message=_EMAIL_TAKEN))
        if errors:
            return AccountResult(errors=errors)

        try:
            account = self.repository.create_account(
                email=email,
                username=form.username.strip(),
                password_hash=self.hasher(form.password),
                first_name=form.first_name.strip(),
                last_name=form.last_name.strip(),
            )
        except EmailTakenError:
            return AccountResult(errors=[ConflictError(field="email", message=_EMAIL_TAKEN)])
        logger.info("Account %s created for %s", account.id, email)
        return AccountResult(account=account)

    # -------------------------------------- profile --------------------------------------
    def update_profile(self, principal: Principal, form: ProfileForm) -> AccountResult:
        account = self._resolve(principal)
        if isinstance(account, NotFoundError):
            return AccountResult(not_found=account)

        errors = self._display_errors(form.username, form.first_name, form.last_name)
        decision = resolve_update_target(account.id, account.email, form.email, self.repository)
        if isinstance(decision, AccountError):
            errors.append(decision)
        if errors:
            return AccountResult(account=account, errors=errors)

        new_email = decision.email if isinstance(decision, Change) else None
        try:
            updated = self.repository.update_profile(
                account.id,
                username=form.username.strip(),
                first_name=form.first_name.strip(),
                last_name=form.last_name.strip(),
                email=new_email,
            )
        except EmailTakenError:
            return AccountResult(account=account, errors=[ConflictError(field="email", message=_EMAIL_TAKEN)])
        if updated is None:
            return AccountResult(not_found=handle_missing_account(account.id))
        if new_email:
            logger.info("Account %s email changed from %s to %s", account.id, account.email, new_email)
        logger.info("Account %s profile updated", account.id)
        return AccountResult(account=updated)

    # -------------------------------------- password --------------------------------------
    def update_password(self, principal: Principal, form: PasswordForm) -> AccountResult:
        account = self._resolve(principal)
        if isinstance(account, NotFoundError):
            return AccountResult(not_found=account)

        outcome = change_password(
            account.id,
            form.old_password,
            form.new_password,
            form.confirm_new_password,
            account.password_hash,
            verify=self.verifier,
            hash=self.hasher,
            min_length=self.settings.password_min_length,
        )
        if not outcome.ok:
            logger.warning("Password change rejected for account %s: %s", account.id, [e.code.value for e in outcome.errors])
            return AccountResult(account=account, errors=list(outcome.errors))

        self.repository.update_password(account.id, outcome.new_hash)
        logger.info("Account %s password updated", account.id)
        return AccountResult(account=account)
