from __future__ import annotations

from dataclasses import dataclass

import pytest

from accounts.domain import (
    Change,
    ConflictError,
    NoChange,
    NotFoundError,
    PasswordErrorCode,
    ValidationError,
    change_password,
    handle_missing_account,
    resolve_update_target,
    validate_new_password,
)


@dataclass
class FakeAccount:
    id: str
    email: str


class InMemoryLookup:
    def __init__(self, *accounts: FakeAccount):
        self.accounts = {a.email: a for a in accounts}
        self.queries = []

    def find_by_email(self, email):
        self.queries.append(email)
        return self.accounts.get(email)


def _hash(plain: str) -> str:
    return "h$" + plain[::-1]


def _verify(plain: str, stored: str) -> bool:
    return _hash(plain) == stored


# -------------------------- resolve_update_target --------------------------
def test_same_email_with_different_case_is_no_change():
    lookup = InMemoryLookup(FakeAccount("a1", "test@test.ru"))
    decision = resolve_update_target("a1", "test@test.ru", "TEST@TEST.RU", lookup)
    assert decision == NoChange()
    assert lookup.queries == []


def test_free_email_is_changed_to_canonical_form():
    lookup = InMemoryLookup(FakeAccount("a1", "old@test.ru"))
    decision = resolve_update_target("a1", "old@test.ru", " New@Test.RU ", lookup)
    assert decision == Change(email="new@test.ru")
    assert lookup.queries == ["new@test.ru"]


def test_email_owned_by_other_account_is_a_conflict():
    lookup = InMemoryLookup(FakeAccount("a1", "mine@test.ru"), FakeAccount("a2", "taken@test.ru"))
    decision = resolve_update_target("a1", "mine@test.ru", "TAKEN@test.ru", lookup)
    assert isinstance(decision, ConflictError)
    assert decision.field == "email"


def test_email_already_held_by_same_account_is_not_a_conflict():
    # current_email may be stale relative to the store; the id decides ownership
    lookup = InMemoryLookup(FakeAccount("a1", "new@test.ru"))
    decision = resolve_update_target("a1", "old@test.ru", "new@test.ru", lookup)
    assert decision == Change(email="new@test.ru")


def test_malformed_email_is_rejected_before_lookup():
    lookup = InMemoryLookup()
    decision = resolve_update_target("a1", "test@test.test", "test@test", lookup)
    assert isinstance(decision, ValidationError)
    assert decision.field == "email"
    assert lookup.queries == []


# -------------------------- change_password --------------------------
def test_change_password_returns_new_hash():
    current = _hash("_Qwe1234")
    outcome = change_password("a1", "_Qwe1234", "_Asd5678", "_Asd5678", current, _verify, _hash, min_length=8)
    assert outcome.ok
    assert outcome.errors == []
    assert outcome.new_hash == _hash("_Asd5678")
    assert outcome.new_hash != "_Asd5678"
    assert outcome.new_hash != current


def test_wrong_old_password_is_bound_to_old_password_field():
    current = _hash("_Qwe1234")
    outcome = change_password("a1", "wrongPassword", "_Asd5678", "_Asd5678", current, _verify, _hash)
    assert not outcome.ok
    assert outcome.new_hash is None
    assert [(e.field, e.code) for e in outcome.errors] == [("old_password", PasswordErrorCode.OLD_PASSWORD_INCORRECT)]


def test_empty_new_password_is_bound_to_new_password_field():
    current = _hash("_Qwe1234")
    outcome = change_password("a1", "_Qwe1234", "", "", current, _verify, _hash)
    assert not outcome.ok
    assert [(e.field, e.code) for e in outcome.errors] == [("new_password", PasswordErrorCode.INVALID_NEW_PASSWORD)]


def test_confirmation_mismatch():
    current = _hash("_Qwe1234")
    outcome = change_password("a1", "_Qwe1234", "_Asd5678", "_Asd0000", current, _verify, _hash)
    assert [e.code for e in outcome.errors] == [PasswordErrorCode.CONFIRMATION_MISMATCH]
    assert outcome.errors[0].field == "confirm_new_password"


def test_all_failing_checks_are_reported_in_order():
    current = _hash("_Qwe1234")
    outcome = change_password("a1", "nope", "short", "other", current, _verify, _hash, min_length=8)
    assert [e.code for e in outcome.errors] == [
        PasswordErrorCode.INVALID_NEW_PASSWORD,
        PasswordErrorCode.CONFIRMATION_MISMATCH,
        PasswordErrorCode.OLD_PASSWORD_INCORRECT,
    ]


def test_verify_runs_even_when_new_password_is_invalid():
    calls = []

    def verify(plain, stored):
        calls.append(plain)
        return True

    change_password("a1", "_Qwe1234", "", "", "stored", verify, _hash)
    assert calls == ["_Qwe1234"]


def test_identity_hasher_is_refused():
    with pytest.raises(ValueError):
        change_password("a1", "old", "_Asd5678", "_Asd5678", "stored", lambda p, h: True, lambda p: p)


def test_password_policy_minimum_length():
    assert validate_new_password("", 1) is not None
    assert validate_new_password("1234567", 8) is not None
    assert validate_new_password("12345678", 8) is None


# -------------------------- handle_missing_account --------------------------
def test_missing_account_is_a_distinct_not_found():
    err = handle_missing_account("ghost")
    assert isinstance(err, NotFoundError)
    assert not isinstance(err, ValidationError)
    assert err.account_id == "ghost"
    assert err.field is None
