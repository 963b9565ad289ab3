from __future__ import annotations

from accounts.core.security import hash_password, verify_password


def test_hash_is_not_the_plaintext_and_verifies():
    stored = hash_password("_Qwe1234")
    assert stored != "_Qwe1234"
    assert stored.startswith("argon2$")
    assert verify_password("_Qwe1234", stored) is True
    assert verify_password("wrongPassword", stored) is False


def test_hashes_are_salted():
    assert hash_password("_Qwe1234") != hash_password("_Qwe1234")


def test_verify_rejects_missing_or_foreign_hashes():
    assert verify_password("_Qwe1234", None) is False
    assert verify_password("_Qwe1234", "") is False
    assert verify_password("_Qwe1234", "_Qwe1234") is False
    assert verify_password("_Qwe1234", "argon2$not-a-real-hash") is False
