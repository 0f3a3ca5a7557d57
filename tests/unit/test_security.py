import pytest

from consultations.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


def test_password_hash_and_verify():
    plain = "StrongPass123"
    hashed = get_password_hash(plain)

    assert hashed != plain
    assert verify_password(plain, hashed) is True
    assert verify_password("WrongPass123", hashed) is False


def test_access_token_carries_admin_claims():
    token = create_access_token(admin_id=7, username="ops")
    claims = decode_access_token(token)

    assert claims["sub"] == "7"
    assert claims["username"] == "ops"
    assert claims["role"] == "admin"


def test_tampered_token_is_rejected():
    token = create_access_token(admin_id=7, username="ops")

    with pytest.raises(ValueError):
        decode_access_token(token + "x")
