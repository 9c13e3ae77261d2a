from datetime import timedelta

import jwt
import pytest

from university.core.config import ALGORITHM
from university.core.errors import InvalidToken
from university.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_password_hash_round_trip():
    hashed = hash_password("secret1")
    assert hashed != "secret1"
    assert verify_password("secret1", hashed)
    assert not verify_password("secret2", hashed)


def test_malformed_hash_never_verifies():
    assert not verify_password("secret1", "not-a-bcrypt-hash")


def test_token_carries_the_claim():
    token = create_access_token({"user_id": 3, "role": "instructor", "first_name": "Ian"})
    claim = decode_access_token(token)
    assert claim.user_id == 3
    assert claim.role == "instructor"
    assert claim.first_name == "Ian"
    assert not claim.is_admin


def test_token_signed_with_another_key_is_rejected():
    token = jwt.encode(
        {"user_id": 1, "role": "admin"},
        "some-other-secret-that-is-long-enough-for-hs256",
        algorithm=ALGORITHM,
    )
    with pytest.raises(InvalidToken) as exc_info:
        decode_access_token(token)
    assert exc_info.value.status_code == 401


def test_expired_token():
    token = create_access_token({"user_id": 1, "role": "admin"}, timedelta(seconds=-1))
    with pytest.raises(InvalidToken) as exc_info:
        decode_access_token(token)
    assert exc_info.value.detail == "Token expired"


def test_token_without_identity_is_rejected():
    token = create_access_token({"role": "admin"})
    with pytest.raises(InvalidToken) as exc_info:
        decode_access_token(token)
    assert exc_info.value.detail == "Invalid token"
