from datetime import datetime, timedelta

import pytest

from iswear_forum.core.exceptions import UnauthorizedError
from iswear_forum.core.security import (
    SCRYPT_KEYLEN,
    create_session_token,
    decode_session_token,
    get_password_hash,
    get_token_session_id,
    verify_password,
)


def test_password_hash_format_is_hex_digest_dot_salt():
    stored = get_password_hash("correct horse")
    digest, salt = stored.split(".")
    assert len(bytes.fromhex(digest)) == SCRYPT_KEYLEN
    assert len(bytes.fromhex(salt)) == 16


def test_same_password_gets_a_fresh_salt():
    assert get_password_hash("same") != get_password_hash("same")


def test_verify_password_roundtrip():
    stored = get_password_hash("correct horse")
    assert verify_password("correct horse", stored)
    assert not verify_password("wrong horse", stored)


@pytest.mark.parametrize("stored", ["", "nodot", "zz.salt", "abcd.salt", "."])
def test_malformed_stored_hash_never_verifies(stored):
    assert verify_password("anything", stored) is False


def test_session_token_carries_user_and_session():
    token = create_session_token(7, "abc123", datetime.utcnow() + timedelta(days=1))
    claims = decode_session_token(token)
    assert claims["sub"] == "7"
    assert claims["sid"] == "abc123"
    assert get_token_session_id(token) == "abc123"


def test_expired_or_tampered_token_is_rejected():
    expired = create_session_token(7, "abc123", datetime.utcnow() - timedelta(minutes=1))
    with pytest.raises(UnauthorizedError):
        decode_session_token(expired)

    valid = create_session_token(7, "abc123", datetime.utcnow() + timedelta(days=1))
    with pytest.raises(UnauthorizedError):
        header, payload, signature = valid.split(".")
        decode_session_token(".".join([header, payload, signature[::-1]]))

    assert get_token_session_id("garbage") is None
    assert get_token_session_id(None) is None
