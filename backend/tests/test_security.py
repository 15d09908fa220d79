import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from walletapi.config import settings
from walletapi.security import decode_token, hash_password, make_access_token, verify_password, JWT_ALG


def test_password_hash_is_one_way():
    h = hash_password("pw")
    assert h != "pw"
    assert verify_password("pw", h)
    assert not verify_password("PW", h)


def test_access_token_carries_sub_and_email():
    sub = str(uuid.uuid4())
    data = decode_token(make_access_token(sub, "a@b.com"))
    assert data["sub"] == sub
    assert data["email"] == "a@b.com"
    assert data["type"] == "access"


def test_expired_token_is_rejected():
    past = datetime.now(timezone.utc) - timedelta(minutes=5)
    token = jwt.encode({"sub": str(uuid.uuid4()), "type": "access", "exp": int(past.timestamp())}, settings.jwt_secret, algorithm=JWT_ALG)
    with pytest.raises(jwt.ExpiredSignatureError):
        decode_token(token)


def test_foreign_signature_is_rejected():
    token = jwt.encode({"sub": str(uuid.uuid4()), "type": "access"}, "someone-else-entirely-with-a-long-enough-key", algorithm=JWT_ALG)
    with pytest.raises(jwt.InvalidSignatureError):
        decode_token(token)
