from datetime import datetime, timedelta, timezone

from jose import jwt

from eventradar.auth import Caller, decode_session_token
from eventradar.config import Settings

SETTINGS = Settings(JWT_SECRET="secret")


def test_decode_admin_token():
    token = jwt.encode({"sub": "u1", "role": "ADMIN"}, "secret", algorithm="HS256")

    caller = decode_session_token(token, SETTINGS)

    assert caller == Caller(id="u1", role="ADMIN")
    assert caller.is_admin


def test_role_defaults_to_user():
    token = jwt.encode({"sub": "u2"}, "secret", algorithm="HS256")

    caller = decode_session_token(token, SETTINGS)

    assert caller.role == "USER"
    assert not caller.is_admin


def test_wrong_secret_is_anonymous():
    token = jwt.encode({"sub": "u1", "role": "ADMIN"}, "other", algorithm="HS256")

    assert decode_session_token(token, SETTINGS) is None


def test_expired_token_is_anonymous():
    token = jwt.encode(
        {"sub": "u1", "exp": datetime.now(timezone.utc) - timedelta(minutes=5)}, "secret", algorithm="HS256"
    )

    assert decode_session_token(token, SETTINGS) is None


def test_token_without_subject_is_anonymous():
    token = jwt.encode({"role": "ADMIN"}, "secret", algorithm="HS256")

    assert decode_session_token(token, SETTINGS) is None
