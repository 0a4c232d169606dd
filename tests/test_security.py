"""Tests for identity-provider token verification."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from jose import jwt

from app.core.config import settings
from app.core.security import decode_token, identity_from_payload


def sign(**claims) -> str:
    return jwt.encode(claims, settings.auth_jwt_secret, algorithm=settings.auth_jwt_algorithm)


def test_valid_token_yields_identity(make_token):
    user_id = uuid4()
    identity = identity_from_payload(decode_token(make_token(user_id, "pat@example.com")))
    assert identity.id == user_id
    assert identity.email == "pat@example.com"


def test_wrong_audience_is_rejected():
    token = sign(sub=str(uuid4()), aud="some-other-app")
    assert decode_token(token) is None


def test_expired_token_is_rejected():
    token = sign(
        sub=str(uuid4()),
        aud=settings.auth_jwt_audience,
        exp=datetime.now(timezone.utc) - timedelta(minutes=1),
    )
    assert decode_token(token) is None


def test_wrong_secret_is_rejected():
    token = jwt.encode({"sub": str(uuid4()), "aud": settings.auth_jwt_audience}, "not-the-secret", algorithm="HS256")
    assert decode_token(token) is None


def test_subject_must_be_a_uuid():
    assert identity_from_payload({"sub": "user-42"}) is None
    assert identity_from_payload({}) is None
