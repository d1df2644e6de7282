"""Tests for the signed session cookie."""
from datetime import timedelta

import pytest
from jose import jwt
from jose.exceptions import JWTError

from vacation_portal.core.config import settings
from vacation_portal.core.security import create_session_token, get_session_from_token
from vacation_portal.schemas.user import Role
from vacation_portal.tests.factories.models import SessionFactory


def test_session_survives_the_cookie():
    session = SessionFactory.build(role=Role.MANAGER)

    restored = get_session_from_token(create_session_token(session))

    assert restored == session


def test_expired_cookie_is_rejected():
    token = create_session_token(SessionFactory.build(), expires_delta=timedelta(seconds=-1))

    with pytest.raises(JWTError):
        get_session_from_token(token)


def test_cookie_signed_with_another_key_is_rejected():
    session = SessionFactory.build()
    forged = jwt.encode(
        session.model_dump(mode="json"), "x" * 40, algorithm=settings.ALGORITHM
    )

    with pytest.raises(JWTError):
        get_session_from_token(forged)


def test_cookie_without_session_fields_is_rejected():
    token = jwt.encode({"sub": "1"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    with pytest.raises(JWTError):
        get_session_from_token(token)
