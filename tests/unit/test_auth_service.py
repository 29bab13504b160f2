# tests/unit/test_auth_service.py
"""
Unit Tests for AuthService
"""

from datetime import datetime

import pytest
from unittest.mock import AsyncMock
from sqlalchemy.exc import OperationalError

from src.services.auth_service import AuthService, extract_bearer_token
from src.services.base_service import BaseService
from src.services.exceptions import AuthenticationError


@pytest.mark.parametrize(
    "header, expected",
    [
        ("Bearer abc123", "abc123"),
        ("bearer   abc123  ", "abc123"),
        ("Token abc123", None),
        ("Bearer ", None),
        ("", None),
        (None, None),
    ],
)
def test_extract_bearer_token(header, expected):
    assert extract_bearer_token(header) == expected


@pytest.mark.asyncio
async def test_valid_token_resolves_user(db_session, users, tokens):
    user = await AuthService(db_session).get_auth_user(f"Bearer {tokens['alice']}")

    assert user is not None
    assert user.id == users["alice"].id


@pytest.mark.asyncio
async def test_expired_token_is_anonymous(db_session, tokens):
    user = await AuthService(db_session).get_auth_user("Bearer token-expired")

    assert user is None


@pytest.mark.asyncio
async def test_unknown_token_and_no_header(db_session, tokens):
    service = AuthService(db_session)

    assert await service.get_auth_user("Bearer nope") is None
    assert await service.get_auth_user(None) is None


@pytest.mark.asyncio
async def test_lookup_failure_is_anonymous(db_session, tokens):
    service = AuthService(db_session)
    service.user_repo.get_by_session_token = AsyncMock(
        side_effect=OperationalError("SELECT", {}, Exception("db down"))
    )

    assert await service.get_auth_user(f"Bearer {tokens['alice']}") is None


@pytest.mark.asyncio
async def test_open_session_issues_working_token(db_session, users):
    service = AuthService(db_session)

    login = await service.open_session(users["carol"].id)

    assert len(login.token) == 96
    assert login.expires_at > datetime.utcnow()
    user = await service.get_auth_user(f"Bearer {login.token}")
    assert user.id == users["carol"].id


def test_require_user_rejects_anonymous():
    with pytest.raises(AuthenticationError) as exc_info:
        BaseService.require_user(None)

    assert exc_info.value.message == "Unauthorized"
