"""
Unit tests for admin authorization.
"""
from dataclasses import dataclass
from typing import Optional

import pytest

from core.application.authorization import AdminAuthorizer, requires_admin_secret
from core.application.validation import is_blank, require_fields
from core.domain.exceptions import MissingFieldsError, UnauthorizedError


class TestAdminAuthorizer:
    """Tests for AdminAuthorizer."""

    def test_matching_secret(self):
        assert AdminAuthorizer("s3cret").is_authorized("s3cret") is True

    def test_wrong_or_missing_secret(self):
        authorizer = AdminAuthorizer("s3cret")
        assert authorizer.is_authorized("wrong") is False
        assert authorizer.is_authorized("") is False
        assert authorizer.is_authorized(None) is False

    def test_unconfigured_secret_rejects_everything(self):
        authorizer = AdminAuthorizer("")
        assert authorizer.configured is False
        assert authorizer.is_authorized("") is False
        assert authorizer.is_authorized("anything") is False

    def test_verify_raises_unauthorized(self):
        with pytest.raises(UnauthorizedError) as exc_info:
            AdminAuthorizer("s3cret").verify("nope")
        assert exc_info.value.code == "Unauthorized"


@dataclass
class _Command:
    admin_secret: Optional[str]
    value: Optional[str] = None


class _GuardedHandler:
    def __init__(self, authorizer):
        self.authorizer = authorizer
        self.calls = 0

    @requires_admin_secret
    async def handle(self, command):
        self.calls += 1
        require_fields(value=command.value)
        return command.value


@pytest.mark.asyncio
class TestRequiresAdminSecret:
    """Tests for the admin handler guard."""

    async def test_authorized_call_runs_handler(self):
        handler = _GuardedHandler(AdminAuthorizer("s3cret"))
        assert await handler.handle(_Command("s3cret", "ok")) == "ok"
        assert handler.calls == 1

    async def test_bad_secret_stops_before_handler(self):
        handler = _GuardedHandler(AdminAuthorizer("s3cret"))
        with pytest.raises(UnauthorizedError):
            await handler.handle(_Command("bad"))
        assert handler.calls == 0

    async def test_authorization_checked_before_missing_fields(self):
        handler = _GuardedHandler(AdminAuthorizer("s3cret"))
        with pytest.raises(UnauthorizedError):
            await handler.handle(_Command(None, None))


class TestRequireFields:
    """Tests for presence validation."""

    def test_blank_values(self):
        assert is_blank(None)
        assert is_blank("  ")
        assert not is_blank("x")
        assert not is_blank(False)

    def test_lists_every_missing_field(self):
        with pytest.raises(MissingFieldsError) as exc_info:
            require_fields(key=None, email=" ", deviceId="d1")
        assert exc_info.value.fields == ["key", "email"]
        assert exc_info.value.code == "MissingFields"
        assert "key, email" in exc_info.value.message

    def test_all_present(self):
        require_fields(key="K", email="a@b.c")
