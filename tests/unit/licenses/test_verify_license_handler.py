"""
Unit tests for verification and access handlers.
"""
from datetime import timedelta

import pytest

from core.domain.exceptions import MissingFieldsError
from licenses.application.commands.set_license_enabled import SetLicenseEnabledCommand
from licenses.application.queries.check_access import CheckAccessQuery
from licenses.application.queries.verify_license import VerifyLicenseQuery

from conftest import ADMIN_SECRET, NOW


@pytest.mark.asyncio
class TestVerifyLicenseHandler:
    """Tests for VerifyLicenseHandler."""

    async def test_valid_license(self, issue_license, activate, verify_handler):
        issued = await issue_license(license_type="monthly")
        await activate(issued.key)

        result = await verify_handler.handle(
            VerifyLicenseQuery(key=issued.key, email="alice@example.com")
        )

        assert result.validity is True
        assert result.license_type == "monthly"
        assert result.expires_at == NOW + timedelta(days=30)
        assert result.days_remaining == 30
        assert result.reason is None

    async def test_unknown_key(self, verify_handler):
        result = await verify_handler.handle(
            VerifyLicenseQuery(key="ZZZZ-ZZZZ-ZZZZ-ZZZZ", email="alice@example.com")
        )
        assert result.validity is False
        assert result.reason == "LicenseNotFound"

    async def test_email_mismatch(self, issue_license, activate, verify_handler):
        issued = await issue_license()
        await activate(issued.key)

        result = await verify_handler.handle(
            VerifyLicenseQuery(key=issued.key, email="mallory@example.com")
        )
        assert result.reason == "EmailMismatch"

    async def test_email_mismatch_reported_before_disabled(
        self, issue_license, verify_handler, set_enabled_handler
    ):
        issued = await issue_license()
        await set_enabled_handler.handle(
            SetLicenseEnabledCommand(admin_secret=ADMIN_SECRET, key=issued.key, enabled=False)
        )

        result = await verify_handler.handle(
            VerifyLicenseQuery(key=issued.key, email="mallory@example.com")
        )
        assert result.reason == "EmailMismatch"

    async def test_not_activated(self, issue_license, verify_handler):
        issued = await issue_license()
        result = await verify_handler.handle(
            VerifyLicenseQuery(key=issued.key, email="ALICE@example.com")
        )
        assert result.validity is False
        assert result.reason == "NotActivated"

    async def test_trial_expires(self, issue_license, activate, verify_handler, clock):
        issued = await issue_license(license_type="trial")
        await activate(issued.key)

        clock.advance(days=7)
        assert (await verify_handler.handle(
            VerifyLicenseQuery(key=issued.key, email="alice@example.com")
        )).validity is True

        clock.advance(days=1)
        result = await verify_handler.handle(
            VerifyLicenseQuery(key=issued.key, email="alice@example.com")
        )
        assert result.validity is False
        assert result.reason == "LicenseExpired"

    async def test_disabled_license(
        self, issue_license, activate, verify_handler, set_enabled_handler
    ):
        issued = await issue_license()
        await activate(issued.key)
        await set_enabled_handler.handle(
            SetLicenseEnabledCommand(admin_secret=ADMIN_SECRET, key=issued.key, enabled=False)
        )

        result = await verify_handler.handle(
            VerifyLicenseQuery(key=issued.key, email="alice@example.com")
        )
        assert result.reason == "LicenseDisabled"

    async def test_verify_is_read_only(self, issue_license, activate, verify_handler, license_store):
        issued = await issue_license()
        await activate(issued.key)
        before = await license_store.get(issued.key)

        for _ in range(3):
            await verify_handler.handle(
                VerifyLicenseQuery(key=issued.key, email="alice@example.com")
            )

        assert await license_store.get(issued.key) == before

    async def test_missing_fields(self, verify_handler):
        with pytest.raises(MissingFieldsError) as exc_info:
            await verify_handler.handle(VerifyLicenseQuery(key=None, email=" "))
        assert exc_info.value.fields == ["key", "email"]


@pytest.mark.asyncio
class TestCheckAccessHandler:
    """Tests for CheckAccessHandler."""

    async def test_access_granted(self, issue_license, activate, check_access_handler):
        issued = await issue_license()
        await activate(issued.key)

        result = await check_access_handler.handle(CheckAccessQuery(email="Alice@Example.com"))
        assert result.access is True

    async def test_no_license(self, check_access_handler):
        result = await check_access_handler.handle(CheckAccessQuery(email="nobody@example.com"))
        assert result.access is False
        assert result.reason == "LicenseNotFound"
        assert result.message == "No license found for this email"

    async def test_any_valid_license_grants_access(
        self, issue_license, activate, check_access_handler, clock
    ):
        valid = await issue_license()
        await activate(valid.key)
        clock.advance(minutes=1)
        await issue_license()

        result = await check_access_handler.handle(CheckAccessQuery(email="alice@example.com"))
        assert result.access is True

    async def test_reason_from_newest_license(
        self, issue_license, activate, check_access_handler, clock
    ):
        trial = await issue_license(license_type="trial")
        await activate(trial.key)
        clock.advance(days=10)
        await issue_license()

        result = await check_access_handler.handle(CheckAccessQuery(email="alice@example.com"))
        assert result.access is False
        assert result.reason == "NotActivated"

    async def test_missing_email(self, check_access_handler):
        with pytest.raises(MissingFieldsError):
            await check_access_handler.handle(CheckAccessQuery(email=None))
