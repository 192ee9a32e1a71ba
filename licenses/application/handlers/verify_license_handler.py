"""
Client-facing read handlers.

Verification and access checks only read the store; they never write.
"""
import logging
from typing import Optional

from core.application.validation import require_fields
from core.domain.clock import Clock, utcnow
from core.domain.exceptions import EmailMismatchError, LicenseNotFoundError
from core.metrics import license_verifications_total
from licenses.application.dto.license_dto import AccessResultDTO, VerificationResultDTO
from licenses.application.queries.check_access import CheckAccessQuery
from licenses.application.queries.verify_license import VerifyLicenseQuery
from licenses.domain.license import License
from licenses.domain.license_key import mask_key
from licenses.domain.services import ValidityEvaluator, ValidityResult
from licenses.ports.license_store import LicenseStore

logger = logging.getLogger(__name__)


class VerifyLicenseHandler:
    """Handler for VerifyLicenseQuery."""

    def __init__(self, store: LicenseStore, clock: Clock = utcnow):
        """Initialize handler with the store."""
        self.store = store
        self.clock = clock

    async def handle(self, query: VerifyLicenseQuery) -> VerificationResultDTO:
        """
        Handle verify license query.

        Checks, first failure wins: unknown key, email mismatch, then the
        validity evaluation (disabled, not activated, expired).

        Args:
            query: VerifyLicenseQuery

        Returns:
            VerificationResultDTO

        Raises:
            MissingFieldsError: If key or email is absent
        """
        require_fields(key=query.key, email=query.email)
        key = query.key.strip()
        now = self.clock()

        license: Optional[License]
        try:
            license = await self.store.get(key)
        except LicenseNotFoundError:
            license = None

        if license is not None and not license.is_owned_by(query.email):
            result = ValidityResult.invalid(EmailMismatchError())
        else:
            result = ValidityEvaluator.evaluate(license, now)

        license_verifications_total.labels(outcome=result.reason or "valid").inc()

        if not result.is_valid:
            logger.info(
                "License verification failed",
                extra={"license_key": mask_key(key), "reason": result.reason},
            )
            return VerificationResultDTO(
                validity=False, reason=result.reason, message=result.message
            )

        return VerificationResultDTO(
            validity=True,
            expires_at=license.expires_at,
            license_type=license.license_type.value,
            days_remaining=license.days_remaining(now),
        )


class CheckAccessHandler:
    """Handler for CheckAccessQuery."""

    def __init__(self, store: LicenseStore, clock: Clock = utcnow):
        self.store = store
        self.clock = clock

    async def handle(self, query: CheckAccessQuery) -> AccessResultDTO:
        """
        Grant access when any license owned by the email is valid.

        When none is, the reason reported is the one of the most
        recently issued license.
        """
        require_fields(email=query.email)
        now = self.clock()

        licenses = await self.store.find_by_email(query.email.strip())
        if not licenses:
            error = LicenseNotFoundError("No license found for this email")
            return AccessResultDTO(access=False, reason=error.code, message=error.message)

        licenses = sorted(licenses, key=lambda license: license.issued_at, reverse=True)
        results = [ValidityEvaluator.evaluate(license, now) for license in licenses]
        if any(result.is_valid for result in results):
            return AccessResultDTO(access=True)

        return AccessResultDTO(
            access=False, reason=results[0].reason, message=results[0].message
        )
