"""
Admin authorization.

One authorizer holds the configured admin secret. The middleware guarding
admin routes and the decorator guarding admin handlers both delegate to it,
so no admin operation carries its own comparison.

The secret is a single static value without rotation.
"""
import functools
import hmac
import logging
from typing import Optional

from core.domain.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


class AdminAuthorizer:
    """Checks a supplied admin secret against the configured one."""

    def __init__(self, secret: Optional[str]):
        self._secret = (secret or "").encode("utf-8")

    @property
    def configured(self) -> bool:
        return bool(self._secret)

    def is_authorized(self, supplied: Optional[str]) -> bool:
        """Constant-time comparison; an unconfigured secret rejects everything."""
        if not self._secret or not supplied:
            return False
        return hmac.compare_digest(self._secret, str(supplied).encode("utf-8"))

    def verify(self, supplied: Optional[str]) -> None:
        """
        Verify an admin secret.

        Raises:
            UnauthorizedError: If the secret does not match
        """
        if not self.is_authorized(supplied):
            logger.warning("Rejected admin request with a bad secret")
            raise UnauthorizedError()


def requires_admin_secret(handle):
    """
    Guard an admin handler's ``handle(command)`` coroutine.

    The handler instance must expose ``authorizer`` and the command must
    carry ``admin_secret``. The check runs before anything else in the
    handler, including payload validation.
    """

    @functools.wraps(handle)
    async def wrapper(self, command, *args, **kwargs):
        self.authorizer.verify(getattr(command, "admin_secret", None))
        return await handle(self, command, *args, **kwargs)

    wrapper.requires_admin_secret = True
    return wrapper
