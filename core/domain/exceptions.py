"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.

The hierarchy mirrors how callers are expected to react:

- ValidationException: the request is incomplete or malformed
- AuthorizationException: the admin secret did not match
- DomainException subclasses for license rules: expected, deterministic outcomes
- InfrastructureException: the store could not be reached in time
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationException(DomainException):
    """Base exception for missing or malformed input."""

    pass


class MissingFieldsError(ValidationException):
    """Raised when required request fields are absent."""

    def __init__(self, fields=None, message: str = None):
        self.fields = list(fields or [])
        if message is None:
            message = "Missing required fields"
            if self.fields:
                message = f"{message}: {', '.join(self.fields)}"
        super().__init__(message, code="MissingFields")


class InvalidLicenseTypeError(ValidationException):
    """Raised when an unknown license type is requested."""

    def __init__(self, message: str = "Unknown license type"):
        super().__init__(message, code="InvalidLicenseType")


class AuthorizationException(DomainException):
    """Base exception for authorization failures."""

    pass


class UnauthorizedError(AuthorizationException):
    """Raised when the admin secret does not match."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, code="Unauthorized")


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class LicenseNotFoundError(LicenseException):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LicenseNotFound")


class EmailMismatchError(LicenseException):
    """Raised when the supplied email does not own the license."""

    def __init__(self, message: str = "Email does not match the license"):
        super().__init__(message, code="EmailMismatch")


class LicenseDisabledError(LicenseException):
    """Raised when a license was disabled by an administrator."""

    def __init__(self, message: str = "License disabled by the administrator"):
        super().__init__(message, code="LicenseDisabled")


class LicenseExpiredError(LicenseException):
    """Raised when a license has expired."""

    def __init__(self, message: str = "License has expired"):
        super().__init__(message, code="LicenseExpired")


class LicenseNotActivatedError(LicenseException):
    """Raised when a license has never been activated."""

    def __init__(self, message: str = "License is not activated"):
        super().__init__(message, code="NotActivated")


class DeviceConflictError(LicenseException):
    """Raised when a license is already bound to another device."""

    def __init__(
        self,
        message: str = (
            "License is already activated on another device. "
            "Contact the administrator to change devices."
        ),
    ):
        super().__init__(message, code="DeviceConflict")


class DuplicateKeyError(LicenseException):
    """Raised when a license key already exists in the store."""

    def __init__(self, message: str = "License key already exists"):
        super().__init__(message, code="DuplicateKey")


class InfrastructureException(DomainException):
    """Base exception for storage and infrastructure failures."""

    pass


class TransientStoreError(InfrastructureException):
    """Raised by store adapters for failures worth retrying."""

    def __init__(self, message: str = "Transient store failure"):
        super().__init__(message, code="TransientStoreError")


class StoreUnavailableError(InfrastructureException):
    """Raised when the store cannot answer within its time and retry budget."""

    def __init__(self, message: str = "License store unavailable"):
        super().__init__(message, code="ServiceUnavailable")


class KeyGenerationError(InfrastructureException):
    """Raised when no unused license key could be generated."""

    def __init__(self, message: str = "Could not generate a unique license key"):
        super().__init__(message, code="KeyGenerationFailed")
