"""
Request presence checks shared by handlers.
"""
from core.domain.exceptions import MissingFieldsError


def is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def require_fields(**fields) -> None:
    """
    Raise MissingFieldsError naming every absent or blank field.

    Usage:
        require_fields(key=query.key, email=query.email)
    """
    missing = [name for name, value in fields.items() if is_blank(value)]
    if missing:
        raise MissingFieldsError(missing)
