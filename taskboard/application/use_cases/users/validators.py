"""Common validation helpers for user use cases."""

from taskboard.domain.errors import ValidationError

USERNAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 8


def normalize_email(email: str) -> str:
    """Return a lower-cased address or raise ``ValidationError``."""

    normalized = email.strip()
    if normalized.count("@") != 1:
        raise ValidationError("A valid email address is required")

    local_part, domain = normalized.split("@", 1)
    if not local_part or "." not in domain or domain.startswith(".") or domain.endswith("."):
        raise ValidationError("A valid email address is required")

    return normalized.lower()


def normalize_username(username: str) -> str:
    normalized = username.strip()
    if not normalized:
        raise ValidationError("Username is required")
    if len(normalized) > USERNAME_MAX_LENGTH:
        raise ValidationError(f"Username must be at most {USERNAME_MAX_LENGTH} characters")
    return normalized


def ensure_password_strength(password: str) -> str:
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    return password
