"""Input Validation & Sanitization — pure checks applied before persistence.

Invariants:
    - All functions are PURE: no IO, no state
    - sanitize_input trims THEN strips '<' and '>' (nothing else is escaped)
    - validate_user_input order: presence → sanitize → shape, name before email
      at every stage
"""

import re

from userhub.core.errors import InvalidFieldError


EMAIL_PATTERN: re.Pattern[str] = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_ANGLE_BRACKETS = re.compile(r"[<>]")


def sanitize_input(value: str) -> str:
    """Trim surrounding whitespace and drop angle brackets."""
    return _ANGLE_BRACKETS.sub("", value.strip())


def is_valid_name(value: object) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


def is_valid_email(value: object) -> bool:
    return isinstance(value, str) and EMAIL_PATTERN.fullmatch(value) is not None


def validate_user_input(name: object, email: object) -> tuple[str, str]:
    """Return sanitized (name, email) or raise InvalidFieldError.

    Absent means missing, null or empty string. A present value that is not
    a string fails the shape stage for its field.
    """
    if not name:
        raise InvalidFieldError("name")
    if not email:
        raise InvalidFieldError("email")

    clean_name = sanitize_input(name) if isinstance(name, str) else None
    clean_email = sanitize_input(email) if isinstance(email, str) else None

    if not is_valid_name(clean_name):
        raise InvalidFieldError("name")
    if not is_valid_email(clean_email):
        raise InvalidFieldError("email")
    return clean_name, clean_email
