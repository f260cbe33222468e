"""
Optional-value handling patterns used by the /null-safety-demo endpoint.

Blank strings (empty or whitespace only) are treated the same as missing
values wherever a helper falls back to a default.
"""

import logging
from dataclasses import dataclass
from typing import Iterable

logger = logging.getLogger(__name__)

NO_CONTACT_INFO = "No contact info"


class MissingRequiredField(ValueError):
    """Raised when a required value is None."""

    def __init__(self, field_name: str):
        super().__init__(f"{field_name} cannot be null")
        self.field_name = field_name


def _require(value, field_name: str):
    if value is None:
        raise MissingRequiredField(field_name)
    return value


def _present(value: str | None) -> bool:
    return value is not None and value.strip() != ""


@dataclass(frozen=True)
class UserInfo:
    """Immutable user summary; id and name are mandatory."""

    id: str
    name: str
    email: str | None = None
    phone: str | None = None

    def __post_init__(self):
        _require(self.id, "id")
        _require(self.name, "name")

    @property
    def contact_info(self) -> str:
        if self.email is not None:
            return self.email
        if self.phone is not None:
            return self.phone
        return NO_CONTACT_INFO


@dataclass
class Profile:
    email: str | None = None


@dataclass
class User:
    name: str
    age: int
    profile: Profile | None = None

    def __post_init__(self):
        _require(self.name, "name")


def process_string(value: str) -> str:
    """Upper-case a value that must not be None."""
    return _require(value, "input").upper()


def find_optional_value(key: str | None) -> str | None:
    """Look up ``key``, returning None when nothing is found."""
    if key == "valid":
        return f"found: {key}"
    return None


def safe_find(key: str | None) -> str | None:
    """Same lookup as find_optional_value; callers must handle the None case."""
    return find_optional_value(key)


def validate_required(user_id: str, email: str) -> None:
    _require(user_id, "userId")
    _require(email, "email")
    _process_user_data(user_id, email)


def length(value: str | None) -> int:
    if value is None:
        return 0
    return len(value)


def display_name(first_name: str | None, last_name: str | None) -> str:
    """
    Build "<first> <last>", substituting "Unknown" and "User" for missing or
    blank parts.
    """
    first = first_name if _present(first_name) else "Unknown"
    last = last_name if _present(last_name) else "User"
    return f"{first} {last}"


def user_email(user: User | None) -> str | None:
    """Return the user's profile email if every link exists and it looks like one."""
    if user is None or user.profile is None:
        return None
    email = user.profile.email
    if email is None or "@" not in email:
        return None
    return email


def process_value_or_default(value: str | None, default: str) -> str:
    if _present(value):
        logger.info("Processing: %s", value)
        return value
    logger.info("Using default: %s", default)
    return default


def user_age_if_adult(user: User | None) -> int | None:
    if user is None or user.age < 18:
        return None
    return user.age


def first_valid_email(emails: Iterable[str | None] | None) -> str | None:
    """First entry containing '@'; None entries are skipped."""
    if emails is None:
        return None
    return next((e for e in emails if e is not None and "@" in e), None)


def user_display_name(user: User | None) -> str:
    if user is None:
        return "Anonymous"
    return user.name


def _process_user_data(user_id: str, email: str) -> None:
    logger.info("Processing user: %s with email: %s", user_id, email)
