"""Form validation rules.

The registration validators are pure functions: given the raw field value they
return a :class:`FieldValidation` describing the first rule that failed (rules
are checked top to bottom) or the trimmed value when every rule passed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional, Type

from ..core.exceptions import ValidationError

_NAME_RE = re.compile(r"[a-zA-Z\s\-']+")
_USERNAME_RE = re.compile(r"[a-zA-Z0-9_]+")
_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_LOWER_RE = re.compile(r"[a-z]")
_UPPER_RE = re.compile(r"[A-Z]")
_DIGIT_RE = re.compile(r"[0-9]")
_SPECIAL_RE = re.compile(r"""[!@#$%^&*()_+\-=\[\]{};':"\\|,.<>/?]""")
_REPEAT_RE = re.compile(r"(.)\1{2,}")
_SEQUENCE_RE = re.compile(r"123|abc|qwe|asd|zxc", re.IGNORECASE)

REGISTRATION_FIELDS = ("name", "username", "email", "password", "confirmPassword")


@dataclass(frozen=True)
class FieldValidation:
    is_valid: bool
    message: str = ""
    value: Optional[str] = None


@dataclass(frozen=True)
class FormValidation:
    is_valid: bool
    errors: dict[str, str] = field(default_factory=dict)
    validated_data: dict[str, str] = field(default_factory=dict)


def _trim(value: Optional[str]) -> Optional[str]:
    return value.strip() if isinstance(value, str) else None


def _fail(message: str) -> FieldValidation:
    return FieldValidation(is_valid=False, message=message)


def _ok(value: str) -> FieldValidation:
    return FieldValidation(is_valid=True, message="", value=value)


def validate_name(name: Optional[str]) -> FieldValidation:
    trimmed = _trim(name)
    if not trimmed:
        return _fail("Name is required")
    if len(trimmed) < 2:
        return _fail("Name must be at least 2 characters long")
    if len(trimmed) > 50:
        return _fail("Name must be less than 50 characters")
    if not _NAME_RE.fullmatch(trimmed):
        return _fail("Name can only contain letters, spaces, hyphens, and apostrophes")
    return _ok(trimmed)


def validate_username(username: Optional[str]) -> FieldValidation:
    trimmed = _trim(username)
    if not trimmed:
        return _fail("Username is required")
    if len(trimmed) < 3:
        return _fail("Username must be at least 3 characters long")
    if len(trimmed) > 20:
        return _fail("Username must be less than 20 characters")
    if not _USERNAME_RE.fullmatch(trimmed):
        return _fail("Username can only contain letters, numbers, and underscores")
    if trimmed.startswith("_") or trimmed.endswith("_"):
        return _fail("Username cannot start or end with underscore")
    if "__" in trimmed:
        return _fail("Username cannot have consecutive underscores")
    return _ok(trimmed)


def validate_email(email: Optional[str]) -> FieldValidation:
    trimmed = _trim(email)
    if not trimmed:
        return _fail("Email is required")
    if not _EMAIL_RE.fullmatch(trimmed):
        return _fail("Please enter a valid email address")
    if len(trimmed) > 254:
        return _fail("Email address is too long")
    return _ok(trimmed)


def validate_password(password: Optional[str]) -> FieldValidation:
    trimmed = _trim(password)
    if not trimmed:
        return _fail("Password is required")
    if len(trimmed) < 8:
        return _fail("Password must be at least 8 characters long")
    if len(trimmed) > 128:
        return _fail("Password must be less than 128 characters")
    if not _LOWER_RE.search(trimmed):
        return _fail("Password must contain at least one lowercase letter")
    if not _UPPER_RE.search(trimmed):
        return _fail("Password must contain at least one uppercase letter")
    if not _DIGIT_RE.search(trimmed):
        return _fail("Password must contain at least one number")
    if not _SPECIAL_RE.search(trimmed):
        return _fail("Password must contain at least one special character")
    if _REPEAT_RE.search(trimmed):
        return _fail("Password cannot contain more than 2 consecutive identical characters")
    if _SEQUENCE_RE.search(trimmed):
        return _fail("Password cannot contain common sequences like 123, abc, etc.")
    return _ok(trimmed)


def validate_password_confirmation(password: Optional[str], confirm_password: Optional[str]) -> FieldValidation:
    # The confirmation is trimmed, the password it is compared with is not.
    trimmed_confirm = _trim(confirm_password)
    if not trimmed_confirm:
        return _fail("Please confirm your password")
    if password != trimmed_confirm:
        return _fail("Passwords do not match")
    return _ok(trimmed_confirm)


def validate_registration_form(form: Mapping[str, Any]) -> FormValidation:
    """Validate every registration field independently.

    All failing fields are reported at once; passing fields land in
    ``validated_data`` with their trimmed value.
    """
    results = {
        "name": validate_name(form.get("name")),
        "username": validate_username(form.get("username")),
        "email": validate_email(form.get("email")),
        "password": validate_password(form.get("password")),
        "confirmPassword": validate_password_confirmation(form.get("password"), form.get("confirmPassword")),
    }

    errors: dict[str, str] = {}
    validated: dict[str, str] = {}
    for field_name, result in results.items():
        if result.is_valid:
            validated[field_name] = result.value
        else:
            errors[field_name] = result.message

    return FormValidation(is_valid=not errors, errors=errors, validated_data=validated)


def get_field_validation(field_name: str, value: Optional[str], form: Optional[Mapping[str, Any]] = None) -> FieldValidation:
    """As-you-type validation of a single field."""
    form = form or {}
    if field_name == "name":
        return validate_name(value)
    if field_name == "username":
        return validate_username(value)
    if field_name == "email":
        return validate_email(value)
    if field_name == "password":
        return validate_password(value)
    if field_name == "confirmPassword":
        return validate_password_confirmation(form.get("password"), value)
    return FieldValidation(is_valid=True, message="", value=_trim(value))


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters long")
    return value


def require_choice(value: Optional[str], enum_cls: Type, field_name: str, *, required: bool = False):
    """Return the enum member for ``value``; empty values give None unless required."""
    if not value or not str(value).strip():
        if required:
            raise ValidationError(f"{field_name} is required")
        return None
    member = enum_cls.parse(value)
    if member is None:
        raise ValidationError(f"{field_name} is not valid")
    return member


def parse_optional_decimal(value: Optional[str], field_name: str) -> Optional[Decimal]:
    if value is None or not str(value).strip():
        return None
    try:
        return Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number")


def parse_positive_decimal(value: Optional[str], message: str) -> Decimal:
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, AttributeError):
        raise ValidationError(message)
    if not number.is_finite() or number <= 0:
        raise ValidationError(message)
    return number
