"""
Canonical forms for contact details and catalog names.

Uniqueness checks compare canonical values only, so every write path runs its input
through these functions first. All of them are pure and idempotent:
normalize_x(normalize_x(v)) == normalize_x(v).

Phone numbers are stored as `+<country code><national number>`:

    '050 123 4567'    -> '+971501234567'   (trunk prefix dropped)
    '501234567'       -> '+971501234567'   (bare national number)
    '+971-50-1234567' -> '+971501234567'   (already international)
"""

import re

from src.platform.config.core_setting import settings
from src.service.cinema.domain.reservation_errors import InvalidPhoneError


_NON_DIGITS = re.compile(r'[^0-9]')


def normalize_phone(
    raw: str,
    *,
    country_code: str | None = None,
    trunk_prefix: str | None = None,
    national_length: int | None = None,
) -> str:
    country_code = country_code or settings.PHONE_COUNTRY_CODE
    trunk_prefix = trunk_prefix if trunk_prefix is not None else settings.PHONE_TRUNK_PREFIX
    national_length = national_length or settings.PHONE_NATIONAL_LENGTH

    digits = _NON_DIGITS.sub('', raw or '')

    if digits.startswith(country_code) and len(digits) == len(country_code) + national_length:
        return f'+{digits}'
    if (
        trunk_prefix
        and digits.startswith(trunk_prefix)
        and len(digits) == len(trunk_prefix) + national_length
    ):
        return f'+{country_code}{digits[len(trunk_prefix):]}'
    if len(digits) == national_length:
        return f'+{country_code}{digits}'

    raise InvalidPhoneError(raw)


def normalize_email(raw: str) -> str:
    return (raw or '').strip().lower()


def normalize_optional_phone(raw: str | None) -> str | None:
    if raw is None or not raw.strip():
        return None
    return normalize_phone(raw)


def normalize_optional_email(raw: str | None) -> str | None:
    if raw is None:
        return None
    return normalize_email(raw) or None


def normalize_hall_name(raw: str) -> str:
    return (raw or '').strip()


def name_key(name: str) -> str:
    """Case-insensitive comparison key for hall names and movie titles"""
    return normalize_hall_name(name).lower()


def normalize_seat_row(raw: str) -> str:
    return (raw or '').strip().upper()
