from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.domain.contact_normalizer import (
    normalize_optional_email,
    normalize_optional_phone,
)


def _require_full_name(full_name: str | None) -> str:
    full_name = (full_name or '').strip()
    if not full_name:
        raise DomainError('Full name is required', 400)
    return full_name


@attrs.define
class Customer:
    full_name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    id: Optional[int] = None
    version_id: Optional[int] = None

    @classmethod
    @Logger.io
    def create(
        cls, *, full_name: str, phone: Optional[str] = None, email: Optional[str] = None
    ) -> 'Customer':
        return cls(
            full_name=_require_full_name(full_name),
            phone=normalize_optional_phone(phone),
            email=normalize_optional_email(email),
        )

    def apply_changes(
        self,
        *,
        full_name: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
    ) -> None:
        """`None` keeps the current value; a blank phone/email clears it."""
        if full_name is not None:
            self.full_name = _require_full_name(full_name)
        if phone is not None:
            self.phone = normalize_optional_phone(phone)
        if email is not None:
            self.email = normalize_optional_email(email)
