from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.cinema.domain.contact_normalizer import normalize_seat_row


@attrs.define
class Seat:
    hall_id: int
    row: str
    number: int
    id: Optional[int] = None
    version_id: Optional[int] = None

    @property
    def label(self) -> str:
        return f'{self.row}-{self.number}'

    @classmethod
    def create(cls, *, hall_id: int, row: str, number: int) -> 'Seat':
        row = normalize_seat_row(row)
        if not row:
            raise DomainError('Row cannot be empty', 400)
        if number <= 0:
            raise DomainError('Seat number must be positive', 400)
        return cls(hall_id=hall_id, row=row, number=number)
