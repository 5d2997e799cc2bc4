from datetime import datetime
from decimal import Decimal
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError


@attrs.define
class Showtime:
    movie_id: int
    hall_id: int
    starts_at: datetime
    price: Decimal
    id: Optional[int] = None
    version_id: Optional[int] = None

    @classmethod
    def create(
        cls, *, movie_id: int, hall_id: int, starts_at: datetime, price: Decimal
    ) -> 'Showtime':
        price = Decimal(price).quantize(Decimal('0.01'))
        if price < 0:
            raise DomainError('Price cannot be negative', 400)
        return cls(movie_id=movie_id, hall_id=hall_id, starts_at=starts_at, price=price)
