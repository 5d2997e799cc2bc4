from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.cinema.domain.contact_normalizer import name_key, normalize_hall_name


@attrs.define
class Hall:
    name: str
    capacity: int
    id: Optional[int] = None
    version_id: Optional[int] = None

    @property
    def name_key(self) -> str:
        return name_key(self.name)

    @classmethod
    def create(cls, *, name: str, capacity: int) -> 'Hall':
        hall = cls(name='', capacity=0)
        hall.apply_changes(name=name, capacity=capacity)
        return hall

    def apply_changes(self, *, name: Optional[str] = None, capacity: Optional[int] = None) -> None:
        if name is not None:
            name = normalize_hall_name(name)
            if not name:
                raise DomainError('Hall name is required', 400)
            self.name = name
        if capacity is not None:
            if capacity <= 0:
                raise DomainError('Hall capacity must be positive', 400)
            self.capacity = capacity
