from datetime import date
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.cinema.domain.contact_normalizer import name_key


@attrs.define
class Movie:
    title: str
    duration_minutes: int
    release_date: date
    genre: Optional[str] = None
    id: Optional[int] = None
    version_id: Optional[int] = None

    @property
    def title_key(self) -> str:
        return name_key(self.title)

    @classmethod
    def create(
        cls,
        *,
        title: str,
        duration_minutes: int,
        release_date: date,
        genre: Optional[str] = None,
    ) -> 'Movie':
        title = (title or '').strip()
        if not title:
            raise DomainError('Movie title is required', 400)
        if duration_minutes <= 0:
            raise DomainError('Duration must be positive', 400)
        genre = genre.strip() if genre else None
        return cls(
            title=title,
            duration_minutes=duration_minutes,
            release_date=release_date,
            genre=genre or None,
        )
