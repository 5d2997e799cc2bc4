from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, Field


class MovieRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=150, pattern=r'\S')
    genre: Optional[str] = Field(None, max_length=50)
    duration_minutes: int = Field(..., ge=1, le=210)
    release_date: date

    class Config:
        json_schema_extra = {
            'example': {
                'title': 'The Long Night',
                'genre': 'Drama',
                'duration_minutes': 128,
                'release_date': '2025-03-14',
            }
        }


class MovieDetailsRequest(BaseModel):
    """Everything but the title, for updates addressed by title."""

    genre: Optional[str] = Field(None, max_length=50)
    duration_minutes: int = Field(..., ge=1, le=210)
    release_date: date


class PatchMovieRequest(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=150, pattern=r'\S')
    genre: Optional[str] = Field(None, max_length=50)
    duration_minutes: Optional[int] = Field(None, ge=1, le=210)
    release_date: Optional[date] = None

    def changes(self) -> dict[str, Any]:
        """Fields present in the request; only `genre` may be explicitly nulled."""
        return {
            name: value
            for name, value in self.model_dump(exclude_unset=True).items()
            if value is not None or name == 'genre'
        }


class MovieResponse(BaseModel):
    id: int
    title: str
    genre: Optional[str]
    duration_minutes: int
    release_date: date
    version_id: int
