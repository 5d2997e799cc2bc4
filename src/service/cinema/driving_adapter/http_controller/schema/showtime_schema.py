from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class ShowtimeRequest(BaseModel):
    movie_id: int = Field(..., gt=0)
    hall_id: int = Field(..., gt=0)
    starts_at: datetime
    price: Decimal = Field(..., ge=0, le=200, decimal_places=2)

    class Config:
        json_schema_extra = {
            'example': {
                'movie_id': 1,
                'hall_id': 1,
                'starts_at': '2025-03-20T19:30:00Z',
                'price': '45.00',
            }
        }


class ShowtimeResponse(BaseModel):
    id: int
    movie_id: int
    hall_id: int
    starts_at: datetime
    price: Decimal
    version_id: int


class ShowtimeListingResponse(BaseModel):
    id: int
    movie_id: int
    movie_title: str
    hall_id: int
    hall_name: str
    starts_at: datetime
    price: Decimal
