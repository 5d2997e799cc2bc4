from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class TicketRequest(BaseModel):
    showtime_id: int = Field(..., gt=0)
    seat_id: int = Field(..., gt=0)
    customer_id: int = Field(..., gt=0)
    purchased_at: Optional[datetime] = None

    class Config:
        json_schema_extra = {'example': {'showtime_id': 1, 'seat_id': 5, 'customer_id': 3}}


class TicketResponse(BaseModel):
    id: int
    showtime_id: int
    seat_id: int
    customer_id: int
    purchased_at: datetime
    version_id: int


class TicketListingResponse(BaseModel):
    id: int
    showtime_id: int
    seat_id: int
    customer_id: int
    movie_title: str
    hall_name: str
    seat_label: str
    customer_name: str
    purchased_at: datetime
