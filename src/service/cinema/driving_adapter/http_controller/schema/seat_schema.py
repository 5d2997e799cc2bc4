from pydantic import BaseModel, Field


class SeatRequest(BaseModel):
    hall_id: int = Field(..., gt=0)
    row: str = Field(..., min_length=1, max_length=10, pattern=r'\S')
    number: int = Field(..., ge=1, le=250)

    class Config:
        json_schema_extra = {'example': {'hall_id': 1, 'row': 'b', 'number': 7}}


class SeatResponse(BaseModel):
    id: int
    hall_id: int
    row: str
    number: int
    version_id: int


class SeatListingResponse(BaseModel):
    id: int
    hall_id: int
    hall_name: str
    row: str
    number: int
