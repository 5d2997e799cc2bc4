from typing import Optional

from pydantic import BaseModel, Field


class CreateHallRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=10, pattern=r'\S')
    capacity: int = Field(..., ge=1, le=250)

    class Config:
        json_schema_extra = {'example': {'name': 'Hall A', 'capacity': 120}}


class UpdateHallRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=10, pattern=r'\S')
    capacity: Optional[int] = Field(None, ge=1, le=250)


class HallResponse(BaseModel):
    id: int
    name: str
    capacity: int
    version_id: int
