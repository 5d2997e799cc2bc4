from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field


class CreateCustomerRequest(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=120)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None

    class Config:
        json_schema_extra = {
            'example': {
                'full_name': 'Layla Hassan',
                'phone': '050 123 4567',
                'email': 'Layla@Example.com',
            }
        }


class UpdateCustomerRequest(BaseModel):
    """Omitted fields stay unchanged; an empty phone/email clears it."""

    full_name: Optional[str] = Field(None, min_length=1, max_length=120)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr | Literal['']] = None


class CustomerResponse(BaseModel):
    id: int
    full_name: str
    phone: Optional[str]
    email: Optional[str]
    version_id: int
