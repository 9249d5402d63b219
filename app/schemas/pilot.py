from typing import Optional
from pydantic import EmailStr

from app.schemas.base import PayloadModel

class PilotBase(PayloadModel):
    name: Optional[str] = None
    surname: Optional[str] = None
    dni: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    motorcycle_experience: Optional[str] = None
    driving_level: Optional[str] = None
    track_experience: Optional[str] = None
    is_representative: Optional[bool] = None
    pilot_number: Optional[int] = None

class PilotCreate(PilotBase):
    pass

class PilotUpdate(PilotBase):
    pass
