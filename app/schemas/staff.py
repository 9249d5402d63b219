from typing import Optional

from app.schemas.base import PayloadModel

class StaffBase(PayloadModel):
    name: Optional[str] = None
    dni: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None

class StaffCreate(StaffBase):
    pass

class StaffUpdate(StaffBase):
    pass
