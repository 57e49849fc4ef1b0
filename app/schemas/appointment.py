from pydantic import BaseModel
from typing import Optional

class AppointmentCreate(BaseModel):
    patient: Optional[str] = None
    doctor: Optional[str] = None
    date: Optional[str] = None
    slot: Optional[str] = None
    username: Optional[str] = None

class AppointmentResponse(BaseModel):
    patient: str
    doctor: str
    date: str
    slot: str
