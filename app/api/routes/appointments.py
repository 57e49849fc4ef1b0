from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional

from ...api.deps import get_appointment_ledger
from ...services.appointment_service import AppointmentLedger
from ...schemas.auth import MessageResponse
from ...schemas.appointment import AppointmentCreate, AppointmentResponse

router = APIRouter(prefix="/appointments", tags=["Appointments"])

@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def book_appointment(
    appointment: AppointmentCreate,
    ledger: AppointmentLedger = Depends(get_appointment_ledger)
):
    """Book a doctor, date and slot."""
    ledger.book(
        patient_name=appointment.patient,
        doctor=appointment.doctor,
        date=appointment.date,
        slot=appointment.slot,
        username=appointment.username
    )
    return {"message": "Appointment booked"}

@router.get("", response_model=List[AppointmentResponse])
async def list_appointments(
    username: Optional[str] = Query(None),
    ledger: AppointmentLedger = Depends(get_appointment_ledger)
):
    """List appointments, optionally only those of one user."""
    return ledger.list_appointments(username)
