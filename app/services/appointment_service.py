from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import List, Optional
import logging

from ..models.appointment import Appointment
from ..core.exceptions import ValidationError, ConflictError, InternalError

logger = logging.getLogger(__name__)

def sort_order(dialect: str) -> list:
    """Date then slot, ascending, compared byte by byte."""
    date, slot = Appointment.date, Appointment.slot
    # SQLite compares with BINARY already and has no "C" collation
    if dialect == "postgresql":
        date, slot = date.collate("C"), slot.collate("C")
    return [date.asc(), slot.asc()]

class AppointmentLedger:
    def __init__(self, db: Session):
        self.db = db

    def book(
        self,
        patient_name: Optional[str],
        doctor: Optional[str],
        date: Optional[str],
        slot: Optional[str],
        username: Optional[str]
    ) -> Appointment:
        """Book a doctor, date and slot combination.

        The lookup below only gives an early answer. The unique constraint on
        (doctor, date, slot) decides, so a concurrent booking that slips past
        the lookup is rejected by the insert and reported the same way.
        """
        if not all((patient_name, doctor, date, slot, username)):
            raise ValidationError("All fields required")

        try:
            if self._slot_taken(doctor, date, slot):
                raise ConflictError("Slot already booked")

            appointment = Appointment(
                patient_name=patient_name,
                doctor=doctor,
                date=date,
                slot=slot,
                username=username
            )
            self.db.add(appointment)
            self.db.commit()
            self.db.refresh(appointment)
        except IntegrityError:
            self.db.rollback()
            logger.info("Slot %s %s %s taken by a concurrent booking", doctor, date, slot)
            raise ConflictError("Slot already booked")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Appointment error: {str(e)}")
            raise InternalError("Server error while booking")

        logger.info("Booked %s on %s at %s for %s", doctor, date, slot, username)
        return appointment

    def list_appointments(self, username: Optional[str] = None) -> List[dict]:
        """List appointments sorted by date then slot.

        With a username only that user's bookings are returned. Items are
        shaped as ``{patient, doctor, date, slot}`` either way.
        """
        query = self.db.query(
            Appointment.patient_name,
            Appointment.doctor,
            Appointment.date,
            Appointment.slot
        )
        if username:
            query = query.filter(Appointment.username == username)

        try:
            dialect = self.db.get_bind().dialect.name
            rows = query.order_by(*sort_order(dialect)).all()
        except SQLAlchemyError as e:
            logger.error(f"Fetch error: {str(e)}")
            raise InternalError("Server error while fetching")

        return [
            {"patient": row.patient_name, "doctor": row.doctor, "date": row.date, "slot": row.slot}
            for row in rows
        ]

    def _slot_taken(self, doctor: str, date: str, slot: str) -> bool:
        return self.db.query(Appointment.id).filter(
            Appointment.doctor == doctor,
            Appointment.date == date,
            Appointment.slot == slot
        ).first() is not None
