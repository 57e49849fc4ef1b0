from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint
from sqlalchemy.sql import func

from ..core.database import Base

SLOT_CONSTRAINT = "uq_appointment_doctor_date_slot"

class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        # One booking per doctor, date and slot
        UniqueConstraint("doctor", "date", "slot", name=SLOT_CONSTRAINT),
    )

    id = Column(Integer, primary_key=True, index=True)

    # Appointment details
    patient_name = Column(String, nullable=False)
    doctor = Column(String, nullable=False)
    date = Column(String, nullable=False, index=True)
    slot = Column(String, nullable=False)

    # Owning account
    username = Column(String, nullable=False, index=True)

    # Tracking
    created_at = Column(DateTime, server_default=func.now())

    def __repr__(self):
        return f"<Appointment(id={self.id}, doctor='{self.doctor}', date='{self.date}', slot='{self.slot}')>"
