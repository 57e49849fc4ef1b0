from fastapi import Depends
from sqlalchemy.orm import Session

from ..core.database import get_db
from ..core.config import settings
from ..services.account_service import AccountRegistry
from ..services.appointment_service import AppointmentLedger

def get_account_registry(db: Session = Depends(get_db)) -> AccountRegistry:
    """Account registry bound to the request's session and the admin credential."""
    return AccountRegistry(
        db,
        admin_username=settings.ADMIN_USERNAME,
        admin_password=settings.ADMIN_PASSWORD
    )

def get_appointment_ledger(db: Session = Depends(get_db)) -> AppointmentLedger:
    return AppointmentLedger(db)
