from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import Optional
import logging
import secrets

from ..models.user import User, UserRole
from ..core.exceptions import ValidationError, ConflictError, AuthError, InternalError

logger = logging.getLogger(__name__)

class AccountRegistry:
    def __init__(self, db: Session, admin_username: str, admin_password: str):
        self.db = db
        self.admin_username = admin_username
        self.admin_password = admin_password

    def register(self, username: Optional[str], password: Optional[str]) -> User:
        """Register a new user with the ``user`` role."""
        if not username or not password:
            raise ValidationError("Username and password required")

        logger.info("Registering user %s", username)

        try:
            # Check if user already exists
            existing_user = self.db.query(User).filter(
                User.username == username
            ).first()

            if existing_user:
                raise ConflictError("Username already exists")

            new_user = User(
                username=username,
                password=password,
                role=UserRole.USER.value
            )

            self.db.add(new_user)
            self.db.commit()
            self.db.refresh(new_user)
        except IntegrityError:
            # Lost a race with a concurrent registration of the same username
            self.db.rollback()
            raise ConflictError("Username already exists")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Register error: {str(e)}")
            raise InternalError("Server error while registering")

        return new_user

    def authenticate(
        self,
        username: Optional[str],
        password: Optional[str],
        role: Optional[str] = None
    ) -> None:
        """Check credentials; raises AuthError when they do not match.

        The admin role is checked against the configured credential only and
        never against stored users. Nothing is issued on success.
        """
        role = role or UserRole.USER.value

        if role == UserRole.ADMIN.value:
            if not self._is_admin_credential(username, password):
                logger.warning("Rejected admin login for %s", username)
                raise AuthError("Invalid admin credentials")
            return

        if not username or not password:
            raise AuthError("Invalid credentials")

        try:
            user = self.db.query(User).filter(
                User.username == username,
                User.password == password,
                User.role == role
            ).first()
        except SQLAlchemyError as e:
            logger.error(f"Login error: {str(e)}")
            raise InternalError("Server error while logging in")

        if not user:
            raise AuthError("Invalid credentials")

    def _is_admin_credential(self, username: Optional[str], password: Optional[str]) -> bool:
        if not self.admin_password or not username or not password:
            return False
        username_ok = secrets.compare_digest(username.encode(), self.admin_username.encode())
        password_ok = secrets.compare_digest(password.encode(), self.admin_password.encode())
        return username_ok and password_ok
