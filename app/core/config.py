from pydantic_settings import BaseSettings
from typing import Optional, List
import os

class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Appointment Booking Service"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    TESTING: bool = os.getenv("TESTING", "0").lower() in ("1", "true", "t", "yes", "y")

    # Database connection string, required at startup
    DATABASE_URL: Optional[str] = None

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # Out-of-band administrator credential, never stored in the users table
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "Admin@123"

    # CORS
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5000", "http://testserver"]
    ALLOWED_HOSTS: List[str] = ["localhost", "127.0.0.1", "*.localhost", "testserver"]

    # Directory with index.html, css and js for the booking page
    STATIC_DIR: Optional[str] = None

    @property
    def database_backend(self) -> str:
        """Human readable name of the configured database."""
        url = self.DATABASE_URL or ""
        if url.startswith("postgresql"):
            return "PostgreSQL"
        if url.startswith("sqlite"):
            return "SQLite"
        return "Unknown"

    class Config:
        env_file = ".env"
        case_sensitive = True

# Create settings instance
settings = Settings()
