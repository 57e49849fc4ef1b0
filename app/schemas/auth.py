from pydantic import BaseModel
from typing import Optional

# Missing fields are rejected by the services with a 400, not by parsing.

class UserRegister(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None

class UserLogin(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None

class MessageResponse(BaseModel):
    message: str
