from fastapi import APIRouter, Depends, status

from ...api.deps import get_account_registry
from ...services.account_service import AccountRegistry
from ...schemas.auth import UserRegister, UserLogin, MessageResponse

router = APIRouter(tags=["Authentication"])

@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    registry: AccountRegistry = Depends(get_account_registry)
):
    """Register a new user."""
    registry.register(user_data.username, user_data.password)
    return {"message": "Registered successfully"}

@router.post("/login", response_model=MessageResponse)
async def login(
    login_data: UserLogin,
    registry: AccountRegistry = Depends(get_account_registry)
):
    """Check credentials. No token is issued."""
    registry.authenticate(login_data.username, login_data.password, login_data.role)
    return {"message": "Login ok"}
