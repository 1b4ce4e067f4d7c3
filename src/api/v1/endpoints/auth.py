from fastapi import APIRouter
from loguru import logger

from src.schemas.schemas import LoginRequest, LoginResponse
from src.services.auth_service import verify_admin_password

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest) -> LoginResponse:
    """Check the admin password. Nothing is issued; admin calls resend it."""
    verify_admin_password(body.password)
    logger.info("Admin password accepted")
    return LoginResponse(authenticated=True)
