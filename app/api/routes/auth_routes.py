"""
Authentication Routes

POST /auth/login - Login and get JWT token
"""

import logging

from fastapi import APIRouter, Depends

from app.api.deps import get_database
from app.core.auth import TokenService, get_token_service, verify_password
from app.core.exceptions import UnauthorizedException
from app.db.database import Database
from app.schemas.schemas import ApiResponse, AuthUser, LoginRequest, LoginResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=ApiResponse[LoginResponse], response_model_exclude_none=True)
def login(
    request: LoginRequest,
    db: Database = Depends(get_database),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Login and receive JWT access token (valid for 24 hours).

    Include token in requests: Authorization: Bearer <token>
    """
    rows = db.execute_raw_sql(
        "SELECT username, password_hash FROM users WHERE username = :username",
        {"username": request.username}
    )

    if not rows or not verify_password(request.password, rows[0]["password_hash"]):
        logger.warning(f"Failed login attempt for '{request.username}'")
        raise UnauthorizedException("Invalid username or password")

    username = rows[0]["username"]
    logger.info(f"User '{username}' logged in")

    return ApiResponse(
        data=LoginResponse(token=tokens.issue(username), user=AuthUser(username=username)),
        message="Login successful"
    )
