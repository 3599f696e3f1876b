"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- TokenService: JWT issue/verify with a fixed validity window
- get_current_user: FastAPI dependency guarding protected routes
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from fastapi.security.utils import get_authorization_scheme_param
from jose import JWTError, jwt
from passlib.context import CryptContext

from app.core.exceptions import ForbiddenException, UnauthorizedException

logger = logging.getLogger(__name__)

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token extractor; missing credentials are turned into a 401 below
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


class TokenService:
    """
    Issues and verifies signed identity tokens.

    Tokens carry only the username and expire a fixed time after issue.
    There is no revocation list: a token with a valid signature is accepted
    until it expires, even after the client has logged out.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 1440,
        leeway_seconds: int = 30,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = timedelta(minutes=expire_minutes)
        self.leeway_seconds = leeway_seconds

    @classmethod
    def from_settings(cls, settings) -> "TokenService":
        return cls(
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            expire_minutes=settings.jwt_expire_minutes,
            leeway_seconds=settings.jwt_leeway_seconds,
        )

    def issue(self, username: str, issued_at: Optional[datetime] = None) -> str:
        """Create JWT access token for `username`."""
        issued_at = issued_at or datetime.now(timezone.utc)
        to_encode = {
            "username": username,
            "iat": issued_at,
            "exp": issued_at + self.expires_delta,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> Optional[dict]:
        """Decode and verify JWT token. Returns None when invalid or expired."""
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"leeway": self.leeway_seconds},
            )
        except JWTError:
            return None

    def verify(self, token: str) -> Optional[str]:
        """Return the username the token was issued for, or None."""
        payload = self.decode(token)
        if not payload:
            return None
        username = payload.get("username")
        if not isinstance(username, str) or not username:
            return None
        return username


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def authenticate(request: Request, token: Optional[str]) -> dict:
    """Resolve a bearer token to the user, or raise 401 (missing) / 403 (invalid)."""
    if not token:
        raise UnauthorizedException("Access token required")

    username = get_token_service(request).verify(token)
    if username is None:
        logger.warning(f"Rejected token on {request.method} {request.url.path}")
        raise ForbiddenException("Invalid or expired token")

    user = {"username": username}
    request.state.user = user
    return user


def bearer_token(request: Request) -> Optional[str]:
    """Token from `Authorization: Bearer <token>`, read straight off the headers."""
    scheme, credentials = get_authorization_scheme_param(request.headers.get("Authorization"))
    if scheme.lower() != "bearer" or not credentials:
        return None
    return credentials


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> dict:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @router.get("/protected")
        def route(user: dict = Depends(get_current_user)):
            return user
    """
    return authenticate(request, credentials.credentials if credentials else None)
