"""
Schemas module - Request/Response schemas for API endpoints.
"""
from app.schemas.schemas import (
    AnalyticsResponse, ApiResponse, LoginRequest, LoginResponse,
    StudentCreate, StudentResponse, StudentUpdate, Subject
)

__all__ = [
    "AnalyticsResponse",
    "ApiResponse",
    "LoginRequest",
    "LoginResponse",
    "StudentCreate",
    "StudentResponse",
    "StudentUpdate",
    "Subject"
]
