"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict, Generic, TypeVar
from datetime import datetime
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class Subject(str, Enum):
    math = "Math"
    science = "Science"
    english = "English"
    history = "History"


# ============================================================
# ENVELOPE
# ============================================================

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Uniform response wrapper. Routes serialise it with exclude_none."""
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None
    error: Optional[str] = None


# ============================================================
# AUTH SCHEMAS
# ============================================================

class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

class AuthUser(BaseModel):
    username: str

class LoginResponse(BaseModel):
    token: str
    user: AuthUser


# ============================================================
# STUDENT SCHEMAS
# ============================================================

STUDENT_FIELDS = ("name", "email", "subject", "grade")

SUBJECT_ERROR = "Subject must be one of: " + ", ".join(s.value for s in Subject)

# Client-facing text per field; replaces pydantic's generic messages
FIELD_MESSAGES = {
    "name": "Name must be at least 2 characters",
    "email": "Valid email is required",
    "subject": SUBJECT_ERROR,
    "grade": "Grade must be between 0 and 100",
}


def _reject_bool(v):
    # JSON true/false would otherwise be coerced to 1/0
    if isinstance(v, bool):
        raise ValueError("Grade must be an integer")
    return v


class StudentCreate(BaseModel):
    name: str = Field(..., min_length=2)
    email: EmailStr
    subject: Subject
    grade: int = Field(..., ge=0, le=100)

    grade_not_bool = field_validator("grade", mode="before")(_reject_bool)


class StudentUpdate(BaseModel):
    """Sparse patch: only the fields the client sent are set (see model_fields_set)."""

    name: Optional[str] = Field(None, min_length=2)
    email: Optional[EmailStr] = None
    subject: Optional[Subject] = None
    grade: Optional[int] = Field(None, ge=0, le=100)

    grade_not_bool = field_validator("grade", mode="before")(_reject_bool)

    @field_validator(*STUDENT_FIELDS, mode="before")
    @classmethod
    def reject_null(cls, v):
        # Defaults are not validated, so this only fires for an explicit null
        if v is None:
            raise ValueError("Field may not be null")
        return v

    def changes(self) -> Dict[str, object]:
        """The supplied fields, with enums unwrapped to their stored value."""
        data = self.model_dump(mode="json")
        return {field: data[field] for field in STUDENT_FIELDS if field in self.model_fields_set}


class StudentResponse(BaseModel):
    id: int
    name: str
    email: str
    subject: Subject
    grade: int
    created_at: datetime


# ============================================================
# ANALYTICS SCHEMAS
# ============================================================

class AnalyticsResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_students: int
    average_grade_by_subject: Dict[str, float]
    recent_additions: List[StudentResponse]


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class HealthResponse(BaseModel):
    status: str
    database: str
