"""
Student Routes (all require a bearer token)

GET /students?subject= - List students, newest first
POST /students - Create student
PUT /students/{student_id} - Update any subset of fields
DELETE /students/{student_id} - Delete student
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from app.api.deps import get_student_repository
from app.core.auth import get_current_user
from app.schemas.schemas import ApiResponse, StudentCreate, StudentResponse, StudentUpdate, Subject
from app.services.student_repository import StudentRepository

router = APIRouter(
    prefix="/students",
    tags=["Students"],
    dependencies=[Depends(get_current_user)]
)


@router.get("", response_model=ApiResponse[List[StudentResponse]], response_model_exclude_none=True)
def list_students(
    subject: Optional[Subject] = Query(None, description="Only students taking this subject"),
    repo: StudentRepository = Depends(get_student_repository),
):
    """Get all students ordered by creation time, newest first."""
    students = repo.list(subject)
    return ApiResponse(data=students, message=f"Retrieved {len(students)} students")


@router.post(
    "",
    response_model=ApiResponse[StudentResponse],
    response_model_exclude_none=True,
    status_code=201
)
def create_student(data: StudentCreate, repo: StudentRepository = Depends(get_student_repository)):
    """
    Create a student.

    - **name**: at least 2 characters
    - **email**: valid and unique
    - **subject**: Math, Science, English or History
    - **grade**: integer 0-100
    """
    student = repo.create(data)
    return ApiResponse(data=student, message="Student created successfully")


@router.put(
    "/{student_id}",
    response_model=ApiResponse[StudentResponse],
    response_model_exclude_none=True
)
def update_student(
    student_id: int,
    data: StudentUpdate,
    repo: StudentRepository = Depends(get_student_repository),
):
    """Update student. Only provided fields are validated and changed."""
    student = repo.update(student_id, data)
    return ApiResponse(data=student, message="Student updated successfully")


@router.delete("/{student_id}", response_model=ApiResponse[None], response_model_exclude_none=True)
def delete_student(student_id: int, repo: StudentRepository = Depends(get_student_repository)):
    """Delete student."""
    repo.delete(student_id)
    return ApiResponse(message="Student deleted successfully")
