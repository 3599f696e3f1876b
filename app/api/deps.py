"""
Request-scoped accessors for the components built in create_app().
"""

from fastapi import Request

from app.db.database import Database
from app.services.analytics_service import AnalyticsService
from app.services.student_repository import StudentRepository


def get_database(request: Request) -> Database:
    return request.app.state.db


def get_student_repository(request: Request) -> StudentRepository:
    return request.app.state.student_repository


def get_analytics_service(request: Request) -> AnalyticsService:
    return request.app.state.analytics_service
