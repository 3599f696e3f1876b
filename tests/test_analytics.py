"""Tests for the analytics service."""
import pytest
from sqlalchemy import text

from app.core.exceptions import StoreError


def test_empty_roster(analytics):
    assert analytics.compute() == {
        "total_students": 0,
        "average_grade_by_subject": {},
        "recent_additions": [],
    }


def test_average_by_subject(repo, analytics):
    repo.create({"name": "Ana Lee", "email": "ana@x.com", "subject": "Math", "grade": 95})
    repo.create({"name": "Bo Kim", "email": "bo@x.com", "subject": "Math", "grade": 85})

    result = analytics.compute()

    assert result["total_students"] == 2
    assert result["average_grade_by_subject"] == {"Math": 90.0}


def test_subjects_without_students_are_omitted(repo, analytics, make_student):
    repo.create(make_student(subject="History", grade=70))

    averages = analytics.compute()["average_grade_by_subject"]
    assert set(averages) == {"History"}


def test_averages_round_to_two_places(repo, analytics, make_student):
    for grade in (1, 2, 2):
        repo.create(make_student(subject="Science", grade=grade))

    assert analytics.compute()["average_grade_by_subject"]["Science"] == 1.67


def test_recent_additions_capped_at_ten_newest_first(repo, analytics, make_student):
    ids = [repo.create(make_student())["id"] for _ in range(12)]

    result = analytics.compute()

    assert result["total_students"] == 12
    assert [s["id"] for s in result["recent_additions"]] == list(reversed(ids))[:10]


def test_reflects_current_rows(repo, analytics, make_student):
    low = repo.create(make_student(grade=50))
    repo.create(make_student(grade=100))
    repo.delete(low["id"])

    result = analytics.compute()
    assert result["total_students"] == 1
    assert result["average_grade_by_subject"] == {"Math": 100.0}


def test_store_failure(db, analytics):
    with db.session() as session:
        session.execute(text("DROP TABLE students"))

    with pytest.raises(StoreError):
        analytics.compute()
