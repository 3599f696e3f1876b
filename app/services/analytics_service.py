"""
Analytics Service - derived roster statistics, computed on demand.

Nothing here is stored; every call reads the students table as it is now.
"""

import logging

from sqlalchemy import DateTime, text
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import StoreError
from app.db.database import Database
from app.services.student_repository import STUDENT_COLUMNS

logger = logging.getLogger(__name__)

RECENT_LIMIT = 10


class AnalyticsService:

    def __init__(self, db: Database, recent_limit: int = RECENT_LIMIT):
        self.db = db
        self.recent_limit = recent_limit

    def compute(self) -> dict:
        """
        Total count, per-subject average grade and the most recent additions.

        Subjects without students are absent from the averages rather than
        reported as zero.
        """
        try:
            with self.db.session() as session:
                total = session.execute(text("SELECT COUNT(*) FROM students")).scalar()

                averages = session.execute(text("""
                    SELECT subject, AVG(grade) AS average
                    FROM students
                    GROUP BY subject
                    ORDER BY subject
                """)).fetchall()

                recent = session.execute(
                    text(f"""
                        SELECT {STUDENT_COLUMNS} FROM students
                        ORDER BY created_at DESC, id DESC
                        LIMIT :limit
                    """).columns(created_at=DateTime),
                    {"limit": self.recent_limit}
                ).mappings().all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to compute analytics: {e}")
            raise StoreError("Failed to retrieve analytics")

        return {
            "total_students": total or 0,
            "average_grade_by_subject": {
                subject: round(float(average), 2) for subject, average in averages
            },
            "recent_additions": [dict(row) for row in recent],
        }
