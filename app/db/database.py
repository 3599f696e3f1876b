import logging
from contextlib import contextmanager

from sqlalchemy import (
    Column, DateTime, Integer, MetaData, String, Table, create_engine, func, text
)
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.auth import hash_password

logger = logging.getLogger(__name__)

metadata = MetaData()

students = Table(
    "students",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(200), nullable=False),
    Column("email", String(320), nullable=False, unique=True, index=True),
    Column("subject", String(20), nullable=False, index=True),
    Column("grade", Integer, nullable=False),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("username", String(100), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=False),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)


def _engine_options(url: str) -> dict:
    if not url.startswith("sqlite"):
        # pool_size=5: maintain 5 connections ready
        # max_overflow=10: allow 10 extra connections under load
        return {"pool_size": 5, "max_overflow": 10, "pool_pre_ping": True}

    options = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:") or ":memory:" in url:
        # An in-memory database lives as long as its connection; share one
        options["poolclass"] = StaticPool
    return options


class Database:
    """
    Handle on the relational store.

    One instance per application; it is built from Settings and handed to
    every service that needs the store.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.engine = create_engine(url, echo=echo, **_engine_options(url))
        # Session factory
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @contextmanager
    def session(self):
        """
        Context manager for database sessions.
        Usage:
            with db.session() as session:
                session.execute(text("SELECT * FROM students"))
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def execute_raw_sql(self, sql: str, params: dict = None) -> list:
        """
        Execute raw SQL and return results as list of dicts.
        """
        with self.session() as session:
            result = session.execute(text(sql), params or {})
            return [dict(row) for row in result.mappings().all()]

    def init_schema(self, admin_username: str = None, admin_password: str = None) -> None:
        """Create missing tables and seed the bootstrap account into an empty users table."""
        metadata.create_all(bind=self.engine)
        logger.info("Database schema ready")

        if not admin_username or not admin_password:
            return

        with self.session() as session:
            count = session.execute(text("SELECT COUNT(*) FROM users")).scalar()
            if count:
                return
            session.execute(
                text("INSERT INTO users (username, password_hash) VALUES (:username, :password_hash)"),
                {"username": admin_username, "password_hash": hash_password(admin_password)}
            )
        logger.info(f"Seeded bootstrap account '{admin_username}'")

    def test_connection(self) -> bool:
        """
        Test if the store is reachable.
        Returns True if connection successful, False otherwise.
        """
        try:
            with self.session() as session:
                row = session.execute(text("SELECT 1 AS test")).fetchone()
                return row[0] == 1
        except Exception as e:
            logger.error(f"Database connection failed: {e}")
            return False

    def dispose(self) -> None:
        self.engine.dispose()
