# database.py
"""
SQLAlchemy database connection and session management.

This module provides:
- Database engine configuration (SQLite by default, MS SQL Server via pymssql)
- Session factory for dependency injection
- Connection utilities

Usage:
     from database import SessionLocal, init_db
     from store import SqlStore

     init_db()
     store = SqlStore(SessionLocal)
"""
import logging
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

import config

logger = logging.getLogger(__name__)


def make_engine(url: str, echo: bool = False) -> Engine:
     """
     Create an engine suited to the backend behind ``url``.

     SQLite connections are shared across threads; an in-memory SQLite
     database uses a single static connection so every session sees it.
     """
     if url.startswith("sqlite"):
          poolclass = StaticPool if ":memory:" in url or url == "sqlite://" else None
          kwargs = {"poolclass": poolclass} if poolclass else {}
          return create_engine(
               url,
               connect_args={"check_same_thread": False},
               echo=echo,
               **kwargs,
          )

     return create_engine(
          url,
          poolclass=QueuePool,
          pool_size=5,
          max_overflow=10,
          pool_timeout=30,
          pool_recycle=1800,  # Recycle connections after 30 minutes
          echo=echo,
     )


def make_session_factory(bind: Engine) -> sessionmaker:
     return sessionmaker(
          bind=bind,
          autocommit=False,
          autoflush=False,
          expire_on_commit=False,
     )


# Create SQLAlchemy engine
engine = make_engine(config.DATABASE_URL, echo=config.SQL_ECHO)

# Session factory
SessionLocal = make_session_factory(engine)


def init_db(bind: Engine = engine) -> None:
     """
     Initialize database tables.

     Creates all tables defined in the models if they don't exist.
     For production, use Alembic migrations instead.
     """
     from models import Base
     Base.metadata.create_all(bind=bind)


def check_connection(bind: Engine = engine) -> bool:
     """
     Test database connectivity.

     Returns:
          bool: True if connection successful, False otherwise
     """
     try:
          with bind.connect() as conn:
               conn.execute(text("SELECT 1"))
          return True
     except Exception:
          logger.exception("Database connection failed")
          return False
