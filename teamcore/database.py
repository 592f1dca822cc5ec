# teamcore/database.py

from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker, scoped_session
from teamcore.core.settings import settings

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    future=True,
    connect_args=connect_args,
)

SessionLocal = scoped_session(
    sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        expire_on_commit=False,
    )
)


def get_db() -> Generator[Session, None, None]:
    """
    One session per request, always closed afterwards.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
