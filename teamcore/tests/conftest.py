import os
from typing import Generator
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

# Environment must be in place BEFORE teamcore.core.settings is imported.
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["URL"] = "https://app.example.com/"
os.environ["SUBDOMAINS_ENABLED"] = "false"
os.environ["AWS_S3_UPLOAD_BUCKET_URL"] = "https://s3.example.com"
os.environ["AWS_S3_UPLOAD_BUCKET_NAME"] = "uploads"

# Registers every model on Base.metadata
import teamcore.models
from teamcore.models.base import Base
from teamcore.crud.team import create_team
from teamcore.crud.user import create_user

STORAGE_ENDPOINT = "https://s3.example.com/uploads"


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Fresh in-memory database per test. Code under test commits and rolls back
    freely, so each test gets its own engine instead of a wrapping transaction.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)
    session = TestingSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(autouse=True)
def fake_storage():
    """
    Keeps the avatar pre-save hook away from the network. Tests that care
    configure upload_from_url themselves.
    """
    storage = MagicMock()
    storage.public_endpoint.return_value = STORAGE_ENDPOINT
    storage.upload_from_url.return_value = None
    with patch("teamcore.services.avatars.get_storage", return_value=storage):
        yield storage


@pytest.fixture
def team(db: Session):
    return create_team(db, {"name": "Acme"})


@pytest.fixture
def admin(db: Session, team):
    return create_user(db, {"team_id": team.id, "name": "Ada Admin", "email": "ada@acme.test", "is_admin": True})


@pytest.fixture
def member(db: Session, team):
    return create_user(db, {"team_id": team.id, "name": "Max Member", "email": "max@acme.test"})
