#teamcore/models/team.py
from datetime import datetime
import sqlalchemy as sa
from sqlalchemy import Column, String, DateTime, Boolean, func
from sqlalchemy.orm import relationship
from teamcore.models.base import Base, new_id


class Team(Base):
    """
    Team: a tenant of the workspace. Owns identity (name, subdomain, custom domain),
    branding (avatar) and policy flags. Deletion is a tombstone in deleted_at.

    `url` and `logo_url` are computed on every read and never stored.
    """
    __tablename__ = "teams"

    id: str = Column(String(36), primary_key=True, default=new_id, doc="UUID")
    name: str = Column(String(255), nullable=True, doc="Display name")
    subdomain: str = Column(String(32), nullable=True, unique=True, index=True, doc="Multi-tenant subdomain")
    domain: str = Column(String(255), nullable=True, unique=True, doc="Custom domain")
    avatar_url: str = Column(String(1024), nullable=True, doc="Avatar URL")
    sharing: bool = Column(Boolean, default=True, server_default=sa.true(), nullable=False, doc="Public sharing allowed")
    guest_signin: bool = Column(Boolean, default=True, server_default=sa.true(), nullable=False, doc="Guest email sign-in allowed")
    document_embeds: bool = Column(Boolean, default=True, server_default=sa.true(), nullable=False, doc="Document embeds allowed")
    created_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    deleted_at: datetime = Column(DateTime(timezone=True), nullable=True, index=True, doc="Soft-delete tombstone")

    users = relationship("User", back_populates="team", foreign_keys="User.team_id", lazy="dynamic")
    collections = relationship("Collection", back_populates="team", lazy="dynamic")
    documents = relationship("Document", back_populates="team", lazy="dynamic")

    def __init__(self, **kwargs):
        # hooks need the id before the first flush
        kwargs.setdefault("id", new_id())
        super().__init__(**kwargs)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def url(self) -> str:
        from teamcore.core.settings import settings
        from teamcore.services.urls import team_url
        return team_url(self.domain, self.subdomain, settings.URL, settings.SUBDOMAINS_ENABLED)

    @property
    def logo_url(self) -> str:
        from teamcore.services.urls import team_logo_url
        return team_logo_url(self)

    def __repr__(self):
        return f"<Team(id={self.id}, name='{self.name}', subdomain='{self.subdomain}')>"
