#teamcore/models/collection.py
from datetime import datetime
import sqlalchemy as sa
from sqlalchemy import Column, String, Text, Boolean, DateTime, JSON, ForeignKey, func
from sqlalchemy.orm import relationship
from teamcore.models.base import Base, new_id


class Collection(Base):
    """
    Collection: a group of documents inside a team.
    document_structure lists published documents in publish order.
    """
    __tablename__ = "collections"

    DEFAULT_SORT = {"field": "index", "direction": "asc"}

    id: str = Column(String(36), primary_key=True, default=new_id)
    team_id: str = Column(String(36), ForeignKey("teams.id"), nullable=False, index=True)
    name: str = Column(String(255), nullable=False)
    description: str = Column(Text, nullable=True)
    created_by_id: str = Column(String(36), ForeignKey("users.id"), nullable=False)
    sort: dict = Column(JSON, nullable=False, default=lambda: dict(Collection.DEFAULT_SORT))
    private: bool = Column(Boolean, default=False, server_default=sa.false(), nullable=False)
    document_structure: list = Column(JSON, nullable=False, default=lambda: [])
    created_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    deleted_at: datetime = Column(DateTime(timezone=True), nullable=True)

    team = relationship("Team", back_populates="collections")
    documents = relationship("Document", back_populates="collection", lazy="dynamic")

    def __repr__(self):
        return f"<Collection(id={self.id}, name='{self.name}', team_id={self.team_id})>"
