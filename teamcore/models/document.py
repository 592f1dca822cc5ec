#teamcore/models/document.py
from datetime import datetime
import sqlalchemy as sa
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from teamcore.models.base import Base, new_id


class Document(Base):
    """
    Document: markdown page in a collection. A draft until published_at is set.
    """
    __tablename__ = "documents"

    id: str = Column(String(36), primary_key=True, default=new_id)
    team_id: str = Column(String(36), ForeignKey("teams.id"), nullable=False, index=True)
    collection_id: str = Column(String(36), ForeignKey("collections.id"), nullable=True, index=True)
    parent_document_id: str = Column(String(36), ForeignKey("documents.id"), nullable=True)
    title: str = Column(String(255), nullable=False)
    text: str = Column(Text, nullable=False, default="")
    version: int = Column(Integer, nullable=False, default=1)
    is_welcome: bool = Column(Boolean, default=False, server_default=sa.false(), nullable=False)
    user_id: str = Column(String(36), ForeignKey("users.id"), nullable=False)
    created_by_id: str = Column(String(36), ForeignKey("users.id"), nullable=False)
    last_modified_by_id: str = Column(String(36), ForeignKey("users.id"), nullable=False)
    published_at: datetime = Column(DateTime(timezone=True), nullable=True)
    created_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    deleted_at: datetime = Column(DateTime(timezone=True), nullable=True)

    team = relationship("Team", back_populates="documents")
    collection = relationship("Collection", back_populates="documents")

    @property
    def is_draft(self) -> bool:
        return self.published_at is None

    def __repr__(self):
        return f"<Document(id={self.id}, title='{self.title}', published={not self.is_draft})>"
