#teamcore/models/user.py
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from teamcore.models.base import Base, new_id


class User(Base):
    """
    User: a member of exactly one team. Admin flag and suspension markers live here.
    """
    __tablename__ = "users"

    id: str = Column(String(36), primary_key=True, default=new_id)
    team_id: str = Column(String(36), ForeignKey("teams.id"), nullable=False, index=True, doc="Team")
    name: str = Column(String(255), nullable=False, doc="Display name")
    email: str = Column(String(255), unique=True, nullable=True, index=True, doc="Email")
    is_admin: bool = Column(Boolean, default=False, nullable=False, index=True, doc="Team administrator")
    suspended_by_id: str = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, doc="Suspended by (user_id)")
    suspended_at: datetime = Column(DateTime(timezone=True), nullable=True, doc="Suspension time")
    created_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    team = relationship("Team", back_populates="users", foreign_keys=[team_id])
    suspended_by = relationship("User", remote_side=[id])

    @property
    def is_suspended(self) -> bool:
        return self.suspended_at is not None

    def __repr__(self):
        return f"<User(id={self.id}, name='{self.name}', team_id={self.team_id}, admin={self.is_admin})>"
