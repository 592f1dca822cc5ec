#teamcore/crud/user.py
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import Optional
import logging

from teamcore.models.user import User
from teamcore.core.exceptions import UserError, ValidationError

logger = logging.getLogger("Teamcore.User")


def create_user(db: Session, data: dict) -> User:
    """
    Create a team member. Membership checks belong to the caller.
    """
    name = (data.get("name") or "").strip()
    if not name:
        raise ValidationError("User name is required.")
    user = User(
        team_id=data["team_id"],
        name=name,
        email=data.get("email"),
        is_admin=data.get("is_admin", False),
    )
    db.add(user)
    try:
        db.commit()
        db.refresh(user)
        logger.info(f"Created user '{user.name}' (ID: {user.id}) in team {user.team_id}")
        return user
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Integrity error creating user '{name}': {e}")
        raise ValidationError("User with this email already exists.")
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating user '{name}': {e}")
        raise UserError("Database error while creating user.")


def get_user(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def update_user(db: Session, user: User, data: dict) -> User:
    for field, value in data.items():
        setattr(user, field, value)
    try:
        db.commit()
        db.refresh(user)
        return user
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating user {user.id}: {e}")
        raise UserError("Database error while updating user.")
