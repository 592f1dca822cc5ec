# teamcore/services/admins.py
import logging
from typing import List

from sqlalchemy.orm import Session

from teamcore.core.exceptions import InvariantViolation
from teamcore.crud.user import update_user
from teamcore.models.team import Team
from teamcore.models.user import User

logger = logging.getLogger("Teamcore.Admins")


def get_admins(db: Session, team: Team, lock: bool = False) -> List[User]:
    query = db.query(User).filter(User.team_id == team.id, User.is_admin == True)
    if lock:
        query = query.with_for_update()
    return query.all()


def add_admin(db: Session, team: Team, user: User) -> User:
    logger.info(f"Granting admin to user {user.id} in team {team.id}")
    return update_user(db, user, {"is_admin": True})


def remove_admin(db: Session, team: Team, user: User) -> User:
    """
    Demote `user` unless they are the team's last admin.

    The admin rows are locked while counting so two concurrent demotions cannot
    both see another admin and leave the team with none.

    Raises:
        InvariantViolation: no other admin would remain
    """
    admins = get_admins(db, team, lock=True)
    others = [admin for admin in admins if admin.id != user.id]
    if not others:
        db.rollback()
        logger.info(f"Refused to demote user {user.id}: last admin of team {team.id}")
        raise InvariantViolation("At least one admin is required")
    logger.info(f"Revoking admin from user {user.id} in team {team.id}")
    return update_user(db, user, {"is_admin": False})


def activate_user(db: Session, team: Team, user: User) -> User:
    """Lift a suspension."""
    logger.info(f"Activating user {user.id} in team {team.id}")
    return update_user(db, user, {"suspended_by_id": None, "suspended_at": None})
