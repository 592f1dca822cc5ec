#teamcore/crud/team.py
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from datetime import datetime, timezone
from typing import Callable, List, Optional
import logging

from teamcore.models.team import Team
from teamcore.models.collection import Collection
from teamcore.core.domains import validate_subdomain
from teamcore.core.exceptions import TeamError, TeamNotFound, ValidationError
from teamcore.core.settings import settings
from teamcore.services.avatars import externalize_avatar

logger = logging.getLogger("Teamcore.Team")

# Run in order by save_team before every commit of a team.
TEAM_PRE_SAVE_HOOKS: List[Callable[[Team], None]] = [externalize_avatar]

UPDATABLE_FIELDS = ("name", "subdomain", "domain", "avatar_url", "sharing", "guest_signin", "document_embeds")


def run_pre_save_hooks(team: Team) -> None:
    for hook in TEAM_PRE_SAVE_HOOKS:
        hook(team)


def save_team(db: Session, team: Team, run_hooks: bool = True) -> Team:
    """
    Run the pre-save hooks and commit the team.
    IntegrityError is re-raised untouched after rollback so callers can tell
    unique clashes from other failures.

    run_hooks=False is for writes that cannot touch avatar_url.
    """
    if run_hooks:
        run_pre_save_hooks(team)
    db.add(team)
    try:
        db.commit()
        db.refresh(team)
        return team
    except IntegrityError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error saving team {team.id}: {e}")
        raise TeamError(f"Database error while saving team: {e}")


def _clean_subdomain(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return validate_subdomain(value, settings.RESERVED_SUBDOMAINS)


def create_team(db: Session, data: dict) -> Team:
    """
    Create a team. Subdomain rules are checked before anything is written.
    """
    name = (data.get("name") or "").strip()
    if not name:
        raise ValidationError("Team name is required.")
    subdomain = _clean_subdomain(data.get("subdomain"))

    team = Team(
        name=name,
        subdomain=subdomain,
        domain=data.get("domain"),
        avatar_url=data.get("avatar_url"),
        sharing=data.get("sharing", True),
        guest_signin=data.get("guest_signin", True),
        document_embeds=data.get("document_embeds", True),
    )
    try:
        save_team(db, team)
    except IntegrityError as e:
        logger.error(f"Integrity error while creating team: {e}")
        raise ValidationError("Subdomain or domain is already in use.")
    logger.info(f"Created team '{team.name}' (ID: {team.id})")
    return team


def get_team(db: Session, team_id: str, include_deleted: bool = False) -> Team:
    """
    Get a team by id. Soft-deleted teams only with include_deleted=True.
    """
    query = db.query(Team).filter(Team.id == team_id)
    if not include_deleted:
        query = query.filter(Team.deleted_at.is_(None))
    team = query.first()
    if not team:
        raise TeamNotFound(f"Team with id={team_id} not found{' (or is deleted)' if not include_deleted else ''}.")
    return team


def get_team_by_subdomain(db: Session, subdomain: str, include_deleted: bool = False) -> Optional[Team]:
    query = db.query(Team).filter(Team.subdomain == subdomain.lower())
    if not include_deleted:
        query = query.filter(Team.deleted_at.is_(None))
    return query.first()


def get_all_teams(db: Session, include_deleted: bool = False) -> List[Team]:
    query = db.query(Team)
    if not include_deleted:
        query = query.filter(Team.deleted_at.is_(None))
    return query.order_by(Team.name).all()


def update_team(db: Session, team_id: str, data: dict) -> Team:
    """
    Update identity fields and policy flags. Validation happens before the team
    is touched, so a rejected update leaves it as it was.

    A subdomain can only be set while the team has none; afterwards it is
    never cleared or replaced.
    """
    team = get_team(db, team_id)
    changes = {k: v for k, v in data.items() if k in UPDATABLE_FIELDS}
    if "name" in changes:
        changes["name"] = (changes["name"] or "").strip()
        if not changes["name"]:
            raise ValidationError("Team name is required.")
    if "subdomain" in changes:
        if team.subdomain is not None:
            if changes["subdomain"] != team.subdomain:
                raise ValidationError("Subdomain cannot be changed once set.")
            del changes["subdomain"]
        elif changes["subdomain"] is None:
            del changes["subdomain"]
        else:
            changes["subdomain"] = _clean_subdomain(changes["subdomain"])

    for field, value in changes.items():
        setattr(team, field, value)
    team.updated_at = datetime.now(timezone.utc)
    try:
        save_team(db, team)
    except IntegrityError as e:
        logger.error(f"Integrity error while updating team {team_id}: {e}")
        raise ValidationError("Subdomain or domain is already in use.")
    logger.info(f"Updated team '{team.name}' (ID: {team.id})")
    return team


def delete_team(db: Session, team_id: str) -> bool:
    """
    Soft-delete: set the tombstone. Rows are never erased here.
    """
    team = get_team(db, team_id, include_deleted=True)
    if team.is_deleted:
        raise TeamError("Team already deleted.")
    team.deleted_at = datetime.now(timezone.utc)
    try:
        db.commit()
        logger.info(f"Soft-deleted team {team_id}")
        return True
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to soft-delete team {team_id}: {e}")
        raise TeamError("Database error while soft-deleting team.")


def restore_team(db: Session, team_id: str) -> bool:
    team = get_team(db, team_id, include_deleted=True)
    if not team.is_deleted:
        raise TeamError("Team is not deleted.")
    team.deleted_at = None
    try:
        db.commit()
        logger.info(f"Restored team {team_id}")
        return True
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to restore team {team_id}: {e}")
        raise TeamError("Database error while restoring team.")


def collection_ids(db: Session, team: Team, include_deleted: bool = False) -> List[str]:
    """
    Ids of the team's non-private collections.
    """
    query = db.query(Collection.id).filter(Collection.team_id == team.id, Collection.private == False)
    if not include_deleted:
        query = query.filter(Collection.deleted_at.is_(None))
    return [row.id for row in query.all()]
