import pytest
from datetime import datetime, timezone
from sqlalchemy.orm import Session

from teamcore.core.exceptions import TeamError, TeamNotFound, ValidationError
from teamcore.crud import team as crud_team
from teamcore.crud.collection import create_collection
from teamcore.models.team import Team as TeamModel
from teamcore.schemas.team import TeamRead, TeamUpdate
from teamcore.services.subdomains import provision_subdomain


def test_create_team_defaults(db: Session):
    team = crud_team.create_team(db, {"name": "  Acme  "})
    assert team.id is not None
    assert team.name == "Acme"
    assert team.subdomain is None
    assert team.sharing is True
    assert team.guest_signin is True
    assert team.document_embeds is True
    assert team.deleted_at is None

    db_team = db.query(TeamModel).filter(TeamModel.id == team.id).first()
    assert db_team is not None


def test_team_id_is_assigned_before_flush():
    assert TeamModel(name="Draft").id is not None


def test_create_team_requires_name(db: Session):
    with pytest.raises(ValidationError, match="Team name is required."):
        crud_team.create_team(db, {"name": "   "})


def test_create_team_validates_subdomain(db: Session):
    with pytest.raises(ValidationError, match="restricted word"):
        crud_team.create_team(db, {"name": "Acme", "subdomain": "admin"})
    assert db.query(TeamModel).count() == 0


def test_create_team_duplicate_subdomain(db: Session):
    crud_team.create_team(db, {"name": "Acme", "subdomain": "acme"})
    with pytest.raises(ValidationError, match="already in use"):
        crud_team.create_team(db, {"name": "Acme Two", "subdomain": "acme"})


def test_create_team_duplicate_domain(db: Session):
    crud_team.create_team(db, {"name": "Acme", "domain": "docs.acme.test"})
    with pytest.raises(ValidationError, match="already in use"):
        crud_team.create_team(db, {"name": "Acme Two", "domain": "docs.acme.test"})


def test_update_team_policy_flags(db: Session, team):
    updated = crud_team.update_team(db, team.id, {"sharing": False, "guest_signin": False, "document_embeds": False})
    assert updated.sharing is False
    assert updated.guest_signin is False
    assert updated.document_embeds is False


def test_update_team_ignores_unknown_fields(db: Session, team):
    crud_team.update_team(db, team.id, {"id": "hijack", "name": "Renamed"})
    assert crud_team.get_team(db, team.id).name == "Renamed"


def test_invalid_subdomain_update_leaves_team_unchanged(db: Session, team):
    with pytest.raises(ValidationError, match="Must be between 4 and 32 characters"):
        crud_team.update_team(db, team.id, {"name": "Renamed", "subdomain": "ab"})
    db.expire_all()
    reloaded = crud_team.get_team(db, team.id)
    assert reloaded.name == "Acme"
    assert reloaded.subdomain is None


@pytest.mark.parametrize("new_value", [None, "other", "acme1"])
def test_subdomain_cannot_be_changed_once_set(db: Session, team, new_value):
    provision_subdomain(db, team, "acme")
    with pytest.raises(ValidationError, match="Subdomain cannot be changed once set."):
        crud_team.update_team(db, team.id, {"name": "Renamed", "subdomain": new_value})
    db.expire_all()
    reloaded = crud_team.get_team(db, team.id)
    assert reloaded.name == "Acme"
    assert reloaded.subdomain == "acme"


def test_resending_current_subdomain_is_allowed(db: Session, team):
    provision_subdomain(db, team, "acme")
    updated = crud_team.update_team(db, team.id, {"name": "Renamed", "subdomain": "acme"})
    assert updated.name == "Renamed"
    assert updated.subdomain == "acme"


def test_create_team_rejects_trailing_newline_subdomain(db: Session):
    with pytest.raises(ValidationError, match="Must be only alphanumeric and dashes"):
        crud_team.create_team(db, {"name": "Acme", "subdomain": "acme\n"})
    assert crud_team.get_team_by_subdomain(db, "acme\n") is None


def test_soft_delete_hides_team(db: Session, team):
    assert crud_team.delete_team(db, team.id) is True

    with pytest.raises(TeamNotFound):
        crud_team.get_team(db, team.id)
    assert crud_team.get_team(db, team.id, include_deleted=True).deleted_at is not None
    assert team.id not in [t.id for t in crud_team.get_all_teams(db)]
    assert team.id in [t.id for t in crud_team.get_all_teams(db, include_deleted=True)]

    with pytest.raises(TeamError, match="Team already deleted."):
        crud_team.delete_team(db, team.id)


def test_restore_team(db: Session, team):
    crud_team.delete_team(db, team.id)
    assert crud_team.restore_team(db, team.id) is True
    assert crud_team.get_team(db, team.id).deleted_at is None
    with pytest.raises(TeamError, match="Team is not deleted."):
        crud_team.restore_team(db, team.id)


def test_get_team_by_subdomain(db: Session):
    team = crud_team.create_team(db, {"name": "Acme", "subdomain": "acme"})
    assert crud_team.get_team_by_subdomain(db, "ACME").id == team.id
    crud_team.delete_team(db, team.id)
    assert crud_team.get_team_by_subdomain(db, "acme") is None
    assert crud_team.get_team_by_subdomain(db, "acme", include_deleted=True).id == team.id


def test_collection_ids_skip_private_and_deleted(db: Session, team, admin):
    public = create_collection(db, {"team_id": team.id, "name": "Public", "created_by_id": admin.id})
    create_collection(db, {"team_id": team.id, "name": "Private", "created_by_id": admin.id, "private": True})
    gone = create_collection(db, {"team_id": team.id, "name": "Gone", "created_by_id": admin.id})
    gone.deleted_at = datetime.now(timezone.utc)
    db.commit()

    assert crud_team.collection_ids(db, team) == [public.id]
    assert sorted(crud_team.collection_ids(db, team, include_deleted=True)) == sorted([public.id, gone.id])


def test_save_team_runs_every_pre_save_hook(db: Session, team, monkeypatch):
    seen = []
    monkeypatch.setattr(crud_team, "TEAM_PRE_SAVE_HOOKS", [lambda t: seen.append(t.id)])
    crud_team.update_team(db, team.id, {"name": "Renamed"})
    assert seen == [team.id]


def test_team_read_schema_includes_derived_fields(db: Session, team):
    data = TeamRead.model_validate(team)
    assert data.id == team.id
    assert data.url == team.url
    assert data.logo_url == team.logo_url


def test_update_team_from_partial_schema(db: Session, team):
    payload = TeamUpdate(sharing=False, subdomain="acme").model_dump(exclude_unset=True)
    updated = crud_team.update_team(db, team.id, payload)
    assert updated.sharing is False
    assert updated.subdomain == "acme"
    assert updated.name == "Acme"
