# teamcore/services/subdomains.py
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from teamcore.core.domains import is_repairable_by_suffix, subdomain_violation
from teamcore.core.exceptions import ProvisioningExhausted, ValidationError
from teamcore.core.settings import settings
from teamcore.crud.team import save_team
from teamcore.models.team import Team

logger = logging.getLogger("Teamcore.Subdomains")


def candidates(desired: str, max_attempts: int):
    """desired, desired1, desired2, ... up to max_attempts values."""
    yield desired
    for n in range(1, max_attempts):
        yield f"{desired}{n}"


def provision_subdomain(db: Session, team: Team, desired: str, max_attempts: Optional[int] = None) -> str:
    """
    Give `team` the first free variant of `desired` and return it.

    A team that already has a subdomain keeps it and nothing is written.
    Candidates that are reserved or too short are skipped; candidates another
    team already holds fail on the unique constraint, are rolled back and the
    next suffix is tried. Only the successful attempt is committed.

    Raises:
        ValidationError: `desired` breaks a rule no numeric suffix can fix
        ProvisioningExhausted: no candidate was accepted within max_attempts
    """
    if team.subdomain:
        return team.subdomain

    max_attempts = max_attempts or settings.SUBDOMAIN_MAX_ATTEMPTS
    reserved = settings.RESERVED_SUBDOMAINS
    if not is_repairable_by_suffix(desired, reserved):
        raise ValidationError(subdomain_violation(desired, reserved))

    attempts = 0
    for candidate in candidates(desired, max_attempts):
        if subdomain_violation(candidate, reserved):
            if not is_repairable_by_suffix(candidate, reserved):
                # suffixes only make it longer
                break
            attempts += 1
            continue
        attempts += 1

        team.subdomain = candidate
        try:
            # only the subdomain changes here, so the avatar hooks are skipped
            save_team(db, team, run_hooks=False)
        except IntegrityError:
            logger.info(f"Subdomain '{candidate}' is taken, trying next for team {team.id}")
            continue
        logger.info(f"Provisioned subdomain '{candidate}' for team {team.id}")
        return candidate

    logger.error(f"Could not provision subdomain from '{desired}' for team {team.id}")
    raise ProvisioningExhausted(f"No available subdomain for '{desired}' after {attempts} attempts.")
