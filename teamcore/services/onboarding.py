# teamcore/services/onboarding.py
import logging
from pathlib import Path

from sqlalchemy.orm import Session

from teamcore.core.exceptions import OnboardingTemplateError
from teamcore.core.settings import settings
from teamcore.crud.collection import create_collection
from teamcore.crud.document import create_document, publish_document
from teamcore.models.collection import Collection
from teamcore.models.team import Team

logger = logging.getLogger("Teamcore.Onboarding")

WELCOME_COLLECTION_NAME = "Welcome"
WELCOME_COLLECTION_DESCRIPTION = (
    "This collection is a quick guide to what Teamcore is all about. Feel free to delete "
    "this collection once your team is up to speed with the basics!"
)

# Order matters: documents are published, and therefore listed, in this order.
# Texts live in teamcore/onboarding/<title>.md
ONBOARDING_DOCUMENTS = [
    "Support",
    "Integrations & API",
    "Our Editor",
    "What is Teamcore",
]

PACKAGED_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "onboarding"


def templates_dir() -> Path:
    return Path(settings.ONBOARDING_DIR) if settings.ONBOARDING_DIR else PACKAGED_TEMPLATES_DIR


def read_onboarding_template(title: str) -> str:
    path = templates_dir() / f"{title}.md"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise OnboardingTemplateError(f"Could not read onboarding template '{title}': {e}") from e


def provision_first_collection(db: Session, team: Team, user_id: str) -> Collection:
    """
    Seed a brand-new team with the Welcome collection and its onboarding documents,
    each published as `user_id`.

    Not idempotent: call once per team. A failure stops the remaining steps and
    whatever was already created stays in place.
    """
    collection = create_collection(db, {
        "name": WELCOME_COLLECTION_NAME,
        "description": WELCOME_COLLECTION_DESCRIPTION,
        "team_id": team.id,
        "created_by_id": user_id,
        "sort": Collection.DEFAULT_SORT,
    })

    for title in ONBOARDING_DOCUMENTS:
        text = read_onboarding_template(title)
        document = create_document(db, {
            "version": 1,
            "is_welcome": True,
            "parent_document_id": None,
            "collection_id": collection.id,
            "team_id": collection.team_id,
            "user_id": collection.created_by_id,
            "last_modified_by_id": collection.created_by_id,
            "created_by_id": collection.created_by_id,
            "title": title,
            "text": text,
        })
        publish_document(db, document.id, collection.created_by_id)

    logger.info(f"Provisioned first collection {collection.id} for team {team.id}")
    return collection
