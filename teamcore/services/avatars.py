# teamcore/services/avatars.py
import hashlib
import logging
import uuid
from typing import Optional

from teamcore.core.settings import settings
from teamcore.services.storage import S3Storage, get_storage

logger = logging.getLogger("Teamcore.Avatars")

INTERNAL_PATH_PREFIX = "/api"


def generate_avatar_url(id: str, name: Optional[str] = None) -> str:
    """
    Deterministic placeholder avatar for (id, name).
    """
    tiley_id = hashlib.md5(str(id).encode("utf-8")).hexdigest()
    initial = (name or "Unknown")[:1].upper() or "U"
    return f"{settings.DEFAULT_AVATAR_HOST}/avatar/{tiley_id}/{initial}.png"


def needs_externalization(avatar_url: Optional[str], endpoint: str) -> bool:
    return bool(avatar_url) and not avatar_url.startswith(INTERNAL_PATH_PREFIX) and not avatar_url.startswith(endpoint)


def externalize_avatar(team, storage: Optional[S3Storage] = None) -> None:
    """
    Pre-save hook: copy a third-party avatar into the upload bucket and point
    team.avatar_url at the copy. Best effort: any failure is logged and the
    original avatar_url is kept so the save still goes through.
    """
    storage = storage or get_storage()
    try:
        endpoint = storage.public_endpoint()
        if not needs_externalization(team.avatar_url, endpoint):
            return
        new_url = storage.upload_from_url(
            team.avatar_url,
            f"avatars/{team.id}/{uuid.uuid4()}",
            "public-read",
        )
        if new_url:
            logger.info(f"Externalized avatar for team {team.id}")
            team.avatar_url = new_url
    except Exception as e:
        # retried on the next save
        logger.error(f"Failed to externalize avatar for team {team.id}: {e}", exc_info=True)
