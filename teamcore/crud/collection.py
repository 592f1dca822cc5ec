#teamcore/crud/collection.py
from sqlalchemy.orm import Session
import logging

from teamcore.models.collection import Collection
from teamcore.core.exceptions import CollectionError

logger = logging.getLogger("Teamcore.Collection")


def create_collection(db: Session, data: dict) -> Collection:
    collection = Collection(
        team_id=data["team_id"],
        name=data["name"],
        description=data.get("description"),
        created_by_id=data["created_by_id"],
        sort=data.get("sort", Collection.DEFAULT_SORT),
        private=data.get("private", False),
    )
    db.add(collection)
    try:
        db.commit()
        db.refresh(collection)
        logger.info(f"Created collection '{collection.name}' (ID: {collection.id}) in team {collection.team_id}")
        return collection
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating collection '{data.get('name')}': {e}")
        raise CollectionError(f"Database error while creating collection: {e}")
