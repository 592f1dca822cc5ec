#teamcore/crud/document.py
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import flag_modified
from datetime import datetime, timezone
import logging

from teamcore.models.collection import Collection
from teamcore.models.document import Document
from teamcore.core.exceptions import DocumentError, NotFoundError

logger = logging.getLogger("Teamcore.Document")


def create_document(db: Session, data: dict) -> Document:
    """
    Create a draft document.
    """
    document = Document(
        team_id=data["team_id"],
        collection_id=data.get("collection_id"),
        parent_document_id=data.get("parent_document_id"),
        title=data["title"],
        text=data.get("text", ""),
        version=data.get("version", 1),
        is_welcome=data.get("is_welcome", False),
        user_id=data["user_id"],
        created_by_id=data["created_by_id"],
        last_modified_by_id=data["last_modified_by_id"],
    )
    db.add(document)
    try:
        db.commit()
        db.refresh(document)
        logger.info(f"Created document '{document.title}' (ID: {document.id})")
        return document
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating document '{data.get('title')}': {e}")
        raise DocumentError(f"Database error while creating document: {e}")


def publish_document(db: Session, document_id: str, user_id: str) -> Document:
    """
    Make a draft visible: stamp published_at and append it to its collection's
    document structure in one commit. Publishing twice is a no-op.
    """
    document = db.query(Document).filter(Document.id == document_id).first()
    if not document:
        raise NotFoundError(f"Document with id={document_id} not found.")
    if document.published_at is not None:
        return document

    document.published_at = datetime.now(timezone.utc)
    document.last_modified_by_id = user_id
    if document.collection_id and not document.parent_document_id:
        collection = db.query(Collection).filter(Collection.id == document.collection_id).first()
        if collection is not None:
            structure = list(collection.document_structure or [])
            structure.append({"id": document.id, "title": document.title, "children": []})
            collection.document_structure = structure
            flag_modified(collection, "document_structure")
    try:
        db.commit()
        db.refresh(document)
        logger.info(f"Published document {document.id} by user {user_id}")
        return document
    except Exception as e:
        db.rollback()
        logger.error(f"Error publishing document {document_id}: {e}")
        raise DocumentError(f"Database error while publishing document: {e}")
