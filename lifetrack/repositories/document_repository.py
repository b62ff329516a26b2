"""
Document repository - Data access layer for the Document model.
Handles all database queries for the key-value document table.
"""
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session

from lifetrack.models import Document


class DocumentRepository:
    """Repository for Document data access"""

    @staticmethod
    def get_by_key(db: Session, key: str) -> Optional[Document]:
        """Get document by storage key"""
        return db.query(Document).filter(Document.key == key).first()

    @staticmethod
    def get_keys(db: Session) -> List[str]:
        """Get all stored keys"""
        return [row[0] for row in db.query(Document.key).order_by(Document.key).all()]

    @staticmethod
    def upsert(db: Session, key: str, payload: str) -> Document:
        """
        Create or replace the document stored under key.

        Args:
            db: Database session
            key: Storage key
            payload: JSON text

        Returns:
            Stored document
        """
        document = DocumentRepository.get_by_key(db, key)
        if document:
            document.payload = payload
            document.updated_at = datetime.now()
        else:
            document = Document(key=key, payload=payload)
            db.add(document)
        db.commit()
        db.refresh(document)
        return document

    @staticmethod
    def delete(db: Session, document: Document) -> None:
        """Delete a document"""
        db.delete(document)
        db.commit()
