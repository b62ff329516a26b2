"""
Key-value document store.

Each logical collection (tasks, logs, summaries, ...) is one JSON document
stored under a fixed key. Services depend only on load/save-by-key.
"""
import json
import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lifetrack.exceptions import (
    DocumentDecodeException,
    DocumentNotFoundException,
    StorageException,
)
from lifetrack.repositories.document_repository import DocumentRepository

logger = logging.getLogger("lifetrack.storage")


class DocumentStore(ABC):
    """Load/save JSON-compatible values by key"""

    def __init__(self):
        self._locks: Dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    def lock(self, key: str) -> threading.RLock:
        """Per-collection lock guarding read-modify-write sequences"""
        with self._locks_guard:
            if key not in self._locks:
                self._locks[key] = threading.RLock()
            return self._locks[key]

    @abstractmethod
    def load(self, key: str) -> Any:
        """
        Load the value stored under key.

        Raises:
            DocumentNotFoundException: key was never written
            DocumentDecodeException: stored payload is not valid JSON
            StorageException: backend failure
        """

    @abstractmethod
    def save(self, value: Any, key: str) -> None:
        """Replace the value stored under key (last write wins)."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key if present."""

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check whether key has been written."""

    @staticmethod
    def _decode(key: str, payload: str) -> Any:
        try:
            return json.loads(payload)
        except json.JSONDecodeError as e:
            raise DocumentDecodeException(key, str(e))


class SqlDocumentStore(DocumentStore):
    """Document store backed by the SQLAlchemy documents table"""

    def __init__(self, session_factory: Callable[[], Session]):
        super().__init__()
        self.session_factory = session_factory

    def load(self, key: str) -> Any:
        db = self.session_factory()
        try:
            document = DocumentRepository.get_by_key(db, key)
        except SQLAlchemyError as e:
            raise StorageException("load", str(e))
        finally:
            db.close()

        if document is None:
            raise DocumentNotFoundException(key)
        return self._decode(key, document.payload)

    def save(self, value: Any, key: str) -> None:
        payload = json.dumps(value)
        db = self.session_factory()
        try:
            DocumentRepository.upsert(db, key, payload)
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageException("save", str(e))
        finally:
            db.close()

    def delete(self, key: str) -> None:
        db = self.session_factory()
        try:
            document = DocumentRepository.get_by_key(db, key)
            if document:
                DocumentRepository.delete(db, document)
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageException("delete", str(e))
        finally:
            db.close()

    def exists(self, key: str) -> bool:
        db = self.session_factory()
        try:
            return DocumentRepository.get_by_key(db, key) is not None
        except SQLAlchemyError as e:
            raise StorageException("exists", str(e))
        finally:
            db.close()

    def keys(self) -> List[str]:
        db = self.session_factory()
        try:
            return DocumentRepository.get_keys(db)
        except SQLAlchemyError as e:
            raise StorageException("keys", str(e))
        finally:
            db.close()


class InMemoryDocumentStore(DocumentStore):
    """Dict-backed store; values round-trip through JSON like the SQL store"""

    def __init__(self):
        super().__init__()
        self._documents: Dict[str, str] = {}

    def load(self, key: str) -> Any:
        if key not in self._documents:
            raise DocumentNotFoundException(key)
        return self._decode(key, self._documents[key])

    def save(self, value: Any, key: str) -> None:
        self._documents[key] = json.dumps(value)

    def save_raw(self, payload: str, key: str) -> None:
        """Store a raw payload without encoding (used to simulate corrupt data)."""
        self._documents[key] = payload

    def delete(self, key: str) -> None:
        self._documents.pop(key, None)

    def exists(self, key: str) -> bool:
        return key in self._documents
