"""
Collection repository - typed access to one JSON array in the document store.
Missing or undecodable documents fall back to a default collection.
"""
import logging
from typing import Callable, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from lifetrack.exceptions import (
    DocumentDecodeException,
    DocumentNotFoundException,
    StorageException,
)
from lifetrack.storage import DocumentStore

logger = logging.getLogger("lifetrack.storage")

T = TypeVar("T", bound=BaseModel)


class CollectionRepository(Generic[T]):
    """Repository for one stored collection of pydantic entities"""

    def __init__(self, store: DocumentStore, key: str, model: Type[T]):
        self.store = store
        self.key = key
        self.model = model
        self.adapter = TypeAdapter(List[model])
        self.lock = store.lock(key)

    def load_all(self, seed: Optional[Callable[[], List[T]]] = None) -> List[T]:
        """
        Load the collection.

        Not-found and decode failures are not errors: the collection falls
        back to seed() (then saved immediately) or to an empty list.

        Args:
            seed: Optional factory for default items

        Returns:
            List of entities
        """
        try:
            raw = self.store.load(self.key)
            return self.adapter.validate_python(raw)
        except DocumentNotFoundException:
            logger.info(f"No stored '{self.key}', using defaults")
        except (DocumentDecodeException, ValidationError) as e:
            logger.warning(f"Could not decode '{self.key}', using defaults: {e}")
        except StorageException as e:
            logger.error(f"Could not load '{self.key}', using defaults: {e}")

        if seed is None:
            return []

        items = seed()
        self.save_all(items)
        return items

    def save_all(self, items: List[T]) -> bool:
        """
        Persist the whole collection.

        Failures are logged and swallowed.

        Returns:
            True if the collection was saved
        """
        try:
            self.store.save(self.adapter.dump_python(items, mode="json"), self.key)
            return True
        except StorageException as e:
            logger.error(f"Failed to save '{self.key}': {e}")
            return False
