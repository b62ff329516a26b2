"""
Widget snapshot export.
Writes a small read-only snapshot of today's derived values for companion
surfaces; consumers never read the live collections.
"""
import logging
from datetime import datetime
from typing import Optional

from pydantic import ValidationError

from lifetrack.constants import KEY_WIDGET_SNAPSHOT
from lifetrack.exceptions import (
    DocumentDecodeException,
    DocumentNotFoundException,
    StorageException,
)
from lifetrack.schemas import CleaningTask, DaySummary, WidgetSnapshot
from lifetrack.storage import DocumentStore

logger = logging.getLogger("lifetrack.widget")


class WidgetService:
    """Service for the widget snapshot document"""

    def __init__(self, store: DocumentStore):
        self.store = store

    @staticmethod
    def build(
        summary: Optional[DaySummary],
        next_task: Optional[CleaningTask],
        now: Optional[datetime] = None
    ) -> WidgetSnapshot:
        """Snapshot of a day summary plus the next cleaning task"""
        snapshot = WidgetSnapshot(
            next_cleaning_task_title=next_task.title if next_task else None,
            generated_at=now or datetime.now()
        )
        if summary is None:
            return snapshot
        return snapshot.model_copy(update={
            "score": summary.score,
            "habits_completed_count": summary.habits_completed,
            "habits_total_count": summary.habits_total,
            "water_current": summary.water_ounces,
            "water_target": summary.water_target,
            "did_read_today": summary.did_read,
        })

    def publish(self, snapshot: WidgetSnapshot) -> bool:
        """Fire-and-forget write; failures are logged"""
        try:
            self.store.save(snapshot.model_dump(mode="json"), KEY_WIDGET_SNAPSHOT)
            return True
        except StorageException as e:
            logger.error(f"Failed to write widget snapshot: {e}")
            return False

    def read(self) -> Optional[WidgetSnapshot]:
        """The last published snapshot, or None if there is no usable one"""
        try:
            return WidgetSnapshot.model_validate(self.store.load(KEY_WIDGET_SNAPSHOT))
        except DocumentNotFoundException:
            return None
        except (DocumentDecodeException, ValidationError, StorageException) as e:
            logger.warning(f"Could not read widget snapshot: {e}")
            return None
