"""
Profile repository - Data access for the single UserProfile document.
"""
import logging
from datetime import datetime

from pydantic import ValidationError

from lifetrack.constants import KEY_USER_PROFILE
from lifetrack.exceptions import (
    DocumentDecodeException,
    DocumentNotFoundException,
    StorageException,
)
from lifetrack.schemas import UserProfile
from lifetrack.storage import DocumentStore

logger = logging.getLogger("lifetrack.storage")


class ProfileRepository:
    """Repository for UserProfile data access"""

    @staticmethod
    def get(store: DocumentStore) -> UserProfile:
        """
        Get profile (creates with defaults if not exists).

        Returns:
            UserProfile object
        """
        try:
            return UserProfile.model_validate(store.load(KEY_USER_PROFILE))
        except DocumentNotFoundException:
            logger.info("No stored profile, creating defaults")
        except (DocumentDecodeException, ValidationError) as e:
            logger.warning(f"Could not decode profile, resetting to defaults: {e}")
        except StorageException as e:
            logger.error(f"Could not load profile, using defaults: {e}")
            return UserProfile()

        profile = UserProfile()
        ProfileRepository.update(store, profile)
        return profile

    @staticmethod
    def update(store: DocumentStore, profile: UserProfile) -> UserProfile:
        """
        Update profile.

        Args:
            store: Document store
            profile: Profile with updated values

        Returns:
            Updated profile
        """
        profile.updated_at = datetime.now()
        try:
            store.save(profile.model_dump(mode="json"), KEY_USER_PROFILE)
        except StorageException as e:
            logger.error(f"Failed to save profile: {e}")
        return profile
