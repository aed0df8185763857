from app.config.settings import Settings
from app.storage.base import BaseObjectStore
from app.storage.google_drive_adapter import GoogleDriveAdapter


class ObjectStoreFactory:
    """Creates the object store client from settings."""

    @classmethod
    def create(cls, settings: Settings) -> BaseObjectStore:
        return GoogleDriveAdapter.from_service_account(
            email=settings.google_service_account_email,
            private_key=settings.google_service_account_private_key,
            project_id=settings.google_project_id,
            timeout_seconds=settings.google_drive_timeout_seconds,
        )
