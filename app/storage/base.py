from abc import ABC, abstractmethod

from app.storage.models import ObjectMetadata, StoredObjectRef


class BaseObjectStore(ABC):
    """Contract for remote binary object stores.

    Every method raises StorageError (or a subclass) on failure.
    """

    @abstractmethod
    def upload(
        self,
        name: str,
        mime_type: str,
        content: bytes,
        parent_folder: str | None = None,
    ) -> StoredObjectRef:
        """Store content and return the store-assigned reference."""

    @abstractmethod
    def export_text(self, object_id: str) -> str:
        """Return the plain-text rendition of a stored object."""

    @abstractmethod
    def delete(self, object_id: str) -> None:
        """Remove a stored object."""

    @abstractmethod
    def get_metadata(self, object_id: str) -> ObjectMetadata:
        """Fetch name, type, link and size of a stored object."""

    def close(self) -> None:
        """Release client resources. Stores holding none need not override it."""
