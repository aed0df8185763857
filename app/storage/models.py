from dataclasses import dataclass


@dataclass(frozen=True)
class StoredObjectRef:
    """Reference returned by the object store after a successful upload."""

    object_id: str
    view_url: str
    byte_size: int


@dataclass(frozen=True)
class ObjectMetadata:
    object_id: str
    name: str
    mime_type: str
    view_url: str
    byte_size: int
