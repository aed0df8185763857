"""Object store adapter for Google Drive (REST API v3) with service-account auth."""

import json
import uuid
from typing import Any

import google.auth.exceptions
import google.auth.transport.requests
import httpx
from google.oauth2 import service_account

from app.logging.logger import Log
from app.storage.base import BaseObjectStore
from app.storage.exceptions import (
    StorageAuthError,
    StorageError,
    StorageNetworkError,
    StorageNotFoundError,
)
from app.storage.models import ObjectMetadata, StoredObjectRef

DRIVE_API_URL = "https://www.googleapis.com/drive/v3/files"
DRIVE_UPLOAD_URL = "https://www.googleapis.com/upload/drive/v3/files"
TOKEN_URI = "https://oauth2.googleapis.com/token"
SCOPES = (
    "https://www.googleapis.com/auth/drive.file",
    "https://www.googleapis.com/auth/drive.readonly",
)

_FILE_FIELDS = "id,name,mimeType,webViewLink,size"
_GOOGLE_DOCS_PREFIX = "application/vnd.google-apps."
_GOOGLE_DOCUMENT = "application/vnd.google-apps.document"
_TRANSIENT_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})


class GoogleDriveAdapter(BaseObjectStore):
    """Stores uploaded files in a Drive folder owned by a service account."""

    def __init__(
        self,
        *,
        credentials: service_account.Credentials,
        timeout_seconds: int,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._credentials = credentials
        self._client = (
            http_client if http_client is not None else httpx.Client(timeout=timeout_seconds)
        )

    @classmethod
    def from_service_account(
        cls,
        *,
        email: str,
        private_key: str,
        project_id: str,
        timeout_seconds: int,
        http_client: httpx.Client | None = None,
    ) -> "GoogleDriveAdapter":
        """Build an adapter from service-account fields.

        The private key may carry escaped newlines, as it does when read from
        a single-line environment variable.

        Raises:
            StorageAuthError: if the credentials are missing or malformed.
        """
        if not email or not private_key:
            raise StorageAuthError("Google service account credentials are not configured")
        info = {
            "type": "service_account",
            "client_email": email,
            "private_key": private_key.replace("\\n", "\n"),
            "project_id": project_id,
            "token_uri": TOKEN_URI,
        }
        try:
            credentials = service_account.Credentials.from_service_account_info(
                info, scopes=SCOPES
            )
        except ValueError as exc:
            raise StorageAuthError(f"Invalid service account credentials: {exc}") from exc
        return cls(credentials=credentials, timeout_seconds=timeout_seconds, http_client=http_client)

    def upload(
        self,
        name: str,
        mime_type: str,
        content: bytes,
        parent_folder: str | None = None,
    ) -> StoredObjectRef:
        metadata: dict[str, Any] = {"name": name, "mimeType": mime_type}
        if parent_folder:
            metadata["parents"] = [parent_folder]
        boundary = uuid.uuid4().hex
        body = _multipart_related(boundary, metadata, mime_type, content)

        response = self._request(
            "POST",
            DRIVE_UPLOAD_URL,
            params={"uploadType": "multipart", "fields": _FILE_FIELDS, "supportsAllDrives": "true"},
            headers={"Content-Type": f"multipart/related; boundary={boundary}"},
            content=body,
        )
        data = response.json()
        if not data.get("id"):
            raise StorageError("Drive upload returned no file id")
        Log.info(f"Uploaded '{name}' to Drive as {data['id']}")
        return StoredObjectRef(
            object_id=data["id"],
            view_url=data.get("webViewLink", ""),
            byte_size=int(data.get("size") or len(content)),
        )

    def export_text(self, object_id: str) -> str:
        """Return the text rendition of an object.

        Google Docs formats are exported directly and text files downloaded
        as-is. Anything else (PDF, Office, images) is first copied into a
        Google Document, which makes Drive run its own conversion/OCR, and
        the temporary copy is removed afterwards.
        """
        metadata = self.get_metadata(object_id)
        if metadata.mime_type.startswith(_GOOGLE_DOCS_PREFIX):
            return self._export_plain_text(object_id)
        if metadata.mime_type.startswith("text/"):
            response = self._request(
                "GET",
                f"{DRIVE_API_URL}/{object_id}",
                params={"alt": "media", "supportsAllDrives": "true"},
            )
            return response.text

        copy_id = self._convert_to_document(object_id, metadata.name)
        try:
            return self._export_plain_text(copy_id)
        finally:
            try:
                self.delete(copy_id)
            except StorageError as exc:
                Log.warning(f"Failed to remove converted copy {copy_id}: {exc}")

    def delete(self, object_id: str) -> None:
        self._request(
            "DELETE",
            f"{DRIVE_API_URL}/{object_id}",
            params={"supportsAllDrives": "true"},
        )
        Log.info(f"Deleted Drive object {object_id}")

    def get_metadata(self, object_id: str) -> ObjectMetadata:
        response = self._request(
            "GET",
            f"{DRIVE_API_URL}/{object_id}",
            params={"fields": _FILE_FIELDS, "supportsAllDrives": "true"},
        )
        data = response.json()
        return ObjectMetadata(
            object_id=data["id"],
            name=data.get("name", ""),
            mime_type=data.get("mimeType", ""),
            view_url=data.get("webViewLink", ""),
            byte_size=int(data.get("size") or 0),
        )

    def close(self) -> None:
        self._client.close()

    def _export_plain_text(self, object_id: str) -> str:
        response = self._request(
            "GET",
            f"{DRIVE_API_URL}/{object_id}/export",
            params={"mimeType": "text/plain"},
        )
        return response.text

    def _convert_to_document(self, object_id: str, name: str) -> str:
        response = self._request(
            "POST",
            f"{DRIVE_API_URL}/{object_id}/copy",
            params={"fields": "id", "supportsAllDrives": "true"},
            json={"name": f"{name} (text)", "mimeType": _GOOGLE_DOCUMENT},
        )
        copy_id = response.json().get("id")
        if not copy_id:
            raise StorageError(f"Drive conversion of {object_id} returned no file id")
        return str(copy_id)

    def _auth_headers(self) -> dict[str, str]:
        if not self._credentials.valid:
            try:
                self._credentials.refresh(google.auth.transport.requests.Request())
            except google.auth.exceptions.RefreshError as exc:
                raise StorageAuthError(f"Drive token refresh rejected: {exc}") from exc
            except google.auth.exceptions.TransportError as exc:
                raise StorageNetworkError(f"Drive token refresh failed: {exc}") from exc
        return {"Authorization": f"Bearer {self._credentials.token}"}

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        headers = {**self._auth_headers(), **kwargs.pop("headers", {})}
        try:
            response = self._client.request(method, url, headers=headers, **kwargs)
        except httpx.TransportError as exc:
            raise StorageNetworkError(f"Drive network error: {exc}") from exc

        status = response.status_code
        if status < 400:
            return response
        detail = f"Drive {method} {url} failed with status {status}: {response.text[:200]}"
        if status in (401, 403):
            raise StorageAuthError(detail)
        if status == 404:
            raise StorageNotFoundError(detail)
        if status in _TRANSIENT_STATUS_CODES:
            raise StorageNetworkError(detail)
        raise StorageError(detail)


def _multipart_related(
    boundary: str,
    metadata: dict[str, Any],
    mime_type: str,
    content: bytes,
) -> bytes:
    return b"".join([
        f"--{boundary}\r\nContent-Type: application/json; charset=UTF-8\r\n\r\n".encode(),
        json.dumps(metadata).encode(),
        f"\r\n--{boundary}\r\nContent-Type: {mime_type}\r\n\r\n".encode(),
        content,
        f"\r\n--{boundary}--\r\n".encode(),
    ])
