import base64
import binascii

from pydantic import BaseModel, Field

from app.ingestion.exceptions import InvalidInputError
from app.ingestion.models import FilePayload, SubmissionRequest


class FileUpload(BaseModel):
    name: str = ""
    type: str = ""
    size: int = 0
    content: str = Field(default="", description="Base64 file content, optionally as a data URL")

    def decode_content(self) -> bytes:
        """Raises:
            InvalidInputError: if content is not valid base64.
        """
        encoded = self.content
        if encoded.startswith("data:") and "," in encoded:
            encoded = encoded.split(",", 1)[1]
        try:
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise InvalidInputError(
                {"file.content": "File content must be base64-encoded"}
            ) from exc


class DocumentUploadRequest(BaseModel):
    title: str | None = None
    description: str | None = None
    file: FileUpload | None = None
    document_type: str | None = "uploaded"
    tags: list[str] = Field(default_factory=list)
    priority: str | None = "medium"

    def to_submission(self, created_by: str | None = None) -> SubmissionRequest:
        payload = None
        if self.file is not None:
            payload = FilePayload(
                name=self.file.name,
                mime_type=self.file.type,
                size=self.file.size,
                content=self.file.decode_content(),
            )
        return SubmissionRequest(
            title=self.title or "",
            description=self.description or "",
            document_type=self.document_type or "",
            priority=self.priority or "",
            file=payload,
            tags=[tag.strip() for tag in self.tags if tag.strip()],
            created_by=created_by,
        )


class QueryRequest(BaseModel):
    query: str | None = None
