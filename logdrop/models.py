from dataclasses import dataclass

from pydantic import BaseModel


class LogMetadata(BaseModel):
    """Metadata attached to a stored log. Timestamps are epoch milliseconds."""

    name: str | None = None
    type: str | None = None
    size: int | None = None
    last_modified: int | None = None
    uploaded_at: int | None = None


@dataclass(frozen=True)
class ExtractedContent:
    content: bytes
    name: str | None
    media_type: str | None


@dataclass(frozen=True)
class UploadResult:
    share_url: str
    expires_at: float


@dataclass(frozen=True)
class StoredLog:
    content: bytes
    headers: dict[str, str]
