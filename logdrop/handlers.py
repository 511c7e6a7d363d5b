import time
from urllib.parse import quote

from fastapi import Request
from starlette.concurrency import run_in_threadpool

from logdrop.auth import AdminAuthorizer
from logdrop.config import Settings
from logdrop.errors import (
    Forbidden,
    InternalError,
    InvalidFileName,
    InvalidIdentifier,
    MissingIdentifier,
    NotFound,
    PayloadTooLarge,
)
from logdrop.extract import TEXT_MEDIA_TYPE, TEXT_PLAIN, extract_content
from logdrop.identifiers import generate_id, is_valid_id, validate_filename
from logdrop.logging_config import logger
from logdrop.models import LogMetadata, StoredLog, UploadResult
from logdrop.negotiation import http_date
from logdrop.storage import LogStore


def require_id(log_id: str | None) -> str:
    if not log_id:
        raise MissingIdentifier()
    if not is_valid_id(log_id):
        raise InvalidIdentifier()
    return log_id


def build_share_url(request: Request, log_id: str) -> str:
    return str(request.url.replace(query=f"id={log_id}", fragment=""))


def _header_safe(value: str) -> str:
    cleaned = "".join("_" if ord(char) < 0x20 or ord(char) == 0x7F else char for char in value)
    return cleaned.replace("\\", "\\\\").replace('"', '\\"')


def content_disposition(filename: str) -> str:
    if filename.isascii():
        return f'attachment; filename="{_header_safe(filename)}"'
    fallback = filename.encode("ascii", "replace").decode("ascii").replace("?", "_")
    return f"attachment; filename=\"{_header_safe(fallback)}\"; filename*=UTF-8''{quote(filename, safe='')}"


def download_headers(log_id: str, metadata: LogMetadata | None) -> dict[str, str]:
    metadata = metadata or LogMetadata()
    media_type = metadata.type
    if not media_type or media_type == TEXT_PLAIN:
        media_type = TEXT_MEDIA_TYPE

    headers = {
        "Content-Type": media_type,
        "Content-Disposition": content_disposition(metadata.name or f"{log_id}.txt"),
    }
    if metadata.last_modified:
        headers["Last-Modified"] = http_date(metadata.last_modified / 1000)
    return headers


class UploadHandler:
    def __init__(self, settings: Settings, store: LogStore):
        self.settings = settings
        self.store = store

    async def __call__(self, request: Request, name: str | None) -> UploadResult:
        extracted = await extract_content(request, name=name, max_size=self.settings.max_file_size)
        size = len(extracted.content)
        if size > self.settings.max_file_size:
            raise PayloadTooLarge()

        log_id = generate_id()
        filename = extracted.name or f"{log_id}.txt"
        if not validate_filename(filename):
            raise InvalidFileName()

        now = time.time()
        now_ms = int(now * 1000)
        metadata = LogMetadata(
            name=filename,
            type=extracted.media_type,
            size=size,
            last_modified=now_ms,
            uploaded_at=now_ms,
        )
        try:
            await run_in_threadpool(
                self.store.put,
                log_id,
                extracted.content,
                ttl_seconds=self.settings.expiration_ttl,
                metadata=metadata,
            )
        except Exception as exc:
            logger.exception("Failed to store log %s", log_id)
            raise InternalError() from exc

        logger.info("Stored log %s (%d bytes, %s)", log_id, size, metadata.type)
        return UploadResult(
            share_url=build_share_url(request, log_id),
            expires_at=now + self.settings.expiration_ttl,
        )


class DownloadHandler:
    def __init__(self, settings: Settings, store: LogStore):
        self.settings = settings
        self.store = store

    async def __call__(self, log_id: str | None) -> StoredLog:
        log_id = require_id(log_id)
        try:
            content, metadata = await run_in_threadpool(
                self.store.get_with_metadata, log_id, cache_ttl=self.settings.cache_ttl
            )
        except Exception as exc:
            logger.exception("Failed to read log %s", log_id)
            raise InternalError() from exc

        if content is None:
            raise NotFound()
        return StoredLog(content=content, headers=download_headers(log_id, metadata))


class DeleteHandler:
    def __init__(self, settings: Settings, store: LogStore):
        self.store = store
        self.authorizer = AdminAuthorizer(settings.admin_token)

    async def __call__(self, log_id: str | None, authorization: str | None) -> None:
        log_id = require_id(log_id)
        if not self.authorizer.verify(authorization):
            logger.warning("Rejected delete of log %s", log_id)
            raise Forbidden()

        try:
            await run_in_threadpool(self.store.delete, log_id)
        except Exception as exc:
            logger.exception("Failed to delete log %s", log_id)
            raise InternalError() from exc
        logger.info("Deleted log %s", log_id)
