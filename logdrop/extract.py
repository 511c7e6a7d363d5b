from fastapi import Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from logdrop.errors import InvalidContents, MissingContentType, PayloadTooLarge, UnsupportedMediaType
from logdrop.models import ExtractedContent

TEXT_PLAIN = "text/plain"
OCTET_STREAM = "application/octet-stream"
MULTIPART = "multipart/form-data"

TEXT_MEDIA_TYPE = "text/plain; charset=UTF-8"


def base_media_type(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip().lower()


def declared_length(request: Request) -> int | None:
    raw = request.headers.get("content-length")
    if raw is None or not raw.strip().isdecimal():
        return None
    return int(raw)


async def extract_content(request: Request, *, name: str | None, max_size: int) -> ExtractedContent:
    """Normalise a text, binary or multipart upload body.

    ``name`` is the out-of-band ``?name=`` value and only applies to raw
    bodies; multipart uploads take the name of their ``file`` part.
    """
    content_type = request.headers.get("content-type")
    if not content_type:
        raise MissingContentType()

    media_type = base_media_type(content_type)
    if media_type in (TEXT_PLAIN, OCTET_STREAM):
        length = declared_length(request)
        if length is not None and length > max_size:
            raise PayloadTooLarge()
        content = await request.body()
        stored_type = TEXT_MEDIA_TYPE if media_type == TEXT_PLAIN else OCTET_STREAM
        extracted = ExtractedContent(content=content, name=name or None, media_type=stored_type)
    elif media_type == MULTIPART:
        extracted = await _extract_form_file(request, max_size)
    else:
        raise UnsupportedMediaType()

    if not extracted.content:
        raise InvalidContents()
    return extracted


async def _extract_form_file(request: Request, max_size: int) -> ExtractedContent:
    try:
        form = await request.form(max_part_size=max_size + 1)
    except (MultiPartException, StarletteHTTPException) as exc:
        length = declared_length(request)
        if length is not None and length > max_size:
            raise PayloadTooLarge() from exc
        raise InvalidContents() from exc

    part = form.get("file")
    if part is None:
        raise InvalidContents()
    if isinstance(part, str):
        # A part sent without a filename arrives as a plain field.
        return ExtractedContent(content=part.encode("utf-8"), name=None, media_type=None)
    content = await part.read()
    return ExtractedContent(
        content=content,
        name=part.filename or None,
        media_type=part.content_type or None,
    )
