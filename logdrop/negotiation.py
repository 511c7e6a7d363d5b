from email.utils import formatdate

from fastapi.responses import HTMLResponse, Response

from logdrop.pages import render_uploaded


def http_date(timestamp: float) -> str:
    return formatdate(timestamp, usegmt=True)


def prefers_html(accept: str | None) -> bool:
    """True when the Accept header lists text/html with a non-zero quality."""
    if not accept:
        return False
    for item in accept.split(","):
        media_type, _, params = item.partition(";")
        if media_type.strip().lower() != "text/html":
            continue
        for param in params.split(";"):
            key, _, value = param.partition("=")
            if key.strip().lower() == "q":
                try:
                    return float(value) > 0
                except ValueError:
                    return False
        return True
    return False


def upload_response(accept: str | None, share_url: str, expires_at: float, ttl_seconds: int) -> Response:
    if prefers_html(accept):
        return HTMLResponse(render_uploaded(share_url, ttl_seconds))
    return Response(
        content=share_url,
        status_code=201,
        media_type="text/plain",
        headers={
            "Location": share_url,
            "Expires": http_date(expires_at),
            "Access-Control-Expose-Headers": "Location",
        },
    )
