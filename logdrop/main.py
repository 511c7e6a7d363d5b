from contextlib import asynccontextmanager

from fastapi import FastAPI, Header, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from logdrop.config import Settings, get_settings
from logdrop.errors import LogDropError
from logdrop.handlers import DeleteHandler, DownloadHandler, UploadHandler
from logdrop.logging_config import logger, setup_logging
from logdrop.negotiation import upload_response
from logdrop.pages import render_home
from logdrop.repository import SQLiteLogStore
from logdrop.storage import LogStore, MemoryLogStore

ALLOWED_METHODS = "GET, POST, DELETE, OPTIONS"


def build_store(settings: Settings) -> LogStore:
    if settings.storage_backend == "memory":
        return MemoryLogStore()
    if settings.storage_backend == "sqlite":
        return SQLiteLogStore(settings.database_path)
    raise ValueError(f"unknown storage backend: {settings.storage_backend}")


def create_app(settings: Settings | None = None, store: LogStore | None = None) -> FastAPI:
    settings = settings or get_settings()
    if store is None:
        store = build_store(settings)
    setup_logging(settings.log_level)

    upload = UploadHandler(settings, store)
    download = DownloadHandler(settings, store)
    delete = DeleteHandler(settings, store)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        store.init()
        purged = store.purge_expired()
        if purged:
            logger.info("Purged %d expired logs", purged)
        yield

    app = FastAPI(
        title=settings.app_name,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    def error_response(status_code: int, message: str, code: str, headers: dict | None = None) -> JSONResponse:
        return JSONResponse(
            status_code=status_code,
            content={"error": {"code": code, "message": message}},
            headers=headers,
        )

    @app.middleware("http")
    async def allow_any_origin(request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("Access-Control-Allow-Origin", "*")
        return response

    @app.exception_handler(LogDropError)
    async def logdrop_exception_handler(_: Request, exc: LogDropError):
        return error_response(exc.status_code, exc.message, exc.code)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = str(exc.detail) if exc.detail else "request failed"
        code_map = {
            400: "bad_request",
            404: "not_found",
            405: "method_not_allowed",
        }
        headers = dict(exc.headers or {})
        if exc.status_code == 405 and request.url.path == "/":
            headers["Allow"] = ALLOWED_METHODS
        return error_response(exc.status_code, message, code_map.get(exc.status_code, "error"), headers)

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok", "environment": settings.app_env}

    @app.options("/")
    def options() -> Response:
        return Response(
            status_code=204,
            headers={
                "Allow": ALLOWED_METHODS,
                "Access-Control-Allow-Origin": "*",
                "Access-Control-Allow-Methods": "GET, POST, DELETE",
                "Access-Control-Allow-Headers": "Authorization",
                "Access-Control-Max-Age": "86400",
            },
        )

    @app.get("/")
    async def home_or_download(log_id: str | None = Query(default=None, alias="id")):
        if log_id is None:
            return HTMLResponse(render_home(settings.app_name, settings.max_file_size))
        stored = await download(log_id)
        return Response(content=stored.content, headers=stored.headers)

    @app.post("/")
    async def upload_log(request: Request, name: str | None = Query(default=None)):
        result = await upload(request, name)
        return upload_response(
            request.headers.get("accept"),
            result.share_url,
            result.expires_at,
            settings.expiration_ttl,
        )

    @app.delete("/", status_code=204)
    async def delete_log(
        log_id: str | None = Query(default=None, alias="id"),
        authorization: str | None = Header(default=None),
    ):
        await delete(log_id, authorization)
        return Response(status_code=204)

    return app


app = create_app()
