"""FastAPI app: event galleries, guests, media, stories, likes, comments."""
import logging
import sys
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.config import settings

# Логи приложения в stderr, видны в docker logs
_app_log = logging.getLogger("app")
_app_log.setLevel(settings.log_level.upper())
if not _app_log.handlers:
    _h = logging.StreamHandler(sys.stderr)
    _h.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    _app_log.addHandler(_h)
_app_log.propagate = False

from app.database import init_store
from app.routers import comments, galleries, media

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.store = init_store()
    yield


app = FastAPI(
    title="Event Gallery",
    description="Shared event gallery: guests upload photos, videos and 24h stories, like and comment.",
    version="1.0.0",
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Не хватает обязательных полей или они неверные: 400."""
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
        for e in exc.errors()
    ]


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    content = {"detail": str(exc), "type": type(exc).__name__}
    if settings.debug:
        content["traceback"] = traceback.format_exc()
    return JSONResponse(status_code=500, content=content)


app.include_router(galleries.router)
app.include_router(media.router)
app.include_router(comments.router)


@app.get("/health")
async def health():
    return {"status": "ok", "service": "event-gallery"}
