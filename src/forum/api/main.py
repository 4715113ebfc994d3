import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from forum.core.config import get_settings
from forum.core.errors import ForumError
from forum.core.logging import configure_logging
from forum.api.routers import (
    health,
    users,
    threads,
)

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)

if settings.enable_cors:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(ForumError)
async def forum_error_handler(request: Request, exc: ForumError):
    # every domain error is terminal for the request; the session is never committed
    logger.info(
        "request rejected",
        extra={
            "path": request.url.path,
            "method": request.method,
            "status_code": exc.status_code,
            "reason": exc.detail,
        },
    )
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


def _include(router):
    app.include_router(router, prefix=settings.api_prefix)

_include(health.router)
_include(users.router)
_include(threads.router)

@app.get("/")
async def root():
    return {"service": settings.app_name, "status": "ok"}
