# taskexchange/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskexchange.config import settings
from taskexchange.core.exceptions import TaskExchangeError
from taskexchange.database import get_db
from taskexchange.logging_setup import setup_logging
from taskexchange.routers import admin, auth, chat, ratings, task, users

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title="TaskExchange - Community Task Marketplace", version="1.0")

    if settings.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Include Routers
    api_prefix = settings.api_prefix
    app.include_router(auth.router, prefix=api_prefix)
    app.include_router(task.router, prefix=api_prefix)
    app.include_router(users.router, prefix=api_prefix)
    app.include_router(ratings.router, prefix=api_prefix)
    app.include_router(chat.router, prefix=api_prefix)
    app.include_router(admin.router, prefix=api_prefix)

    @app.exception_handler(TaskExchangeError)
    async def domain_exception_handler(request: Request, exc: TaskExchangeError):
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message},
        )

    @app.on_event("startup")
    def startup_event():
        # Load (or create) the data file up front so counter healing is logged at boot
        db = get_db()
        logger.info("Serving data from %s", db.path)

    @app.get("/")
    def read_root():
        return {"status": "ok", "message": "TaskExchange API is running"}

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()


def run() -> None:
    import uvicorn
    setup_logging(log_dir=settings.LOG_DIR, console_level=settings.LOG_LEVEL.upper())
    uvicorn.run(app, host="0.0.0.0", port=8000, log_config=None)


if __name__ == "__main__":
    run()
