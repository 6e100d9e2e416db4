# locallibrary/main.py
import logging
from typing import Optional

from fastapi import FastAPI, Request

from .catalog import catalog_router
from .catalog.router import templates
from .config import Settings, get_settings
from .exceptions import NotFound, StoreFailure
from .storage import CatalogStore


logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


async def not_found_handler(request: Request, exc: NotFound):
    return templates.TemplateResponse(
        request,
        "error.html",
        {"title": "Not Found", "message": exc.message},
        status_code=exc.status_code,
    )


async def store_failure_handler(request: Request, exc: StoreFailure):
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc.message, exc_info=exc)
    return templates.TemplateResponse(
        request,
        "error.html",
        {"title": "Error", "message": "The catalog is unavailable right now."},
        status_code=exc.status_code,
    )


def create_app(settings: Optional[Settings] = None, store: Optional[CatalogStore] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    if store is None:
        store = CatalogStore()
        if settings.SEED_FILE is not None:
            store.load_seed(settings.SEED_FILE)

    app = FastAPI(
        title=settings.APP_TITLE,
        description="Author and genre pages of the Local Library catalog.",
        version="1.0.0",
        debug=settings.DEBUG,
    )
    app.state.settings = settings
    app.state.store = store

    app.add_exception_handler(NotFound, not_found_handler)
    app.add_exception_handler(StoreFailure, store_failure_handler)
    app.include_router(catalog_router)

    logger.info("Local Library ready (%s)", settings.ENVIRONMENT)
    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "locallibrary.main:create_app",
        factory=True,
        host=settings.API_HOST,
        port=settings.API_PORT,
    )


if __name__ == "__main__":
    run()
