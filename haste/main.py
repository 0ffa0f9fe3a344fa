"""
Haste Application Entry Point

FastAPI application main entry, including router registration and application configuration.
"""

import logging
import traceback
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from haste.api import documents_router
from haste.common.errors import AppError
from haste.common.notifier import WebhookNotifier
from haste.config import Settings, get_settings
from haste.key_generators import create_key_generator
from haste.logging_config import setup_logging
from haste.middleware.rate_limit import RateLimitMiddleware
from haste.scheduler import shutdown_scheduler, start_scheduler
from haste.services.document_service import DocumentService
from haste.stores import DocumentStore, create_document_store

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[DocumentStore] = None) -> FastAPI:
    """
    Create FastAPI application

    Args:
        settings: Configuration, loaded from the environment when omitted
        store: Document store, built from configuration when omitted

    Returns:
        FastAPI: Application instance
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application Lifecycle Management

        Connects the store on startup (a failure aborts startup), loads
        static documents, and releases every resource on shutdown, including
        when startup fails halfway.
        """
        document_store = store or create_document_store(settings)
        notifier = None
        scheduler = None
        try:
            await document_store.connect()
            logger.info(f"Document store ready: {settings.STORAGE_TYPE}")

            key_options = {"keyspace": settings.KEY_SPACE} if settings.KEY_GENERATOR == "random" else {}
            service = DocumentService(
                store=document_store,
                key_generator=create_key_generator(settings.KEY_GENERATOR, **key_options),
                key_length=settings.KEY_LENGTH,
                max_length=settings.MAX_LENGTH,
            )
            if settings.DOCUMENTS:
                loaded = await service.load_static_documents(settings.DOCUMENTS)
                logger.info(f"Loaded {loaded}/{len(settings.DOCUMENTS)} static documents")

            if settings.NOTIFY_WEBHOOK_URL:
                notifier = WebhookNotifier(settings.NOTIFY_WEBHOOK_URL, timeout=settings.HTTP_TIMEOUT)

            scheduler = start_scheduler(
                document_store,
                settings.STORAGE_TYPE,
                settings.EXPIRED_CLEANUP_INTERVAL_MINUTES,
            )

            app.state.document_service = service
            app.state.notifier = notifier

            message = f"Server listening on {settings.HOST}:{settings.PORT}"
            logger.info(message)
            if notifier is not None:
                await notifier.notify(message)

            yield
        finally:
            # Shutdown
            shutdown_scheduler(scheduler)
            if notifier is not None:
                await notifier.close()
            await document_store.close()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Key-addressed document store",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        RateLimitMiddleware,
        enabled=settings.RATE_LIMIT_ENABLED,
        limit=settings.RATE_LIMIT_DEFAULT,
    )

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        """
        Handle application custom exceptions

        In production mode, error details are hidden to prevent information leakage.
        """
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(include_details=settings.DEBUG),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """
        Handle uncaught exceptions

        Stack traces are logged but only returned to clients in debug mode.
        """
        logger.error(
            "Uncaught exception: %s\nPath: %s\nTraceback:\n%s",
            str(exc),
            request.url.path,
            traceback.format_exc(),
        )

        content = {"message": "Internal server error"}
        if settings.DEBUG:
            content["type"] = type(exc).__name__
            content["traceback"] = traceback.format_exc().split("\n")
        return JSONResponse(status_code=500, content=content)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """
        Health Check

        Used for service liveness probe.
        """
        return {"status": "healthy"}

    app.include_router(documents_router)
    return app


# Initialize logging configuration
setup_logging()

app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "haste.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
