from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docseq.app import App
from docseq.config import Config
from docseq.errors import TransientError, UserError
from docseq.web.error_handlers import general_exception_handler, transient_error_handler, user_error_handler
from docseq.web.openapi import set_custom_openapi
from docseq.web.routers import allocations_router, counters_router, document_numbers_router, metadata_router


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        app.state.app = app_instance
        app.state.config = config
        async with app_instance.lifespan():
            yield

    app = FastAPI(
        title="docseq API",
        lifespan=lifespan,
    )

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Health check endpoint (at root level, not versioned)
    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    app.include_router(allocations_router, prefix="/api/v1")
    app.include_router(document_numbers_router, prefix="/api/v1")
    app.include_router(counters_router, prefix="/api/v1")
    app.include_router(metadata_router, prefix="/api/v1")

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(TransientError, transient_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    return app
