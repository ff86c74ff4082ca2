"""FastAPI application entry point for the Career Chat service."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from careerchat.config import get_settings, setup_logging
from careerchat.routers.chat_router import router as chat_router

# Initialise logging early
setup_logging()
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Application factory."""
    settings = get_settings()

    application = FastAPI(
        title="Career Chat",
        description=(
            "Career assistant chat backend: job and community search, "
            "LLM chat replies, and rendering of command-annotated messages "
            "(/jobdata, /community, /courses, /resume, /jobportals) into cards."
        ),
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # A wildcard origin is served without credentials
    allow_any_origin = "*" in settings.cors_origins
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_any_origin else settings.cors_origins,
        allow_credentials=not allow_any_origin,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(chat_router)

    @application.on_event("startup")
    async def _startup() -> None:
        logger.info(
            "Career Chat starting: model=%s base_url=%s portals=%d",
            settings.llm_model,
            settings.llm_base_url,
            len(settings.job_portals),
        )

    return application


app = create_app()

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "careerchat.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=True,
    )
