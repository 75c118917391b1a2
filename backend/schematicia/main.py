"""Schematicia — conversational circuit design backend

Responsibilities:
  1. Circuit design generation (chat request → model completion → validated plan)
  2. Structured output validation for raw completions
  3. Schematic layout and connection routing for plans
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from schematicia.config import get_settings
from schematicia.routers import design

VERSION = "0.1.0"


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    application = FastAPI(
        title=settings.app_name,
        version=VERSION,
        description=(
            "Schematicia — natural-language circuit design.\n\n"
            "Turns chat requests into a validated circuit plan "
            "and a laid-out schematic scene."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ─── Circuit design (stateless) ───
    application.include_router(design.router, prefix="/api/design", tags=["Design"])

    return application


app = create_app()


@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "schematicia", "version": VERSION}
