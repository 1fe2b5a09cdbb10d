"""Reference FastAPI application using the API response conventions."""

from __future__ import annotations

import logging

from fastapi import Depends
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from apikit.core.config import ApiOption
from apikit.core.config import ApiSettings
from apikit.core.config import get_api_settings
from apikit.core.context import ApiContext
from apikit.core.context import get_api_context
from apikit.core.plugin import setup
from apikit.schemas.api import FailEnvelope
from apikit.schemas.api import SuccessEnvelope

logger = logging.getLogger(__name__)


def create_app(settings: ApiSettings | None = None) -> FastAPI:
    settings = settings or get_api_settings()
    logger.info("Creating app with settings=%s", settings.safe_for_logging())

    app = FastAPI(title="apikit")
    setup(app, ApiOption.from_settings(settings), debug=settings.debug)

    @app.get("/health", response_model=SuccessEnvelope, responses={422: {"model": FailEnvelope}})
    def health(ctx: ApiContext = Depends(get_api_context)) -> JSONResponse:
        """Health check endpoint wrapped in the success envelope."""
        return ctx.success({"status": "ok"})

    return app
