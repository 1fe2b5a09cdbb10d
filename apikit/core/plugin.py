"""Installer wiring the API response conventions into a FastAPI app."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from apikit.core.config import ApiOption
from apikit.core.errors import register_api_handlers

logger = logging.getLogger(__name__)


def setup(app: FastAPI, option: ApiOption | None = None, *, debug: bool = False) -> ApiOption:
    """Install ``ApiContext`` support and the failure interceptor once per app."""
    if getattr(app.state, "api_option", None) is not None:
        raise RuntimeError("API response extension is already installed")

    option = option or ApiOption()
    app.state.api_option = option
    register_api_handlers(app, option, debug=debug)

    logger.debug("Installed API responses option=%s debug=%s", option.safe_for_logging(), debug)
    return option
