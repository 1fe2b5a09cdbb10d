"""Uniform success and failure responses for FastAPI request handlers."""

from apikit.core.config import ApiOption
from apikit.core.config import ApiSettings
from apikit.core.config import get_api_settings
from apikit.core.context import ApiContext
from apikit.core.context import get_api_context
from apikit.core.errors import ApiFail
from apikit.core.errors import register_api_handlers
from apikit.core.plugin import setup
from apikit.schemas.api import ApiFailDetail

__all__ = [
    "ApiContext",
    "ApiFail",
    "ApiFailDetail",
    "ApiOption",
    "ApiSettings",
    "get_api_context",
    "get_api_settings",
    "register_api_handlers",
    "setup",
]
