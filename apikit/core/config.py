"""API response configuration and environment settings."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from dataclasses import field
from functools import lru_cache
import os
from typing import TYPE_CHECKING
from typing import Any

if TYPE_CHECKING:
    from apikit.core.errors import ApiFail

DEFAULT_FAIL_STATUS = 422

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _get_int_env(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _drop_none(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


def default_success(data: Any = None) -> dict[str, Any]:
    """Wrap response data as ``{"data": data}``."""
    return _drop_none({"data": data})


def default_fail(err: ApiFail) -> dict[str, Any]:
    """Render a failure as ``{"code", "data", "message"}``, omitting unset keys."""
    return _drop_none({"code": err.code, "data": err.data, "message": err.message})


@dataclass(frozen=True)
class ApiOption:
    """Envelope builders and failure defaults shared by every request.

    Each field given as ``None`` falls back to its own default, so partial
    overrides never reset the other fields.
    """

    fail_code: int | None = None
    fail_status: int | None = DEFAULT_FAIL_STATUS
    success: Callable[[Any], Any] | None = field(default=None, repr=False)
    fail: Callable[[ApiFail], Any] | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.fail_status is None:
            object.__setattr__(self, "fail_status", DEFAULT_FAIL_STATUS)
        if self.success is None:
            object.__setattr__(self, "success", default_success)
        if self.fail is None:
            object.__setattr__(self, "fail", default_fail)

        if not 100 <= self.fail_status <= 599:
            raise ValueError("fail_status must be a valid HTTP status code")
        if not callable(self.success):
            raise TypeError("success must be callable")
        if not callable(self.fail):
            raise TypeError("fail must be callable")

    @classmethod
    def from_settings(cls, settings: ApiSettings, **overrides: Any) -> ApiOption:
        """Build an option from environment settings plus explicit overrides."""
        values: dict[str, Any] = {
            "fail_code": settings.fail_code,
            "fail_status": settings.fail_status,
        }
        values.update(_drop_none(overrides))
        return cls(**values)

    def safe_for_logging(self) -> dict[str, Any]:
        """Return a compact description of the option for logs."""
        return {
            "fail_code": self.fail_code,
            "fail_status": self.fail_status,
            "success": getattr(self.success, "__qualname__", repr(self.success)),
            "fail": getattr(self.fail, "__qualname__", repr(self.fail)),
        }


@dataclass(frozen=True)
class ApiSettings:
    """Process-level settings for API responses."""

    debug: bool
    fail_status: int
    fail_code: int | None

    def safe_for_logging(self) -> dict[str, Any]:
        return {
            "debug": self.debug,
            "fail_status": self.fail_status,
            "fail_code": self.fail_code,
        }


@lru_cache(maxsize=1)
def get_api_settings() -> ApiSettings:
    """Load API response settings from the environment."""
    return ApiSettings(
        debug=_get_bool_env("APIKIT_DEBUG", False),
        fail_status=_get_int_env("APIKIT_FAIL_STATUS", DEFAULT_FAIL_STATUS),
        fail_code=_get_int_env("APIKIT_FAIL_CODE", None),
    )
