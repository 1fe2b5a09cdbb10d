"""Wire schemas for API failure details and response envelopes."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict


class ApiFailDetail(BaseModel):
    """Structured input accepted by ``ApiContext.fail``."""

    model_config = ConfigDict(extra="ignore")

    message: str | None = None
    code: int | float | None = None
    status: int | None = None
    data: Any = None


class SuccessEnvelope(BaseModel):
    """Default success envelope."""

    data: Any = None


class FailEnvelope(BaseModel):
    """Default failure envelope."""

    code: int | float | None = None
    data: Any = None
    message: str | None = None


class DiagnosticError(BaseModel):
    """Internal error detail rendered only in diagnostic mode."""

    name: str
    message: str
    stack: str
    code: Any = None
