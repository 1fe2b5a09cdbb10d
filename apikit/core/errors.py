"""API failure exception and error interception for FastAPI apps."""

from __future__ import annotations

from collections.abc import Callable
import inspect
import logging
import traceback
from typing import Any

from fastapi import FastAPI
from fastapi import Request
from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.responses import Response

from apikit.core.config import DEFAULT_FAIL_STATUS
from apikit.core.config import ApiOption
from apikit.schemas.api import DiagnosticError

logger = logging.getLogger(__name__)

ExceptionHandler = Callable[[Request, Exception], Any]


class ApiFail(Exception):
    """Expected application failure that is always safe to show to the client."""

    expose = True

    def __init__(
        self,
        message: str | None = None,
        *,
        code: int | float | None = None,
        data: Any = None,
        status: int | None = None,
    ) -> None:
        status = status or DEFAULT_FAIL_STATUS
        if not 100 <= status <= 599:
            raise ValueError(f"status must be a valid HTTP status code, got {status}")

        super().__init__(message or "")
        self.message = message
        self.code = code
        self.data = data
        self.status = status


def render_api_fail(exc: ApiFail, option: ApiOption) -> JSONResponse:
    """Build the finalized failure response for an ``ApiFail``."""
    envelope = option.fail(exc)
    return JSONResponse(
        status_code=exc.status or DEFAULT_FAIL_STATUS,
        content=jsonable_encoder(envelope),
    )


def render_diagnostic_error(exc: Exception) -> JSONResponse:
    """Expose internal error details. Only used in diagnostic mode."""
    payload = DiagnosticError(
        name=type(exc).__name__,
        message=str(exc),
        stack="".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        code=getattr(exc, "code", None),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=jsonable_encoder(payload.model_dump(exclude_none=True)),
    )


def _make_interceptor(
    option: ApiOption,
    *,
    debug: bool,
    fallback: ExceptionHandler | None,
) -> Callable[[Request, Exception], Any]:
    async def intercept_error(request: Request, exc: Exception) -> Response:
        if isinstance(exc, ApiFail):
            logger.debug(
                "API failure on %s %s status=%s code=%s",
                request.method,
                request.url.path,
                exc.status,
                exc.code,
            )
            return render_api_fail(exc, option)

        if debug:
            logger.exception("Unexpected error on %s %s", request.method, request.url.path, exc_info=exc)
            return render_diagnostic_error(exc)

        if inspect.iscoroutinefunction(fallback):
            return await fallback(request, exc)
        return await run_in_threadpool(fallback, request, exc)

    return intercept_error


def register_api_handlers(app: FastAPI, option: ApiOption, *, debug: bool = False) -> None:
    """Attach the ``ApiFail`` interceptor to a FastAPI app instance.

    Without diagnostic mode, ``Exception`` is only claimed when another handler
    was already registered for it; that handler keeps serving unexpected errors.
    Otherwise Starlette's default server error response applies.
    """

    fallback = app.exception_handlers.get(Exception)
    interceptor = _make_interceptor(option, debug=debug, fallback=fallback)

    app.add_exception_handler(ApiFail, interceptor)
    if debug or fallback is not None:
        app.add_exception_handler(Exception, interceptor)
