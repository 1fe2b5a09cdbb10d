"""Per-request ``fail``/``success`` helpers exposed as a FastAPI dependency."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from typing import NoReturn
from typing import Union

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from apikit.core.config import ApiOption
from apikit.core.errors import ApiFail
from apikit.schemas.api import ApiFailDetail

FailInput = Union[str, Mapping[str, Any], ApiFailDetail, None]


class ApiContext:
    """Request-scoped access to the application's response conventions."""

    def __init__(self, request: Request, option: ApiOption) -> None:
        self.request = request
        self.option = option
        self.envelope: Any = None

    def fail(self, msg: FailInput = None) -> NoReturn:
        """Abort the request with an ``ApiFail``.

        ``msg`` is either the message itself or a detail carrying any of
        ``message``, ``code``, ``status`` and ``data``. Omitted fields take the
        configured defaults.
        """
        detail = _coerce_detail(msg)
        raise ApiFail(
            detail.message,
            code=detail.code if detail.code is not None else self.option.fail_code,
            data=detail.data,
            status=detail.status if detail.status is not None else self.option.fail_status,
        )

    def success(self, data: Any = None) -> JSONResponse:
        """Wrap ``data`` in the success envelope; return the result from the handler."""
        self.envelope = self.option.success(data)
        return JSONResponse(content=jsonable_encoder(self.envelope))


def _coerce_detail(msg: FailInput) -> ApiFailDetail:
    if isinstance(msg, ApiFailDetail):
        return msg
    if isinstance(msg, Mapping):
        try:
            return ApiFailDetail.model_validate(dict(msg))
        except ValidationError as exc:
            raise TypeError(f"invalid failure detail: {exc}") from exc
    return ApiFailDetail(message=msg)


def get_api_context(request: Request) -> ApiContext:
    """Provide an ``ApiContext`` for dependency injection."""
    option = getattr(request.app.state, "api_option", None)
    if option is None:
        raise RuntimeError("API response extension is not installed on this application")
    return ApiContext(request, option)
