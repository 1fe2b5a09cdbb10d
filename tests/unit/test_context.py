"""Unit tests for request-scoped fail/success helpers."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi import Request
import pytest

from apikit.core.config import ApiOption
from apikit.core.context import ApiContext
from apikit.core.context import get_api_context
from apikit.core.errors import ApiFail
from apikit.schemas.api import ApiFailDetail


def _context(option: ApiOption | None = None) -> ApiContext:
    app = FastAPI()
    return ApiContext(Request({"type": "http", "app": app}), option or ApiOption())


@pytest.mark.parametrize("message", ["not found", "", "ошибка"])
def test_fail_with_message_uses_configured_defaults(message: str) -> None:
    ctx = _context(ApiOption(fail_code=1000, fail_status=409))

    with pytest.raises(ApiFail) as excinfo:
        ctx.fail(message)

    err = excinfo.value
    assert err.message == message
    assert err.code == 1000
    assert err.status == 409
    assert err.data is None
    assert err.expose is True


def test_fail_with_default_option() -> None:
    with pytest.raises(ApiFail) as excinfo:
        _context().fail("not found")

    assert excinfo.value.status == 422
    assert excinfo.value.code is None


def test_fail_detail_fields_override_defaults() -> None:
    ctx = _context(ApiOption(fail_code=1000, fail_status=409))

    with pytest.raises(ApiFail) as excinfo:
        ctx.fail({"message": "bad", "code": 4001, "status": 400, "data": {"field": "name"}})

    err = excinfo.value
    assert (err.message, err.code, err.status, err.data) == ("bad", 4001, 400, {"field": "name"})


def test_fail_detail_fields_fall_back_per_field() -> None:
    ctx = _context(ApiOption(fail_code=1000, fail_status=409))

    with pytest.raises(ApiFail) as excinfo:
        ctx.fail(ApiFailDetail(message="bad", status=400))

    assert excinfo.value.code == 1000
    assert excinfo.value.status == 400

    with pytest.raises(ApiFail) as excinfo:
        ctx.fail({"message": "bad", "code": 5, "status": None})

    assert excinfo.value.code == 5
    assert excinfo.value.status == 409


def test_fail_keeps_zero_code() -> None:
    with pytest.raises(ApiFail) as excinfo:
        _context(ApiOption(fail_code=1000)).fail({"code": 0})

    assert excinfo.value.code == 0


def test_fail_without_arguments_raises() -> None:
    with pytest.raises(ApiFail) as excinfo:
        _context().fail()

    assert excinfo.value.message is None
    assert excinfo.value.status == 422


def test_success_builds_configured_envelope() -> None:
    ctx = _context(ApiOption(success=lambda data: {"ok": True, "data": data}))

    response = ctx.success({"id": 1})

    assert ctx.envelope == {"ok": True, "data": {"id": 1}}
    assert response.status_code == 200
    assert response.media_type == "application/json"
    assert response.body == b'{"ok":true,"data":{"id":1}}'


def test_get_api_context_requires_installation() -> None:
    request = Request({"type": "http", "app": FastAPI()})

    with pytest.raises(RuntimeError, match="not installed"):
        get_api_context(request)


def test_fail_accepts_fractional_code() -> None:
    with pytest.raises(ApiFail) as excinfo:
        _context().fail({"message": "bad", "code": 1.5, "status": 400})

    assert excinfo.value.code == 1.5
    assert excinfo.value.status == 400


def test_fail_with_malformed_detail_is_a_type_error() -> None:
    with pytest.raises(TypeError, match="invalid failure detail"):
        _context().fail({"message": "bad", "code": "not-a-number"})


def test_fail_rejects_out_of_range_status() -> None:
    with pytest.raises(ValueError, match="status"):
        _context().fail({"message": "bad", "status": 42})
