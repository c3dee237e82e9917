"""Validation error responses with stable error codes."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

MISSING_FIELD = "missing-field"
INVALID_FORMAT = "invalid-format"
INVALID_ENUM = "invalid-enum"
NON_POSITIVE_COUNT = "non-positive-count"
INVALID_VALUE = "invalid-value"

_FORMAT_ERRORS = {
    "string_pattern_mismatch",
    "string_type",
    "date_parsing",
    "date_from_datetime_parsing",
    "date_from_datetime_inexact",
    "date_type",
    "datetime_parsing",
    "datetime_from_date_parsing",
    "datetime_type",
    "int_parsing",
    "int_type",
    "int_from_float",
    "float_parsing",
    "float_type",
    "bool_parsing",
    "bool_type",
    "json_invalid",
    "model_attributes_type",
    "list_type",
    "dict_type",
}


def error_code(error: dict[str, Any]) -> str:
    """Map a pydantic error entry to the API's error code."""

    kind = error.get("type", "")
    loc = error.get("loc") or ()
    field = loc[-1] if loc else None

    if kind == "missing":
        return MISSING_FIELD
    if kind == "string_too_short" and not str(error.get("input") or "").strip():
        return MISSING_FIELD
    if kind == "enum":
        return INVALID_ENUM
    if field == "count" and kind in {"greater_than", "greater_than_equal"}:
        return NON_POSITIVE_COUNT
    if field == "bikes" and kind == "too_short":
        return NON_POSITIVE_COUNT
    if kind in _FORMAT_ERRORS:
        return INVALID_FORMAT
    return INVALID_VALUE


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "code": error_code(error)}
        for error in exc.errors()
    ]
    logger.info(
        "Rejected %s %s: %s",
        request.method,
        request.url.path,
        ", ".join(f"{'.'.join(map(str, item['loc']))}={item['code']}" for item in details),
    )
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder({"detail": details}),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
