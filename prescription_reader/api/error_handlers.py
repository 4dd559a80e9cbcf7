from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from prescription_reader.analyzers.errors import AnalysisError


logger = logging.getLogger(__name__)

# AnalysisError.code -> HTTP status
ANALYSIS_ERROR_STATUS = {
    "configuration_error": 500,
    "malformed_encoding": 422,
    "model_call_failed": 502,
    "invalid_model_output": 502,
}


def _get_request_id(request: Request) -> Optional[str]:
    """
    Request id set by RequestIdMiddleware, or the inbound header when the
    middleware did not run (e.g. errors raised before it).
    """
    rid = getattr(getattr(request, "state", None), "request_id", None)
    if rid:
        return rid
    return request.headers.get("X-Request-Id")


def _error_payload(code: str, message: str, request_id: Optional[str]) -> Dict[str, Any]:
    return {"error": {"code": code, "message": message, "request_id": request_id}}


def _error_response(status_code: int, code: str, message: str, rid: Optional[str]) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=_error_payload(code=code, message=message, request_id=rid),
        headers={"X-Request-Id": rid} if rid else None,
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """
    Accepts both detail shapes:
    - dict: {"code": "...", "message": "..."} as raised by the upload intake
    - str: FastAPI's default
    """
    code = "http_error"
    message = "Request failed"

    if isinstance(exc.detail, dict):
        code = str(exc.detail.get("code", code))
        message = str(exc.detail.get("message", message))
    elif isinstance(exc.detail, str):
        message = exc.detail

    return _error_response(exc.status_code, code, message, _get_request_id(request))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # "file: Field required; x: msg"
    parts = []
    for err in exc.errors():
        loc = ".".join(str(x) for x in err.get("loc", []) if x != "body")
        msg = err.get("msg", "Invalid value")
        parts.append(f"{loc}: {msg}" if loc else str(msg))

    message = "; ".join(parts) if parts else "Validation error"
    return _error_response(422, "validation_error", message, _get_request_id(request))


async def analysis_exception_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    """
    Only the fixed user message goes on the wire; the detail stays in the logs.
    """
    status = ANALYSIS_ERROR_STATUS.get(exc.code, 500)
    logger.warning("analysis_error code=%s status=%d detail=%s", exc.code, status, exc)
    return _error_response(status, exc.code, exc.user_message, _get_request_id(request))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error")
    return _error_response(500, "internal_error", "Internal server error", _get_request_id(request))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(AnalysisError, analysis_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
