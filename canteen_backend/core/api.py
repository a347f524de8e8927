# core/api.py

"""
API ERROR NORMALIZATION

Purpose:
- One response envelope for every failure:
    {"error": {"code": "...", "message": "...", "details": {...}?}}
- Domain errors (core.exceptions) map to their own code + HTTP status.
- DRF errors (validation, auth, 404) keep their status but use the same envelope.
"""

from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions import CanteenError, PersistenceError, StandMismatchError

logger = logging.getLogger(__name__)


def error_response(*, code: str, message: str, http_status: int, details=None):
    body = {"code": code, "message": message}
    if details:
        body["details"] = details
    return Response({"error": body}, status=http_status)


def _details_for(exc: CanteenError):
    if isinstance(exc, StandMismatchError):
        return {
            "current_stand": str(exc.current_stand_id) if exc.current_stand_id else None,
            "requested_stand": str(exc.requested_stand_id) if exc.requested_stand_id else None,
        }
    product_name = getattr(exc, "product_name", None)
    if product_name:
        return {"product_name": product_name}
    return None


def canteen_exception_handler(exc, context):
    if isinstance(exc, CanteenError):
        if isinstance(exc, PersistenceError):
            logger.error(
                "Persistence failure surfaced to client",
                extra={"view": context.get("view").__class__.__name__ if context.get("view") else None},
            )
        return error_response(
            code=exc.code,
            message=exc.message,
            http_status=exc.http_status,
            details=_details_for(exc),
        )

    response = exception_handler(exc, context)
    if response is None:
        return None

    data = response.data
    if isinstance(data, dict) and "detail" in data and len(data) == 1:
        message = str(data["detail"])
        details = None
    else:
        message = "Invalid input"
        details = data

    code = getattr(exc, "default_code", None) or "error"
    if response.status_code == status.HTTP_400_BAD_REQUEST and details is not None:
        code = "validation_error"

    response.data = {"error": {"code": str(code).upper(), "message": message}}
    if details is not None:
        response.data["error"]["details"] = details
    return response
