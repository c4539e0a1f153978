# app/core/errors.py
"""
Erros de domínio e os handlers que os traduzem em respostas HTTP.

Todas as respostas de erro têm o mesmo formato:
    {"code": "...", "message": "...", "details": ...}
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.requests import Request

logger = logging.getLogger(__name__)


class AppError(Exception):
    http_status = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "details": self.details}


class ValidationError(AppError):
    http_status = 400
    code = "VALIDATION_ERROR"


class AuthenticationError(AppError):
    http_status = 401
    code = "AUTH_FAILED"

    def __init__(self, message: str = "Invalid or missing token", details: Optional[Any] = None):
        super().__init__(message, details)


class NotFoundError(AppError):
    http_status = 404
    code = "NOT_FOUND"


class StudentNotFound(NotFoundError):
    def __init__(self, student_id: Any = None):
        super().__init__("Student not found", {"student_id": student_id})


class ClassNotFound(NotFoundError):
    def __init__(self, class_id: Any = None):
        super().__init__("Class not found", {"class_id": class_id})


class DocumentNotFound(NotFoundError):
    def __init__(self, doc_id: Any = None):
        super().__init__("Document not found", {"doc_id": doc_id})


class CertificateNotFound(NotFoundError):
    def __init__(self, student_id: Any = None, certificate_type: Optional[str] = None):
        super().__init__(
            "Certificate not found",
            {"student_id": student_id, "certificate_type": certificate_type},
        )


def register_exception_handlers(api: FastAPI) -> None:
    @api.exception_handler(AppError)
    def handle_app_error(request: Request, exc: AppError):
        if exc.http_status >= 500:
            logger.error("%s %s -> %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.http_status, content=exc.to_dict())

    @api.exception_handler(RequestValidationError)
    def handle_request_validation(request: Request, exc: RequestValidationError):
        # pydantic errors can carry non-JSON ctx (exceptions), keep only the useful keys
        details = [
            {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
            for e in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content={"code": ValidationError.code, "message": "Invalid request", "details": details},
        )

    @api.exception_handler(Exception)
    def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"code": "INTERNAL_ERROR", "message": "Internal server error", "details": None},
        )
