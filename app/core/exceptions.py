# app/core/exceptions.py
"""
Typed errors raised by the service and repository layers.

Every error carries an ``ErrorKind`` and the HTTP status it maps to. The
exception handlers registered in ``app.core.exception_handler`` render them
with ``to_body()``, so the key under which the detail is sent is chosen where
the error is raised.
"""
from enum import Enum
from typing import Any, Dict, Optional

from fastapi import status


class ErrorKind(str, Enum):
    """Categories of failure a request can end in."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STORE_FAILURE = "store_failure"


class BookstoreException(Exception):
    """Base class for all application errors."""

    kind: ErrorKind = ErrorKind.STORE_FAILURE
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(
        self,
        detail: Optional[str] = None,
        *,
        body_key: str = "message",
        details: Optional[Any] = None,
    ):
        self.detail = detail if detail is not None else self.default_detail
        self.body_key = body_key
        self.details = details
        super().__init__(self.detail)

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {self.body_key: self.detail}
        if self.details is not None:
            body["details"] = self.details
        return body

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(kind={self.kind.value}, detail={self.detail!r})>"


class ValidationError(BookstoreException):
    """Input rejected before reaching the store."""

    kind = ErrorKind.VALIDATION
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Requisição inválida."

    def __init__(self, detail: Optional[str] = None, *, body_key: str = "error", **kwargs):
        super().__init__(detail, body_key=body_key, **kwargs)


class ResourceNotFound(BookstoreException):
    kind = ErrorKind.NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Livro não encontrado"


class StoreError(BookstoreException):
    """Failure raised by the persistence layer."""

    kind = ErrorKind.STORE_FAILURE
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


__all__ = [
    "ErrorKind",
    "BookstoreException",
    "ValidationError",
    "ResourceNotFound",
    "StoreError",
]
