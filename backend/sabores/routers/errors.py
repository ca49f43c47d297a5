from typing import Any

from fastapi import HTTPException, status

from ..domain.errors import DomainError, NotFoundError, PersistenceError, ValidationError


def http_error(error: DomainError) -> HTTPException:
    """Translate a workflow error into the HTTP response it should produce."""
    detail: dict[str, Any] = {"error": error.message}
    if isinstance(error, ValidationError):
        if error.missing_fields:
            detail["missing_fields"] = list(error.missing_fields)
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    if isinstance(error, PersistenceError):
        detail = {"error": "store operation failed", "message": error.message}
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
