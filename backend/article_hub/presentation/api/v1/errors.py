"""Translation of domain exceptions into HTTP errors."""

from fastapi import HTTPException, status

from article_hub.domain.exceptions import (
    AuthProviderError,
    DuplicateSlugError,
    EntityNotFoundError,
    ValidationError,
)

DomainError = ValidationError | DuplicateSlugError | EntityNotFoundError | AuthProviderError


def to_http_exception(exc: DomainError) -> HTTPException:
    """Map a user-facing domain error to a distinguishable HTTP status."""
    if isinstance(exc, ValidationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(exc), "errors": exc.errors},
        )
    if isinstance(exc, DuplicateSlugError):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"message": exc.message, "slug": exc.slug},
        )
    if isinstance(exc, EntityNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if exc.is_client_error:
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail="Authentication service unavailable",
    )
