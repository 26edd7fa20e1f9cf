"""DRF exception handler translating domain errors into HTTP responses."""

from __future__ import annotations

import logging

from rest_framework import exceptions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler as drf_exception_handler  # type: ignore

from shared.domain.exceptions import (
    ActionForbidden,
    ConcurrentConflict,
    DomainValidationError,
    EntityNotFound,
)

logger = logging.getLogger(__name__)


def domain_exception_handler(exc, context):  # type: ignore
    """Map the domain error taxonomy onto DRF's error responses."""

    if isinstance(exc, DomainValidationError):
        exc = exceptions.ValidationError(exc.errors)
    elif isinstance(exc, ActionForbidden):
        exc = exceptions.PermissionDenied(exc.message)
    elif isinstance(exc, EntityNotFound):
        exc = exceptions.NotFound(exc.message)
    elif isinstance(exc, ConcurrentConflict):
        logger.info(f"Concurrent conflict: {exc.message}")
        return Response(
            {"detail": exc.message},
            status=status.HTTP_409_CONFLICT,
            headers={"Retry-After": str(exc.retry_after)},
        )
    return drf_exception_handler(exc, context)
