"""
Error taxonomy and the per-handler error boundary.

Controllers classify domain failures into the ``AppError`` subclasses
below. Anything else escaping a controller method is logged and collapsed
into an ``InternalError`` so clients never see exception details.
"""
import functools
import logging
from typing import Any, Awaitable, Callable, TypeVar

from fastapi import status

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


class AppError(Exception):
    """Base class for errors rendered into the failure envelope."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied for guest users"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"


# Integration failures. These are not AppErrors on purpose: unless a
# controller handles them they surface as InternalError.

class ExternalServiceError(Exception):
    """An outbound call to a third-party API failed."""


class PaymentProviderError(ExternalServiceError):
    """The payment processor rejected or failed a request."""


class EmailDeliveryError(ExternalServiceError):
    """The mail transport could not deliver a message."""


def error_boundary(message: str = "Internal server error") -> Callable[[F], F]:
    """Wrap an async controller method so unexpected failures become a 500.

    ``AppError`` subclasses pass through untouched; every other exception is
    logged with its traceback and replaced by ``InternalError(message)``.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except AppError:
                raise
            except Exception:
                logger.exception(f"Unhandled error in {func.__qualname__}")
                raise InternalError(message)

        return wrapper  # type: ignore[return-value]

    return decorator
