import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from apps.catalog.exceptions import (
    DecodeError,
    ProductNotFoundError,
    QuoteNotAllowedError,
    StorefrontAPIError,
    StorefrontError,
    UnknownCategoryError,
)

logger = logging.getLogger(__name__)

# Most specific first
STATUS_CODES = [
    (ProductNotFoundError, status.HTTP_404_NOT_FOUND),
    (UnknownCategoryError, status.HTTP_400_BAD_REQUEST),
    (QuoteNotAllowedError, status.HTTP_400_BAD_REQUEST),
    (DecodeError, status.HTTP_502_BAD_GATEWAY),
    (StorefrontAPIError, status.HTTP_502_BAD_GATEWAY),
]


def storefront_exception_handler(exc, context):
    """
    Turn StorefrontErrors into {"error", "message", "retryable"} responses.
    Everything else goes through DRF's default handler.
    """
    if not isinstance(exc, StorefrontError):
        return exception_handler(exc, context)

    status_code = next(
        (code for error_class, code in STATUS_CODES if isinstance(exc, error_class)),
        status.HTTP_502_BAD_GATEWAY
    )

    view = context.get('view')
    logger.warning(
        "%s in %s: %s", type(exc).__name__, type(view).__name__ if view else 'view', exc
    )

    return Response(
        {
            'error': type(exc).__name__,
            'message': exc.user_message,
            'retryable': exc.retryable,
        },
        status=status_code,
    )
