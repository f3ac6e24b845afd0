"""
Errors raised by the storefront configurator.

Every error carries a user_message that is safe to show next to a
"Try again" button; nothing here is fatal to the caller.
"""


class StorefrontError(Exception):
    """Base class for configurator errors."""
    default_message = 'Something went wrong. Please try again.'
    retryable = False

    def __init__(self, message=None, user_message=None):
        self.user_message = user_message or self.default_message
        super().__init__(message or self.user_message)


class StorefrontAPIError(StorefrontError):
    """
    The upstream commerce API failed or answered with a non-2xx status.
    status_code is None for transport failures (connection, timeout).
    """
    default_message = 'The store is not reachable right now. Please try again.'
    retryable = True

    def __init__(self, message=None, status_code=None, user_message=None):
        self.status_code = status_code
        super().__init__(message, user_message=user_message)


class ProductNotFoundError(StorefrontAPIError):
    default_message = 'Product not found.'
    retryable = False


class DecodeError(StorefrontError):
    """An upstream payload did not match the expected shape."""
    default_message = 'The store returned an unexpected response.'
    retryable = True

    def __init__(self, message=None, errors=None):
        self.errors = errors or {}
        super().__init__(message)


class UnknownCategoryError(StorefrontError):
    """A component was offered for a slot the PC builder does not define."""

    def __init__(self, category_slug):
        self.category_slug = category_slug
        super().__init__(
            f"Unknown PC builder category: {category_slug}",
            user_message=f"'{category_slug}' is not a PC builder category.",
        )


class QuoteNotAllowedError(StorefrontError):
    default_message = 'Select at least one component to request a quote.'


class QuoteSubmissionError(StorefrontError):
    default_message = 'Failed to submit quote request'
    retryable = True
