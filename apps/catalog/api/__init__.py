from .exceptions import storefront_exception_handler

__all__ = [
    'storefront_exception_handler',
]
