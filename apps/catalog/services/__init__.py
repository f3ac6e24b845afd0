from .variant_navigation import VariantNavigationService
from .build import BuildSelection
from .quotes import QuoteService, RequirementsService
from .browsing import CategoryBrowser, ComponentFilters, RequestGuard

__all__ = [
    'VariantNavigationService',
    'BuildSelection',
    'QuoteService',
    'RequirementsService',
    'CategoryBrowser',
    'ComponentFilters',
    'RequestGuard',
]
