"""
Paginated, filtered component browsing for one PC-builder category.
"""

import logging
import threading
from dataclasses import dataclass, asdict, replace
from decimal import Decimal
from typing import Any, Dict, List, Optional

from apps.catalog.domain import ProductSummary
from apps.catalog.exceptions import StorefrontError

logger = logging.getLogger(__name__)

SORT_CHOICES = ('popular', 'price-low', 'price-high', 'rating')
DEFAULT_PAGE_SIZE = 12

# Upstream query parameter names
_PARAM_NAMES = {
    'search': 'search',
    'sort': 'sort',
    'min_price': 'minPrice',
    'max_price': 'maxPrice',
    'in_stock': 'inStock',
    'condition': 'condition',
    'min_rating': 'minRating',
    'page': 'page',
    'limit': 'limit',
}


@dataclass(frozen=True)
class ComponentFilters:
    search: str = ''
    sort: str = 'popular'
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    in_stock: Optional[bool] = None
    condition: str = ''
    min_rating: Optional[float] = None
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    def to_params(self) -> Dict[str, Any]:
        """Upstream query params, blank values dropped."""
        params = {}
        for name, value in asdict(self).items():
            if value is None or value == '':
                continue
            if isinstance(value, bool):
                value = 'true' if value else 'false'
            elif isinstance(value, Decimal):
                value = str(value)
            params[_PARAM_NAMES[name]] = value
        return params


class RequestGuard:
    """
    Generation counter for overlapping requests.
    Only the most recently issued token may apply its response.
    """

    def __init__(self):
        self._generation = 0
        self._lock = threading.Lock()

    def issue(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._generation


class CategoryBrowser:
    """
    Component list state for one category: filters, loaded pages and the
    last error. Upstream failures are kept in `error` for a retry, not raised.
    """

    def __init__(self, client, category_slug: str, filters: Optional[ComponentFilters] = None):
        self.client = client
        self.category_slug = category_slug
        self.filters = filters or ComponentFilters()
        self.products: List[ProductSummary] = []
        self.page = 0
        self.has_more = False
        self.error: Optional[str] = None
        self.guard = RequestGuard()

    def __repr__(self):
        return f"<CategoryBrowser {self.category_slug} page={self.page}>"

    def update_filters(self, **changes) -> bool:
        """Apply filter changes, then reload from page 1."""
        changes.pop('page', None)
        self.filters = replace(self.filters, page=1, **changes)
        return self.load()

    def load(self, append: bool = False) -> bool:
        """
        Fetch one page. Returns True when the response was applied; a
        response overtaken by a newer request is discarded.
        """
        page = self.page + 1 if append else 1
        token = self.guard.issue()
        filters = replace(self.filters, page=page)

        try:
            result = self.client.get_components_by_category(
                self.category_slug, filters.to_params()
            )
        except StorefrontError as exc:
            if not self.guard.is_current(token):
                logger.debug("Dropped stale failure for %s: %s", self.category_slug, exc)
                return False
            logger.warning("Loading %s components failed: %s", self.category_slug, exc)
            self.error = exc.user_message
            return False

        if not self.guard.is_current(token):
            logger.debug("Dropped stale page %s for %s", page, self.category_slug)
            return False

        if append:
            self.products.extend(result.products)
        else:
            self.products = list(result.products)
        self.page = result.pagination.page or page
        self.has_more = result.pagination.has_more
        self.error = None
        return True

    def load_more(self) -> bool:
        if not self.has_more:
            return False
        return self.load(append=True)
