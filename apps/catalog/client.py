"""
HTTP client for the upstream iTech commerce API.

Every response body is decoded through apps.catalog.payloads before it is
returned, so callers only ever see domain objects or a StorefrontError.
"""

import logging
from typing import Any, Dict, Optional, Tuple

import requests
from django.conf import settings
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from apps.catalog.domain import (
    ComponentPage,
    PCBuilderConfig,
    Pagination,
    Product,
    ProductSummary,
    QuoteReceipt,
)
from apps.catalog.exceptions import DecodeError, ProductNotFoundError, StorefrontAPIError
from apps.catalog.payloads import (
    ComponentPagePayloadSerializer,
    PaginationPayloadSerializer,
    PCBuilderConfigPayloadSerializer,
    ProductPayloadSerializer,
    ProductSummaryPayloadSerializer,
    QuoteReceiptPayloadSerializer,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


def _create_session() -> requests.Session:
    session = requests.Session()
    # Reads only: a retried POST could file the same quote twice
    retry = Retry(
        total=2,
        backoff_factor=0.5,
        status_forcelist=[502, 503, 504],
        allowed_methods=['GET'],
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount('https://', adapter)
    session.mount('http://', adapter)
    return session


class StorefrontClient:
    """Thin wrapper over the upstream REST endpoints used by the configurator."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or _create_session()

    def __repr__(self):
        return f"<StorefrontClient {self.base_url}>"

    # =========================================================================
    # Transport
    # =========================================================================

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)

        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.warning("Upstream %s %s failed: %s", method, path, exc)
            raise StorefrontAPIError(f"{method} {path} failed: {exc}") from exc

        if not response.ok:
            message = self._error_message(response)
            logger.warning("Upstream %s %s returned %s: %s", method, path, response.status_code, message)
            raise StorefrontAPIError(
                f"{method} {path} returned {response.status_code}: {message}",
                status_code=response.status_code,
                user_message=message or None,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise DecodeError(f"{method} {path} returned a non-JSON body") from exc

    @staticmethod
    def _error_message(response) -> str:
        try:
            body = response.json()
        except ValueError:
            return ''
        if isinstance(body, dict):
            return body.get('message') or body.get('error') or ''
        return ''

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._request('GET', path, params=params)

    def _post(self, path: str, payload: Dict[str, Any]) -> Any:
        return self._request('POST', path, json=payload)

    @staticmethod
    def _expect_dict(body: Any, path: str) -> Dict[str, Any]:
        if not isinstance(body, dict):
            raise DecodeError(f"{path} returned {type(body).__name__}, expected an object")
        return body

    # =========================================================================
    # Products
    # =========================================================================

    def get_product(self, slug: str) -> Product:
        """
        Product detail by slug, falling back to the id route.
        Older products are only reachable through `/products/:id`.
        """
        last_error = None
        for path in (f"/products/slug/{slug}", f"/products/{slug}"):
            try:
                body = self._expect_dict(self._get(path), path)
            except StorefrontAPIError as exc:
                if exc.status_code != 404:
                    raise
                last_error = exc
                continue
            payload = body.get('product', body)
            return ProductPayloadSerializer.decode(payload)

        raise ProductNotFoundError(
            f"Product {slug!r} not found: {last_error}",
            status_code=404,
        )

    def list_products(self, **params) -> Tuple[Tuple[ProductSummary, ...], Pagination]:
        body = self._expect_dict(self._get('/products', params=params), '/products')
        products = ProductSummaryPayloadSerializer.decode_many(body.get('products') or [])
        pagination = PaginationPayloadSerializer.decode(body.get('pagination') or {})
        return products, pagination

    # =========================================================================
    # PC Builder
    # =========================================================================

    def get_pc_builder_config(self) -> PCBuilderConfig:
        path = '/custom-pc/config'
        body = self._expect_dict(self._get(path), path)
        return PCBuilderConfigPayloadSerializer.decode(body.get('config', body))

    def get_components_by_category(
        self,
        category_slug: str,
        params: Optional[Dict[str, Any]] = None
    ) -> ComponentPage:
        path = f"/custom-pc/components/{category_slug}"
        body = self._expect_dict(self._get(path, params=params), path)
        return ComponentPagePayloadSerializer.decode(body)

    def create_pc_quote(self, payload: Dict[str, Any]) -> QuoteReceipt:
        path = '/custom-pc/quote'
        body = self._expect_dict(self._post(path, payload), path)
        return QuoteReceiptPayloadSerializer.decode(body)

    def create_pc_requirements(self, payload: Dict[str, Any]) -> str:
        path = '/custom-pc/requirements'
        body = self._expect_dict(self._post(path, payload), path)
        return body.get('message') or ''


def get_storefront_client() -> StorefrontClient:
    return StorefrontClient(
        settings.STOREFRONT_API_URL,
        timeout=settings.STOREFRONT_API_TIMEOUT,
    )
