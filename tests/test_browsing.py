"""Component browsing: filter params, pagination and stale-response guarding."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from apps.catalog.domain import ComponentPage, Pagination
from apps.catalog.exceptions import StorefrontAPIError
from apps.catalog.services.browsing import CategoryBrowser, ComponentFilters, RequestGuard
from tests.conftest import make_component


def page_of(*ids, page=1, pages=1):
    return ComponentPage(
        products=tuple(make_component(i, '100') for i in ids),
        pagination=Pagination(page=page, pages=pages, total=len(ids)),
    )


class TestComponentFilters:
    def test_defaults(self):
        assert ComponentFilters().to_params() == {'sort': 'popular', 'page': 1, 'limit': 12}

    def test_blank_values_dropped_and_names_translated(self):
        params = ComponentFilters(
            search='ryzen', min_price=Decimal('10000'), in_stock=True, condition='', min_rating=4.0
        ).to_params()

        assert params == {
            'search': 'ryzen',
            'sort': 'popular',
            'minPrice': '10000',
            'inStock': 'true',
            'minRating': 4.0,
            'page': 1,
            'limit': 12,
        }


class TestRequestGuard:
    def test_only_latest_token_is_current(self):
        guard = RequestGuard()
        first = guard.issue()
        second = guard.issue()

        assert not guard.is_current(first)
        assert guard.is_current(second)


class TestCategoryBrowser:
    @pytest.fixture
    def client(self):
        return MagicMock()

    def test_load_replaces_products(self, client):
        client.get_components_by_category.return_value = page_of('a', 'b', pages=2)
        browser = CategoryBrowser(client, 'cpu')

        assert browser.load() is True
        assert [p.id for p in browser.products] == ['a', 'b']
        assert browser.has_more
        assert browser.error is None

    def test_load_more_appends_next_page(self, client):
        client.get_components_by_category.side_effect = [
            page_of('a', pages=2),
            page_of('b', page=2, pages=2),
        ]
        browser = CategoryBrowser(client, 'cpu')
        browser.load()

        assert browser.load_more() is True
        assert [p.id for p in browser.products] == ['a', 'b']
        assert not browser.has_more
        assert client.get_components_by_category.call_args.args[1]['page'] == 2

    def test_load_more_stops_at_last_page(self, client):
        client.get_components_by_category.return_value = page_of('a')
        browser = CategoryBrowser(client, 'cpu')
        browser.load()

        assert browser.load_more() is False
        assert client.get_components_by_category.call_count == 1

    def test_update_filters_restarts_at_page_one(self, client):
        client.get_components_by_category.return_value = page_of('a')
        browser = CategoryBrowser(client, 'cpu')

        browser.update_filters(search='ryzen', sort='price-low', page=5)

        params = client.get_components_by_category.call_args.args[1]
        assert params['search'] == 'ryzen'
        assert params['sort'] == 'price-low'
        assert params['page'] == 1

    def test_failure_is_stored_not_raised(self, client):
        client.get_components_by_category.side_effect = StorefrontAPIError('boom')
        browser = CategoryBrowser(client, 'cpu')

        assert browser.load() is False
        assert browser.error == StorefrontAPIError.default_message

    def test_retry_clears_error(self, client):
        client.get_components_by_category.side_effect = [
            StorefrontAPIError('boom'),
            page_of('a'),
        ]
        browser = CategoryBrowser(client, 'cpu')
        browser.load()

        assert browser.load() is True
        assert browser.error is None

    def test_stale_response_is_discarded(self, client):
        browser = CategoryBrowser(client, 'cpu')

        def overtaken(slug, params):
            # A newer search starts while this one is still in flight
            browser.guard.issue()
            return page_of('stale')

        client.get_components_by_category.side_effect = overtaken

        assert browser.load() is False
        assert browser.products == []
