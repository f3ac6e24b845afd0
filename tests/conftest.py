"""Shared fixtures for the storefront configurator test suite.

Domain objects are built in memory; the upstream API is never called.
"""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from apps.catalog.domain import (
    Category,
    IdentifyingAttribute,
    PCBuilderConfig,
    Product,
    ProductSummary,
    Variant,
)


def make_variant(id, price='100', stock=1, active=True, offer=None, **attrs):
    return Variant(
        id=id,
        sku=id.upper(),
        name=id,
        price=Decimal(price),
        offer_price=Decimal(offer) if offer is not None else None,
        stock_quantity=stock,
        is_active=active,
        identifying_attributes=tuple(
            IdentifyingAttribute(key=key, value=value, label=key.title())
            for key, value in attrs.items()
        ),
    )


def make_component(id, price, offer=None, **kwargs):
    """ProductSummary as served by the components endpoint; price is what is charged."""
    return ProductSummary(
        id=id,
        name=kwargs.pop('name', id),
        price=Decimal(offer if offer is not None else price),
        original_price=Decimal(price) if offer is not None else None,
        **kwargs
    )


# =============================================================================
# VARIANT FIXTURES
# =============================================================================

@pytest.fixture
def phone_variants():
    """
    color x storage grid with holes:
    black/128 and black/256 exist, white only as 256, blue is inactive.
    """
    return [
        make_variant('black-128', price='100', stock=2, color='black', storage='128GB'),
        make_variant('black-256', price='120', stock=0, color='black', storage='256GB'),
        make_variant('white-256', price='130', stock=3, color='white', storage='256GB'),
        make_variant('blue-128', price='100', stock=5, active=False, color='blue', storage='128GB'),
    ]


@pytest.fixture
def phone(phone_variants):
    return Product(
        id='p-phone',
        name='Phone X',
        slug='phone-x',
        base_price=Decimal('100'),
        has_variants=True,
        variants=tuple(phone_variants),
    )


# =============================================================================
# PC BUILDER FIXTURES
# =============================================================================

@pytest.fixture
def pc_config():
    """cpu and motherboard required, case-fan optional."""
    return PCBuilderConfig(
        required=(
            Category(slug='cpu', name='Processor', required=True, sort_order=1),
            Category(slug='motherboard', name='Motherboard', required=True, sort_order=2),
        ),
        optional=(
            Category(slug='case-fan', name='Case Fan', sort_order=1),
        ),
    )


@pytest.fixture
def cpu():
    return make_component('cpu-1', '18999', name='Ryzen 5 7600')


@pytest.fixture
def motherboard():
    return make_component('mb-1', '15000', offer='13500', name='B650M')


@pytest.fixture
def case_fan():
    return make_component('fan-1', '899', name='120mm Fan')


# =============================================================================
# UPSTREAM FIXTURES
# =============================================================================

@pytest.fixture
def storefront_client(pc_config):
    """Stand-in for StorefrontClient with the PC-builder config preloaded."""
    client = MagicMock()
    client.get_pc_builder_config.return_value = pc_config
    return client


def mock_response(status_code=200, body=None, json_error=False):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if json_error:
        response.json.side_effect = ValueError('No JSON object could be decoded')
    else:
        response.json.return_value = body
    return response
