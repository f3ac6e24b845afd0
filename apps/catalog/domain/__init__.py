"""
Catalog domain objects for the storefront configurator.

Everything here is decoded from the upstream commerce API and is never
written back, so these are plain immutable dataclasses rather than ORM models.

Object Hierarchy:
- Product: Configurable product (e.g., "Laptop Model X")
- AttributeDimension: Selectable axis of a product (Color, Storage, RAM)
- IdentifyingAttribute: Concrete key/value tagged on a variant (color=black)
- Variant: Individual SKU with price, offer price, stock and images
- ProductSummary: Component card shown inside a PC-builder category
- Category / PCBuilderConfig: PC-builder slots, required or optional
- CustomerDetails / ComponentSelection / QuoteReceipt: quote request lifecycle
"""

from .attribute import AttributeDimension, IdentifyingAttribute
from .variant import Variant
from .product import Product, ProductSummary, Pagination, ComponentPage
from .category import Category, PCBuilderConfig
from .quote import CustomerDetails, ComponentSelection, QuoteReceipt, PCRequirements

__all__ = [
    'AttributeDimension',
    'IdentifyingAttribute',
    'Variant',
    'Product',
    'ProductSummary',
    'Pagination',
    'ComponentPage',
    'Category',
    'PCBuilderConfig',
    'CustomerDetails',
    'ComponentSelection',
    'QuoteReceipt',
    'PCRequirements',
]
