from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Tuple

from .attribute import AttributeDimension
from .variant import Variant


@dataclass(frozen=True)
class Product:
    """
    Configurable product as returned by the product detail endpoint.
    Products without variants are priced from base_price/offer_price.
    """
    id: str
    name: str
    slug: str = ''
    brand_name: str = ''
    base_price: Decimal = Decimal('0')
    offer_price: Optional[Decimal] = None
    stock_quantity: int = 0
    has_variants: bool = False
    variants: Tuple[Variant, ...] = field(default_factory=tuple)
    dimensions: Tuple[AttributeDimension, ...] = field(default_factory=tuple)
    thumbnail_url: Optional[str] = None

    def __str__(self):
        return self.name

    @property
    def active_variants(self) -> List[Variant]:
        return [v for v in self.variants if v.is_active]

    @property
    def default_variant(self) -> Optional[Variant]:
        """First active variant carrying attributes, else the first such variant."""
        valid = [v for v in self.variants if v.identifying_attributes]
        if not valid:
            return None
        for variant in valid:
            if variant.is_active:
                return variant
        return valid[0]

    def get_dimensions(self) -> Tuple[AttributeDimension, ...]:
        """
        Declared dimensions, or dimensions inferred from the variants'
        identifying attributes in first-seen order.
        """
        if self.dimensions:
            return self.dimensions

        labels = {}
        values = {}
        for variant in self.variants:
            for attr in variant.identifying_attributes:
                labels.setdefault(attr.key, attr.label or attr.key)
                seen = values.setdefault(attr.key, [])
                if attr.value not in seen:
                    seen.append(attr.value)

        return tuple(
            AttributeDimension(key=key, label=label, possible_values=tuple(values[key]))
            for key, label in labels.items()
        )

    def price_info(self, variant: Optional[Variant] = None) -> dict:
        """Price and stock shown next to the buy button."""
        if variant is not None:
            return {
                'price': variant.price,
                'offer_price': variant.offer_price,
                'effective_price': variant.effective_price,
                'stock_quantity': variant.stock_quantity,
            }
        offer = self.offer_price
        effective = offer if offer and 0 < offer < self.base_price else self.base_price
        return {
            'price': self.base_price,
            'offer_price': offer,
            'effective_price': effective,
            'stock_quantity': self.stock_quantity,
        }


@dataclass(frozen=True)
class ProductSummary:
    """
    Component card listed inside a PC-builder category.
    price is what the customer pays, original_price the list price.
    """
    id: str
    name: str
    slug: str = ''
    price: Decimal = Decimal('0')
    original_price: Optional[Decimal] = None
    discount_percentage: int = 0
    image: str = ''
    in_stock: bool = True
    stock_quantity: Optional[int] = None
    brand: str = ''
    rating: float = 0.0
    review_count: int = 0
    condition: str = ''

    def __str__(self):
        return self.name

    @property
    def effective_price(self) -> Decimal:
        return self.price


@dataclass(frozen=True)
class Pagination:
    page: int = 1
    pages: int = 1
    total: int = 0
    limit: Optional[int] = None

    @property
    def has_more(self):
        return self.page < self.pages


@dataclass(frozen=True)
class ComponentPage:
    """One page of components for a PC-builder category."""
    products: Tuple[ProductSummary, ...] = field(default_factory=tuple)
    pagination: Pagination = field(default_factory=Pagination)
    category_name: str = ''
