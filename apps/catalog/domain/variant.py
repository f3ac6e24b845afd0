from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from .attribute import IdentifyingAttribute


@dataclass(frozen=True)
class Variant:
    """
    Individual SKU with its own price, stock, and images.
    Each variant is a unique combination of identifying attributes.
    """
    id: str
    sku: str = ''
    name: str = ''

    # Pricing
    price: Decimal = Decimal('0')
    offer_price: Optional[Decimal] = None

    # Inventory
    stock_quantity: int = 0

    # Status
    is_active: bool = True

    identifying_attributes: Tuple[IdentifyingAttribute, ...] = field(default_factory=tuple)
    images: Dict[str, Any] = field(default_factory=dict)
    specifications: List[Dict[str, Any]] = field(default_factory=list)

    def __str__(self):
        return self.name or self.sku or self.id

    @property
    def options(self) -> Dict[str, str]:
        """Return dict of {attribute_key: value}"""
        return {attr.key: attr.value for attr in self.identifying_attributes}

    def get_option_value(self, key: str) -> Optional[str]:
        return self.options.get(key)

    def get_attribute(self, key: str) -> Optional[IdentifyingAttribute]:
        for attr in self.identifying_attributes:
            if attr.key == key:
                return attr
        return None

    def matches(self, assignment: Dict[str, str]) -> bool:
        """
        True when every non-empty key of the assignment carries the same
        value on this variant.
        """
        options = self.options
        return all(
            options.get(key) == value
            for key, value in assignment.items()
            if value
        )

    @property
    def effective_price(self) -> Decimal:
        if self.is_on_sale:
            return self.offer_price
        return self.price

    @property
    def is_on_sale(self):
        return bool(self.offer_price and 0 < self.offer_price < self.price)

    @property
    def discount_percentage(self):
        if not self.is_on_sale:
            return 0
        return int(((self.price - self.offer_price) / self.price) * 100)

    @property
    def is_in_stock(self):
        return self.stock_quantity > 0

    @property
    def primary_image_url(self) -> Optional[str]:
        gallery = self.images.get('gallery') or []
        for image in gallery:
            if isinstance(image, dict) and image.get('url'):
                return image['url']
        thumbnail = self.images.get('thumbnail') or {}
        if isinstance(thumbnail, dict):
            return thumbnail.get('url') or None
        return None
