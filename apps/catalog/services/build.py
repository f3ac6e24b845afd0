"""
PC-builder build: one component slot per configured category.
"""

import logging
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from apps.catalog.domain import Category, ComponentSelection, PCBuilderConfig, ProductSummary
from apps.catalog.exceptions import UnknownCategoryError

logger = logging.getLogger(__name__)


class BuildSelection:
    """
    Per-category component selection for one PC build.

    Slots exist only for the categories of the PCBuilderConfig the build was
    created with. Totals are recomputed from the slots on every call.
    """

    def __init__(self, config: PCBuilderConfig):
        self.config = config
        self._slots: Dict[str, Optional[ProductSummary]] = {
            slug: None for slug in config.slugs
        }

    def __repr__(self):
        return f"<BuildSelection {self.selected_count()}/{len(self._slots)}>"

    @classmethod
    def from_mapping(cls, config: PCBuilderConfig, components: Dict[str, Optional[ProductSummary]]):
        """Rebuild a selection the caller kept between requests."""
        build = cls(config)
        for slug, component in components.items():
            build.select(slug, component)
        return build

    def _check_slot(self, category_slug: str):
        if category_slug not in self._slots:
            logger.warning("Rejected component for unknown category %r", category_slug)
            raise UnknownCategoryError(category_slug)

    # =========================================================================
    # Slots
    # =========================================================================

    def select(self, category_slug: str, component: Optional[ProductSummary]) -> bool:
        """
        Fill, replace or (with None) empty one slot.
        Returns False when the slot already held the same component.
        """
        self._check_slot(category_slug)
        current = self._slots[category_slug]

        if component is None:
            if current is None:
                return False
        elif current is not None and current.id == component.id:
            return False

        self._slots[category_slug] = component
        return True

    def clear(self, category_slug: str) -> bool:
        return self.select(category_slug, None)

    def get(self, category_slug: str) -> Optional[ProductSummary]:
        self._check_slot(category_slug)
        return self._slots[category_slug]

    # =========================================================================
    # Totals
    # =========================================================================

    def total_price(self) -> Decimal:
        return sum(
            (c.effective_price for c in self._slots.values() if c is not None),
            Decimal('0')
        )

    def selected_count(self) -> int:
        return sum(1 for c in self._slots.values() if c is not None)

    def required_selected_count(self) -> int:
        return sum(
            1 for category in self.config.required
            if self._slots.get(category.slug) is not None
        )

    def completion_percentage(self) -> int:
        """Share of required categories filled; 100 when nothing is required."""
        total_required = len(self.config.required)
        if not total_required:
            return 100
        return round(100 * self.required_selected_count() / total_required)

    def is_complete(self) -> bool:
        return self.completion_percentage() == 100

    def progress_percentage(self) -> int:
        if not self._slots:
            return 0
        return round(100 * self.selected_count() / len(self._slots))

    def missing_required(self) -> List[Category]:
        return [
            category for category in sorted(self.config.required, key=lambda c: c.sort_order)
            if self._slots.get(category.slug) is None
        ]

    def can_request_quote(self) -> bool:
        return self.selected_count() > 0

    # =========================================================================
    # Export
    # =========================================================================

    def summary(self) -> List[Tuple[Category, ProductSummary]]:
        return [
            (category, self._slots[category.slug])
            for category in self.config.categories
            if self._slots.get(category.slug) is not None
        ]

    def to_components(self, notes: Optional[Dict[str, str]] = None) -> List[ComponentSelection]:
        """One quote line per configured category, selected or not."""
        notes = notes or {}
        components = []
        for category in self.config.categories:
            component = self._slots.get(category.slug)
            components.append(ComponentSelection(
                category=category.name,
                category_slug=category.slug,
                product_id=component.id if component else None,
                product_name=component.name if component else '',
                product_price=component.effective_price if component else Decimal('0'),
                user_note=notes.get(category.slug, ''),
                selected=component is not None,
                required=self.config.is_required(category.slug),
                sort_order=category.sort_order,
            ))
        return components
