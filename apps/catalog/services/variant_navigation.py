"""
Service for resolving attribute selections against a product's variants.
Which options stay selectable is read off the variants that exist, so a
product needs no separate compatibility table.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from apps.catalog.domain import AttributeDimension, Product, Variant

logger = logging.getLogger(__name__)


COLOR_HEX_CODES = {
    'black': '#000000',
    'white': '#FFFFFF',
    'silver': '#C0C0C0',
    'gray': '#808080',
    'space black': '#333333',
    'space gray': '#535353',
    'blue': '#007AFF',
    'red': '#FF3B30',
    'green': '#34C759',
    'yellow': '#FFCC00',
    'pink': '#FF2D55',
    'purple': '#AF52DE',
    'gold': '#FFD700',
    'midnight': '#171717',
    'starlight': '#F8F9FA',
    'space blue': '#1E3A5F',
}
DEFAULT_HEX_CODE = '#CCCCCC'

# Matching the key the user just clicked outweighs any single sibling key
CHANGED_KEY_BONUS = 2


def get_color_hex_code(color_name: str) -> str:
    return COLOR_HEX_CODES.get((color_name or '').lower(), DEFAULT_HEX_CODE)


@dataclass(frozen=True)
class AttributeOptionState:
    """One selectable value of a dimension, as the selector should render it."""
    value: str
    display_value: str
    hex_code: Optional[str] = None
    is_color: bool = False
    stock: int = 0
    variant_count: int = 0
    is_compatible: bool = False
    is_selected: bool = False

    @property
    def in_stock(self):
        return self.stock > 0


@dataclass(frozen=True)
class DimensionAvailability:
    key: str
    label: str
    options: Tuple[AttributeOptionState, ...] = field(default_factory=tuple)

    def compatible_values(self) -> List[str]:
        return [opt.value for opt in self.options if opt.is_compatible]


@dataclass(frozen=True)
class Resolution:
    """
    Outcome of a selection change.
    variant is None only when the product has no active variant at all.
    """
    variant: Optional[Variant]
    selection: Dict[str, str]
    exact: bool
    availability: Dict[str, DimensionAvailability] = field(default_factory=dict)


class VariantNavigationService:
    """
    Stateless resolver over an in-memory variant list.
    Nothing here performs I/O; callers pass the variants they fetched.
    """

    @staticmethod
    def find_exact_match(
        variants: Sequence[Variant],
        assignment: Dict[str, str]
    ) -> Optional[Variant]:
        """
        First active variant (list order) carrying every non-empty value
        of the assignment.
        """
        for variant in variants:
            if variant.is_active and variant.matches(assignment):
                return variant
        return None

    @staticmethod
    def find_best_compatible_variant(
        variants: Sequence[Variant],
        assignment: Dict[str, str],
        changed_key: Optional[str] = None
    ) -> Optional[Variant]:
        """
        Find the variant that best honours the assignment when no exact match exists.

        Score is based on:
        - +1 for each assignment key the variant matches
        - +2 more when the variant matches the key the user just changed

        Variants in stock are preferred; when none is in stock every active
        variant is scored so the selector still lands somewhere.

        Returns:
            Best scoring Variant, or None when no active variant exists
        """
        active = [v for v in variants if v.is_active]
        candidates = [v for v in active if v.is_in_stock] or active
        if not candidates:
            return None

        fixed = {k: v for k, v in assignment.items() if v}
        changed_value = fixed.get(changed_key) if changed_key else None

        scored = []
        for position, variant in enumerate(candidates):
            options = variant.options
            score = sum(1 for key, value in fixed.items() if options.get(key) == value)
            matches_changed = changed_value is not None and options.get(changed_key) == changed_value
            if matches_changed:
                score += CHANGED_KEY_BONUS
            scored.append((not matches_changed, -score, position, variant))

        scored.sort(key=lambda item: item[:3])
        return scored[0][3]

    @staticmethod
    def get_available_options(
        variants: Sequence[Variant],
        current_selections: Dict[str, str],
        target_key: str
    ) -> List[AttributeOptionState]:
        """
        Given current selections, return every value of the target dimension
        and whether it is still reachable.

        Example:
            current_selections = {'storage': '512GB'}
            target_key = 'color'
            -> 'white' is compatible only if some active variant is white AND 512GB

        The target dimension is left out of the check so every value of it
        stays visible; only sibling selections gate it. Stock never hides a
        value, it is reported through `stock`/`in_stock`.
        """
        siblings = {
            k: v for k, v in current_selections.items()
            if k != target_key and v
        }
        current_value = current_selections.get(target_key)

        states = {}
        for variant in variants:
            if not variant.is_active:
                continue
            attr = variant.get_attribute(target_key)
            if attr is None:
                continue

            state = states.get(attr.value)
            if state is None:
                state = {
                    'value': attr.value,
                    'display_value': attr.get_display_value(),
                    'hex_code': attr.hex_code,
                    'is_color': attr.is_color or target_key == 'color',
                    'stock': 0,
                    'variant_count': 0,
                    'is_compatible': False,
                    'is_selected': attr.value == current_value,
                }
                states[attr.value] = state

            state['stock'] += variant.stock_quantity or 0
            state['variant_count'] += 1
            if not state['is_compatible'] and variant.matches(siblings):
                state['is_compatible'] = True

        return [AttributeOptionState(**state) for state in states.values()]

    @staticmethod
    def get_all_available_options(
        variants: Sequence[Variant],
        dimensions: Iterable[AttributeDimension],
        current_selections: Dict[str, str]
    ) -> Dict[str, DimensionAvailability]:
        """
        Get availability for each dimension, given current selections.

        Options follow the dimension's declared value order, then any value
        only the variants know about. Declared values that no active variant
        carries are dropped.
        """
        result = {}

        for dimension in dimensions:
            available = VariantNavigationService.get_available_options(
                variants,
                current_selections,
                dimension.key
            )
            by_value = {opt.value: opt for opt in available}

            ordered = [by_value.pop(v) for v in dimension.possible_values if v in by_value]
            ordered.extend(by_value.values())

            result[dimension.key] = DimensionAvailability(
                key=dimension.key,
                label=dimension.label or dimension.key,
                options=tuple(ordered),
            )

        return result

    @staticmethod
    def resolve_change(
        variants: Sequence[Variant],
        current_selection: Dict[str, str],
        changed_key: str,
        changed_value: str,
        dimensions: Optional[Iterable[AttributeDimension]] = None
    ) -> Resolution:
        """
        Apply one attribute click and settle on a variant.

        An exact match keeps the proposed selection. Otherwise the best
        compatible variant is adopted, its attributes fill in the selection
        and the clicked value is kept so the user's choice is never undone.
        """
        proposed = dict(current_selection)
        proposed[changed_key] = changed_value

        if dimensions is None:
            dimensions = Product(id='', name='', variants=tuple(variants)).get_dimensions()
        dimensions = list(dimensions)

        variant = VariantNavigationService.find_exact_match(variants, proposed)
        exact = variant is not None
        selection = proposed

        if not exact:
            variant = VariantNavigationService.find_best_compatible_variant(
                variants, proposed, changed_key
            )
            if variant is not None:
                selection = dict(current_selection)
                selection.update(variant.options)
                selection[changed_key] = changed_value
                logger.debug(
                    "No exact variant for %s, adopted %s", proposed, variant.id
                )

        return Resolution(
            variant=variant,
            selection=selection,
            exact=exact,
            availability=VariantNavigationService.get_all_available_options(
                variants, dimensions, selection
            ),
        )

    @staticmethod
    def initial_state(product: Product) -> Resolution:
        """Selection and availability for a product page that was just opened."""
        variant = product.default_variant
        selection = dict(variant.options) if variant is not None else {}
        return Resolution(
            variant=variant,
            selection=selection,
            exact=variant is not None,
            availability=VariantNavigationService.get_all_available_options(
                product.variants, product.get_dimensions(), selection
            ),
        )

    @staticmethod
    def get_available_colors(variants: Sequence[Variant]) -> List[AttributeOptionState]:
        """
        Color swatches across active variants, stock summed per color.
        hex_code falls back to the named-color table.
        """
        colors = {}
        for variant in variants:
            if not variant.is_active:
                continue
            color = next(
                (a for a in variant.identifying_attributes if a.key == 'color' or a.is_color),
                None
            )
            if color is None:
                continue

            entry = colors.setdefault(color.value, {
                'value': color.value,
                'display_value': color.get_display_value(),
                'hex_code': color.hex_code or get_color_hex_code(color.value),
                'is_color': True,
                'stock': 0,
                'variant_count': 0,
                'is_compatible': True,
                'is_selected': False,
            })
            entry['stock'] += variant.stock_quantity or 0
            entry['variant_count'] += 1

        return [AttributeOptionState(**entry) for entry in colors.values()]

    @staticmethod
    def get_display_value(variants: Sequence[Variant], key: str, value: str) -> str:
        for variant in variants:
            attr = variant.get_attribute(key)
            if attr is not None and attr.value == value:
                return attr.get_display_value()
        return value
