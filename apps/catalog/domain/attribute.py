from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class AttributeDimension:
    """
    A selectable axis of product configuration.
    Examples: Color, Storage Size, RAM.

    possible_values is the closed set declared by the product; the values that
    are actually reachable are decided by the variants, not by this list.
    """
    key: str
    label: str = ''
    possible_values: Tuple[str, ...] = field(default_factory=tuple)

    def __str__(self):
        return self.label or self.key


@dataclass(frozen=True)
class IdentifyingAttribute:
    """
    One key/value pair tagged on a variant.
    Example: key='color', value='black', display_value='Midnight Black'
    """
    key: str
    value: str
    label: str = ''
    display_value: str = ''
    hex_code: Optional[str] = None
    is_color: bool = False

    def __str__(self):
        return f"{self.label or self.key}: {self.get_display_value()}"

    def get_display_value(self):
        return self.display_value or self.value
