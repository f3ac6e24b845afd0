from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class Category:
    """
    PC-builder slot definition.
    Examples: CPU (required), Case Fan (optional)
    """
    slug: str
    name: str = ''
    id: str = ''
    description: str = ''
    image: Optional[str] = None
    required: bool = False
    sort_order: int = 0

    def __str__(self):
        return self.name or self.slug


@dataclass(frozen=True)
class PCBuilderConfig:
    """Required and optional categories offered by the PC builder."""
    required: Tuple[Category, ...] = field(default_factory=tuple)
    optional: Tuple[Category, ...] = field(default_factory=tuple)

    @property
    def categories(self) -> Tuple[Category, ...]:
        """Required categories first, each group in sort order."""
        return (
            tuple(sorted(self.required, key=lambda c: c.sort_order))
            + tuple(sorted(self.optional, key=lambda c: c.sort_order))
        )

    @property
    def slugs(self):
        return [category.slug for category in self.categories]

    def get(self, slug: str) -> Optional[Category]:
        for category in self.categories:
            if category.slug == slug:
                return category
        return None

    def is_required(self, slug: str) -> bool:
        return any(category.slug == slug for category in self.required)
