"""Product aggregate.

A product is a catalog category that owns its variations (SKU-level
entries with their own price and stock).  Variations are keyed by a
generated id that never changes, so adding or removing one variation
can never redirect a write meant for another.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from ims.domain.exceptions import EntityNotFoundError, ValidationError
from ims.domain.model.value_objects import Money


def new_variation_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass
class Variation:
    """A single sellable entry under a product.

    ``code`` is what callers use to address the variation.  ``sku`` is
    a free-form label kept for display and is not required to be unique.
    """

    id: str
    name: str
    code: str
    price: Money
    quantity: int = 0
    dimension: str = ""
    weight: str = ""
    sku: str = ""

    def __post_init__(self) -> None:
        if not self.code or not self.code.strip():
            raise ValidationError("Variation code is required")
        if not self.name or not self.name.strip():
            raise ValidationError("Variation name is required")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValidationError("Variation quantity must be an integer")
        if self.quantity < 0:
            raise ValidationError("Variation quantity cannot be negative")


@dataclass
class Product:
    """Aggregate root for a product category and its variations.

    Invariant: variation codes are unique within one product.
    """

    id: str
    category: str
    variations: dict[str, Variation] = field(default_factory=dict)
    image_url: str = ""
    date_added: str = ""
    added_by: str = "Unknown"

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(
        product_id: str,
        category: str,
        variations: list[Variation],
        image_url: str = "",
        date_added: str = "",
        added_by: str = "Unknown",
    ) -> Product:
        """Create a new product, enforcing all invariants."""
        if not category or not category.strip():
            raise ValidationError("Product category is required")
        if not variations:
            raise ValidationError("Product must have at least one variation")

        product = Product(
            id=product_id,
            category=category.strip(),
            image_url=image_url,
            date_added=date_added,
            added_by=added_by,
        )
        for variation in variations:
            product.add_variation(variation)
        return product

    # --- Variation management -------------------------------------------------

    def add_variation(self, variation: Variation) -> None:
        if any(v.code == variation.code for v in self.variations.values()):
            raise ValidationError(
                f"Duplicate variation code '{variation.code}' in product {self.id}"
            )
        if variation.id in self.variations:
            raise ValidationError(f"Duplicate variation id '{variation.id}'")
        self.variations[variation.id] = variation

    def remove_variation(self, code: str) -> Variation:
        variation = self.find_variation(code)
        del self.variations[variation.id]
        return variation

    # --- Lookup ---------------------------------------------------------------

    def find_variation(self, code: str) -> Variation:
        for variation in self.variations.values():
            if variation.code == code:
                return variation
        raise EntityNotFoundError(
            f"Variation '{code}' not found in product {self.id}"
        )

    def variations_named(self, name: str) -> list[Variation]:
        return [
            v for v in self.variations.values()
            if v.name.lower() == name.strip().lower()
        ]
