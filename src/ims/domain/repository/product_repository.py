"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations live in the infrastructure
layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ims.domain.model.product import Product, Variation
from ims.domain.model.value_objects import Money


class ProductRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a new unique product ID."""

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a whole product.  Used when a product is first added."""

    @abstractmethod
    def add_variation(self, product_id: str, variation: Variation) -> None:
        """Store one new variation without rewriting its siblings."""

    @abstractmethod
    def remove_variation(self, product_id: str, variation_id: str) -> None:
        """Delete one variation without rewriting its siblings."""

    @abstractmethod
    def set_variation_quantity(
        self, product_id: str, variation_id: str, expected: int, new: int
    ) -> None:
        """Write a variation's stock if it still equals *expected*.

        Raises ConcurrentModificationError otherwise.
        """

    @abstractmethod
    def set_variation_price(
        self, product_id: str, variation_id: str, expected: Money, new: Money
    ) -> None:
        """Write a variation's price if it still equals *expected*."""
