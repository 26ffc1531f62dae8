"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from ims.domain.repository.product_repository import ProductRepository


@dataclass(frozen=True)
class InventoryLineDTO:
    product_id: str
    category: str
    code: str
    name: str
    price: str
    quantity: int


class ShowInventoryHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, category: str | None = None) -> list[InventoryLineDTO]:
        """One line per variation, optionally restricted to a category."""
        return [
            InventoryLineDTO(
                product_id=product.id,
                category=product.category,
                code=variation.code,
                name=variation.name,
                price=str(variation.price),
                quantity=variation.quantity,
            )
            for product in self._product_repo.list_all()
            if category is None or product.category.lower() == category.lower()
            for variation in product.variations.values()
        ]
