"""Application service: Add Product use case."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from ims.application.dto import VariationSpec
from ims.domain.model.product import Product, Variation, new_variation_id
from ims.domain.model.user import UNKNOWN_ACTOR
from ims.domain.model.value_objects import Money, parse_stock_level
from ims.domain.repository.product_repository import ProductRepository


def build_variation(spec: VariationSpec) -> Variation:
    return Variation(
        id=new_variation_id(),
        name=spec.name.strip(),
        code=spec.code.strip(),
        price=Money.of(spec.price),
        quantity=parse_stock_level(spec.quantity),
        dimension=spec.dimension,
        weight=spec.weight,
        sku=spec.sku,
    )


class AddProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._product_repo = product_repo
        self._today = today

    def handle(
        self,
        category: str,
        variations: list[VariationSpec],
        image_url: str = "",
        actor: str | None = None,
    ) -> Product:
        """Add a new product category with its variations to the catalog."""
        product = Product.create(
            product_id=self._product_repo.next_id(),
            category=category,
            variations=[build_variation(spec) for spec in variations],
            image_url=image_url,
            date_added=self._today().isoformat(),
            added_by=actor or UNKNOWN_ACTOR,
        )
        self._product_repo.save(product)
        return product
