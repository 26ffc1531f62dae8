"""Document-store implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal

from ims.domain.model.product import Product, Variation
from ims.domain.model.value_objects import Money
from ims.domain.repository.product_repository import ProductRepository
from ims.infrastructure.persistence.json_document_store import (
    JsonDocumentStore,
    time_ordered_key,
)

_ROOT = "products"


class JsonProductRepository(ProductRepository):

    def __init__(self, store: JsonDocumentStore) -> None:
        self._store = store

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        return time_ordered_key()

    def get_by_id(self, product_id: str) -> Product | None:
        raw = self._store.get(f"{_ROOT}/{product_id}")
        return None if raw is None else self._to_domain(product_id, raw)

    def list_all(self) -> list[Product]:
        return [
            self._to_domain(product_id, raw)
            for product_id, raw in self._store.children(_ROOT).items()
        ]

    def save(self, product: Product) -> None:
        self._store.set(f"{_ROOT}/{product.id}", self._to_raw(product))

    def add_variation(self, product_id: str, variation: Variation) -> None:
        self._store.set(
            f"{_ROOT}/{product_id}/variations/{variation.id}",
            self._variation_to_raw(variation),
        )

    def remove_variation(self, product_id: str, variation_id: str) -> None:
        self._store.delete(f"{_ROOT}/{product_id}/variations/{variation_id}")

    def set_variation_quantity(
        self, product_id: str, variation_id: str, expected: int, new: int
    ) -> None:
        self._store.compare_and_set(
            f"{_ROOT}/{product_id}/variations/{variation_id}/quantity", expected, new
        )

    def set_variation_price(
        self, product_id: str, variation_id: str, expected: Money, new: Money
    ) -> None:
        self._store.compare_and_set(
            f"{_ROOT}/{product_id}/variations/{variation_id}/productPrice",
            str(expected.amount),
            str(new.amount),
        )

    # --- Serialization --------------------------------------------------------

    @classmethod
    def _to_raw(cls, product: Product) -> dict:
        return {
            "productCategory": product.category,
            "imageUrl": product.image_url,
            "dateAdded": product.date_added,
            "addedBy": product.added_by,
            "variations": {
                v.id: cls._variation_to_raw(v)
                for v in product.variations.values()
            },
        }

    @staticmethod
    def _variation_to_raw(v: Variation) -> dict:
        return {
            "productName": v.name,
            "productCode": v.code,
            "productDimension": v.dimension,
            "productWeight": v.weight,
            "productPrice": str(v.price.amount),
            "currency": v.price.currency,
            "quantity": v.quantity,
            "productId": v.sku,
        }

    @staticmethod
    def _to_domain(product_id: str, raw: dict) -> Product:
        variations = {
            vid: Variation(
                id=vid,
                name=v["productName"],
                code=v["productCode"],
                price=Money(Decimal(v["productPrice"]), v.get("currency", "PHP")),
                quantity=v["quantity"],
                dimension=v.get("productDimension", ""),
                weight=v.get("productWeight", ""),
                sku=v.get("productId", ""),
            )
            for vid, v in raw.get("variations", {}).items()
        }
        return Product(
            id=product_id,
            category=raw["productCategory"],
            variations=variations,
            image_url=raw.get("imageUrl", ""),
            date_added=raw.get("dateAdded", ""),
            added_by=raw.get("addedBy", "Unknown"),
        )
