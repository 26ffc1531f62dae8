"""Application services: add or remove a variation of an existing product.

Only the affected variation is written, so stock or price changes made to
its siblings in the meantime are kept.  Removing a variation leaves its
stock and price history untouched.
"""

from __future__ import annotations

from ims.application.add_product import build_variation
from ims.application.dto import VariationSpec
from ims.domain.exceptions import EntityNotFoundError
from ims.domain.model.product import Product, Variation
from ims.domain.repository.product_repository import ProductRepository


def _get_product(repo: ProductRepository, product_id: str) -> Product:
    product = repo.get_by_id(product_id)
    if product is None:
        raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
    return product


class AddVariationHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, spec: VariationSpec) -> Variation:
        product = _get_product(self._product_repo, product_id)
        variation = build_variation(spec)
        product.add_variation(variation)
        self._product_repo.add_variation(product_id, variation)
        return variation


class RemoveVariationHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, variation_code: str) -> Variation:
        product = _get_product(self._product_repo, product_id)
        variation = product.remove_variation(variation_code)
        self._product_repo.remove_variation(product_id, variation.id)
        return variation
