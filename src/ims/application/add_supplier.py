"""Application service: Add Supplier use case."""

from __future__ import annotations

from ims.domain.model.supplier import Supplier
from ims.domain.repository.supplier_repository import SupplierRepository


class AddSupplierHandler:

    def __init__(self, supplier_repo: SupplierRepository) -> None:
        self._supplier_repo = supplier_repo

    def handle(
        self,
        company: str,
        location: str,
        contact: str,
        email: str,
        material: str,
    ) -> Supplier:
        supplier = Supplier.create(company, location, contact, email, material)
        self._supplier_repo.save(supplier)
        return supplier
