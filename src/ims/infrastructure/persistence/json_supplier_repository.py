"""Document-store implementation of SupplierRepository."""

from __future__ import annotations

from ims.domain.model.supplier import Supplier
from ims.domain.repository.supplier_repository import SupplierRepository
from ims.infrastructure.persistence.json_document_store import JsonDocumentStore

_ROOT = "suppliers"


class JsonSupplierRepository(SupplierRepository):

    def __init__(self, store: JsonDocumentStore) -> None:
        self._store = store

    def list_all(self) -> list[Supplier]:
        return [
            Supplier(
                id=supplier_id,
                company=raw["company"],
                location=raw["location"],
                contact=raw["contact"],
                email=raw["email"],
                material=raw["material"],
            )
            for supplier_id, raw in self._store.children(_ROOT).items()
        ]

    def save(self, supplier: Supplier) -> None:
        raw = {
            "company": supplier.company,
            "location": supplier.location,
            "contact": supplier.contact,
            "email": supplier.email,
            "material": supplier.material,
        }
        if supplier.id is None:
            supplier.id = self._store.push(_ROOT, raw)
        else:
            self._store.set(f"{_ROOT}/{supplier.id}", raw)
