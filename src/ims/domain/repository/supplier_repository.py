"""Abstract repository for supplier records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ims.domain.model.supplier import Supplier


class SupplierRepository(ABC):

    @abstractmethod
    def list_all(self) -> list[Supplier]:
        """Return every supplier, oldest first."""

    @abstractmethod
    def save(self, supplier: Supplier) -> None:
        """Persist a supplier, assigning an ID to new ones."""
