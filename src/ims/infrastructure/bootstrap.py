"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import os
from functools import cached_property
from pathlib import Path

from ims.domain.service.inventory_ledger import InventoryLedger
from ims.domain.service.order_fulfillment_service import OrderFulfillmentService
from ims.infrastructure.persistence.json_change_log_repository import (
    JsonChangeLogRepository,
)
from ims.infrastructure.persistence.json_document_store import JsonDocumentStore
from ims.infrastructure.persistence.json_order_repository import JsonOrderRepository
from ims.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from ims.infrastructure.persistence.json_supplier_repository import (
    JsonSupplierRepository,
)
from ims.infrastructure.persistence.json_user_repository import JsonUserRepository

DATA_DIR_ENV = "IMS_DATA_DIR"
STORE_FILENAME = "ims.json"

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def default_data_dir() -> Path:
    return Path(os.environ.get(DATA_DIR_ENV) or DEFAULT_DATA_DIR)


class Container:
    """Builds and caches every collaborator for one data directory."""

    def __init__(self, data_dir: Path | None = None) -> None:
        self.data_dir = Path(data_dir) if data_dir is not None else default_data_dir()

    @cached_property
    def store(self) -> JsonDocumentStore:
        return JsonDocumentStore(self.data_dir / STORE_FILENAME)

    @cached_property
    def product_repository(self) -> JsonProductRepository:
        return JsonProductRepository(self.store)

    @cached_property
    def change_log_repository(self) -> JsonChangeLogRepository:
        return JsonChangeLogRepository(self.store)

    @cached_property
    def order_repository(self) -> JsonOrderRepository:
        return JsonOrderRepository(self.store)

    @cached_property
    def supplier_repository(self) -> JsonSupplierRepository:
        return JsonSupplierRepository(self.store)

    @cached_property
    def user_repository(self) -> JsonUserRepository:
        return JsonUserRepository(self.store)

    @cached_property
    def ledger(self) -> InventoryLedger:
        return InventoryLedger(self.product_repository, self.change_log_repository)

    @cached_property
    def fulfillment(self) -> OrderFulfillmentService:
        return OrderFulfillmentService(
            self.product_repository, self.order_repository, self.ledger
        )
