"""Application service: Adjust Stock use case."""

from __future__ import annotations

from ims.domain.service.inventory_ledger import InventoryLedger, LedgerResult


class AdjustStockHandler:

    def __init__(self, ledger: InventoryLedger) -> None:
        self._ledger = ledger

    def handle(
        self,
        product_id: str,
        variation_code: str,
        quantity: str | int,
        actor: str | None = None,
    ) -> LedgerResult:
        """Set the stock level of one variation.

        Returns ``NoOp`` when the level is already *quantity*; the caller
        decides how to tell the user.
        """
        return self._ledger.apply_quantity_change(
            product_id, variation_code, quantity, actor
        )
