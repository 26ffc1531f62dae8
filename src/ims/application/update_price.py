"""Application service: Update Price use case."""

from __future__ import annotations

from ims.domain.service.inventory_ledger import InventoryLedger, LedgerResult


class UpdatePriceHandler:

    def __init__(self, ledger: InventoryLedger) -> None:
        self._ledger = ledger

    def handle(
        self,
        product_id: str,
        variation_code: str,
        new_price: str,
        actor: str | None = None,
    ) -> LedgerResult:
        """Change a variation's price.

        This does NOT affect any existing orders; they captured a
        price snapshot at creation time.
        """
        return self._ledger.apply_price_change(
            product_id, variation_code, new_price, actor
        )
