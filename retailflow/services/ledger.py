"""
Stock ledger — on-hand quantity per (product, store).

All writes go through adjust(), which records an immutable StockMove.
The move pushes the increment into the database with an F() expression,
so concurrent adjusts to the same coordinate never lose an update.
"""

import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import Sum
from django.db.models.functions import Coalesce

from retailflow.conf import retailflow_settings
from retailflow.exceptions import StockError
from retailflow.models.move import StockMove
from retailflow.models.stock import StockEntry
from retailflow.models.store import Store

logger = logging.getLogger('retailflow')


class StockLedger:
    """Read and write access to the stock ledger."""

    @classmethod
    def hub(cls) -> Store:
        """
        The central hub.

        Raises:
            StockError('HUB_NOT_CONFIGURED'): If no store carries the flag
        """
        hub = Store.objects.hub()
        if hub is None:
            raise StockError('HUB_NOT_CONFIGURED')
        return hub

    @classmethod
    def get_quantity(cls, product, store) -> Decimal:
        """On-hand quantity. A missing entry counts as zero."""
        quantity = (
            StockEntry.objects
            .filter(product=product, store=store)
            .values_list('quantity', flat=True)
            .first()
        )
        return quantity if quantity is not None else Decimal('0')

    @classmethod
    def get_entry(cls, product, store) -> StockEntry | None:
        return StockEntry.objects.filter(product=product, store=store).first()

    @classmethod
    def list_entries(cls, product=None, store=None, include_empty: bool = False):
        """Entries filtered by product and/or store, ordered by store then product name."""
        qs = StockEntry.objects.select_related('product', 'store')
        if product is not None:
            qs = qs.for_product(product)
        if store is not None:
            qs = qs.at_store(store)
        if not include_empty:
            qs = qs.non_empty()
        return qs.order_by('store__name', 'product__name')

    @classmethod
    def adjust(cls, product, store, delta, reason: str, user=None) -> StockEntry:
        """
        Insert-or-increment the quantity at (product, store).

        A missing entry is created at zero and then incremented, so the
        final quantity always equals the sum of every delta applied.

        Raises:
            StockError('INVALID_QUANTITY'): If delta is zero
            StockError('REASON_REQUIRED'): If reason is empty
            StockError('INSUFFICIENT_QUANTITY'): If the result would be
                negative and ALLOW_NEGATIVE_STOCK is off

        Concurrency:
            - Runs under transaction.atomic()
            - get_or_create on the (product, store) unique key
            - StockMove.save() applies an atomic F() increment
        """
        delta = Decimal(str(delta))
        if delta == 0:
            raise StockError('INVALID_QUANTITY', requested=delta)
        if not reason:
            raise StockError('REASON_REQUIRED')

        with transaction.atomic():
            entry, _ = StockEntry.objects.get_or_create(product=product, store=store)

            if delta < 0 and not retailflow_settings.ALLOW_NEGATIVE_STOCK:
                locked = StockEntry.objects.select_for_update().get(pk=entry.pk)
                if locked.quantity + delta < 0:
                    raise StockError(
                        'INSUFFICIENT_QUANTITY',
                        available=locked.quantity,
                        requested=-delta,
                    )

            StockMove.objects.create(entry=entry, delta=delta, reason=reason, user=user)
            entry.refresh_from_db()

            logger.info(
                "stock.adjust",
                extra={
                    "product_id": entry.product_id,
                    "store_id": entry.store_id,
                    "delta": str(delta),
                    "quantity": str(entry.quantity),
                    "reason": reason,
                },
            )
            if entry.quantity < 0:
                logger.warning(
                    "stock.negative",
                    extra={
                        "product_id": entry.product_id,
                        "store_id": entry.store_id,
                        "quantity": str(entry.quantity),
                    },
                )
            return entry

    @classmethod
    def recalculate_all(cls, dry_run: bool = False) -> list[tuple[StockEntry, Decimal, Decimal]]:
        """
        Audit every entry against its moves.

        Returns (entry, cached, ledger_total) for each entry whose cached
        quantity drifted. Corrects them unless dry_run.
        """
        drifted = []
        entries = StockEntry.objects.annotate(
            _ledger=Coalesce(Sum('moves__delta'), Decimal('0'))
        ).select_related('product', 'store')

        for entry in entries:
            if entry._ledger != entry.quantity:
                drifted.append((entry, entry.quantity, entry._ledger))
                if not dry_run:
                    entry.recalculate()
        return drifted
