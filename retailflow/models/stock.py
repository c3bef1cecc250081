"""
StockEntry model — On-hand quantity at a (product, store) coordinate.
"""

import logging
from decimal import Decimal

from django.db import models
from django.db.models import Sum
from django.db.models.functions import Coalesce
from django.utils.translation import gettext_lazy as _

logger = logging.getLogger('retailflow')


class StockEntryQuerySet(models.QuerySet):
    """Custom QuerySet for StockEntry with convenience filters."""

    def for_product(self, product):
        return self.filter(product=product)

    def at_store(self, store):
        return self.filter(store=store)

    def non_empty(self):
        return self.exclude(quantity=0)


class StockEntry(models.Model):
    """
    Quantity of a product at a store.

    Performance:
    - quantity is a cache updated atomically by StockMove
    - Read is O(1), not O(N)
    - Use recalculate() for audit/correction

    A missing entry means quantity zero. Quantity may be negative.
    """

    product = models.ForeignKey(
        'retailflow.Product',
        on_delete=models.PROTECT,
        related_name='stock_entries',
        verbose_name=_('Product'),
    )
    store = models.ForeignKey(
        'retailflow.Store',
        on_delete=models.PROTECT,
        related_name='stock_entries',
        verbose_name=_('Store'),
    )

    # Quantity cache (updated atomically by StockMove)
    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal('0'),
        verbose_name=_('Quantity'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = StockEntryQuerySet.as_manager()

    class Meta:
        verbose_name = _('Stock entry')
        verbose_name_plural = _('Stock entries')
        constraints = [
            models.UniqueConstraint(
                fields=['product', 'store'],
                name='unique_stock_coordinate',
            )
        ]
        indexes = [
            models.Index(fields=['store', 'product'], name='stockentry_store_product_idx'),
        ]

    @property
    def is_low(self) -> bool:
        """At or below the product's reorder threshold."""
        return self.quantity <= self.product.min_stock_level

    def recalculate(self) -> Decimal:
        """
        Recalculate quantity from StockMoves.

        Use for:
        - Integrity audit
        - Correction after detected inconsistency

        Returns:
            New calculated quantity
        """
        total = self.moves.aggregate(
            t=Coalesce(Sum('delta'), Decimal('0'))
        )['t']

        if total != self.quantity:
            old = self.quantity
            self.quantity = total
            self.save(update_fields=['quantity', 'updated_at'])

            logger.warning(
                "stock.recalculated",
                extra={
                    "entry_id": self.pk,
                    "old": str(old),
                    "new": str(total),
                    "diff": str(total - old),
                },
            )

        return total

    def __str__(self) -> str:
        return f"{self.product} [{self.store}]: {self.quantity}"
