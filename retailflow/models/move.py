"""
StockMove model — Immutable ledger of quantity changes.
"""

from django.conf import settings
from django.db import models, transaction
from django.db.models import F
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class StockMove(models.Model):
    """
    Immutable record of quantity change.

    Rules:
    - NEVER update() or delete()
    - Corrections are new moves with inverse delta
    - Updates StockEntry.quantity atomically on save()

    This is the ONLY model that changes quantity.
    """

    entry = models.ForeignKey(
        'retailflow.StockEntry',
        on_delete=models.PROTECT,
        related_name='moves',
        verbose_name=_('Stock entry'),
    )

    delta = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        verbose_name=_('Delta'),
        help_text=_('Positive = in, Negative = out'),
    )

    reason = models.CharField(
        max_length=255,
        verbose_name=_('Reason'),
        help_text=_('Required. E.g. "Assignment", "Hub correction"'),
    )

    timestamp = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Timestamp'))
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('User'),
    )

    class Meta:
        verbose_name = _('Stock move')
        verbose_name_plural = _('Stock moves')
        ordering = ['timestamp']
        indexes = [
            models.Index(fields=['entry', 'timestamp'], name='stockmove_entry_ts_idx'),
        ]

    def save(self, *args, **kwargs):
        """Save move and update entry cache atomically."""
        if self.pk:
            raise ValueError(
                "Stock moves are immutable. "
                "To correct one, create a new move with the inverse delta."
            )

        if not self.reason:
            raise ValueError("Reason is required")

        with transaction.atomic():
            super().save(*args, **kwargs)

            from retailflow.models.stock import StockEntry

            StockEntry.objects.filter(pk=self.entry_id).update(
                quantity=F('quantity') + self.delta,
                updated_at=timezone.now()
            )

    def delete(self, *args, **kwargs):
        """Moves are immutable."""
        raise ValueError(
            "Stock moves are immutable. "
            "To reverse one, create a new move with the inverse delta."
        )

    def __str__(self) -> str:
        signal = '+' if self.delta > 0 else ''
        return f"{signal}{self.delta} | {self.reason}"
