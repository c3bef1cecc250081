"""
Transfer model — Append-only log of quantities moved between stores.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class Transfer(models.Model):
    """
    Directional movement of one product between two stores.

    The audit trail of a decrement-at-source plus increment-at-destination
    pair. Rows are never changed or removed once written.
    """

    date = models.DateField(
        default=timezone.localdate,
        db_index=True,
        verbose_name=_('Date'),
    )
    product = models.ForeignKey(
        'retailflow.Product',
        on_delete=models.PROTECT,
        related_name='transfers',
        verbose_name=_('Product'),
    )
    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        verbose_name=_('Quantity'),
    )
    from_store = models.ForeignKey(
        'retailflow.Store',
        on_delete=models.PROTECT,
        related_name='transfers_out',
        verbose_name=_('From'),
    )
    to_store = models.ForeignKey(
        'retailflow.Store',
        on_delete=models.PROTECT,
        related_name='transfers_in',
        verbose_name=_('To'),
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('User'),
    )
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        verbose_name = _('Transfer')
        verbose_name_plural = _('Transfers')
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['to_store', 'date'], name='transfer_dest_date_idx'),
            models.Index(fields=['product', 'date'], name='transfer_product_date_idx'),
        ]

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValueError("Transfers are append-only.")
        if self.quantity is None or self.quantity <= 0:
            raise ValueError("Transfer quantity must be positive")
        if self.from_store_id == self.to_store_id:
            raise ValueError("Transfer source and destination must differ")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("Transfers are append-only.")

    def __str__(self) -> str:
        return f"{self.date} {self.quantity}x {self.product}: {self.from_store} → {self.to_store}"
