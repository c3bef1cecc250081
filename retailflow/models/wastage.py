"""
Wastage models — goods lost or spoiled at a store.
"""

from decimal import Decimal

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from retailflow.models.enums import UnitOfMeasure


class WastageReport(models.Model):
    """A store's wastage sheet for one day."""

    date = models.DateField(default=timezone.localdate, db_index=True, verbose_name=_('Date'))
    store = models.ForeignKey(
        'retailflow.Store',
        on_delete=models.PROTECT,
        related_name='wastage_reports',
        verbose_name=_('Store'),
    )
    responsible = models.CharField(max_length=200, blank=True, default='', verbose_name=_('Responsible'))
    total_wastage = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0'),
        verbose_name=_('Total wastage'),
    )
    receipt_image = models.TextField(blank=True, default='', verbose_name=_('Receipt'))
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Wastage report')
        verbose_name_plural = _('Wastage reports')
        ordering = ['-date']

    def __str__(self) -> str:
        return f"{self.store} {self.date}: {self.total_wastage}"


class WastageItem(models.Model):
    report = models.ForeignKey(
        WastageReport,
        on_delete=models.CASCADE,
        related_name='items',
    )
    time = models.CharField(max_length=10, blank=True, default='', verbose_name=_('Time'))
    product = models.ForeignKey(
        'retailflow.Product',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Product'),
    )
    product_name = models.CharField(max_length=200, verbose_name=_('Product name'))
    reason = models.CharField(max_length=255, blank=True, default='', verbose_name=_('Reason'))
    quantity = models.DecimalField(max_digits=12, decimal_places=3, verbose_name=_('Quantity'))
    unit = models.CharField(
        max_length=10,
        choices=UnitOfMeasure.choices,
        default=UnitOfMeasure.PIECE,
        verbose_name=_('Unit'),
    )
    unit_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0'),
        verbose_name=_('Unit price'),
    )
    total = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0'),
        verbose_name=_('Total'),
    )

    class Meta:
        verbose_name = _('Wastage item')
        verbose_name_plural = _('Wastage items')

    def __str__(self) -> str:
        return f"{self.quantity} {self.unit} {self.product_name}"
