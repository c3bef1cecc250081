"""
Catalog models — Products and the suppliers that deliver them.
"""

from decimal import Decimal

from django.db import models
from django.utils.translation import gettext_lazy as _

from retailflow.models.enums import UnitOfMeasure


class Supplier(models.Model):
    """Supplier directory entry."""

    name = models.CharField(max_length=200, verbose_name=_('Name'))
    contact_name = models.CharField(max_length=200, blank=True, default='', verbose_name=_('Contact'))
    phone = models.CharField(max_length=50, blank=True, default='', verbose_name=_('Phone'))
    email = models.EmailField(blank=True, default='', verbose_name=_('Email'))
    address = models.CharField(max_length=255, blank=True, default='', verbose_name=_('Address'))
    notes = models.TextField(blank=True, default='', verbose_name=_('Notes'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Supplier')
        verbose_name_plural = _('Suppliers')
        ordering = ['name']

    def __str__(self) -> str:
        return self.name


class Product(models.Model):
    """
    Catalog entry.

    Stock and transfers reference products by id, never embed them.
    Prices and the reorder threshold may change; identity does not.
    """

    name = models.CharField(
        max_length=200,
        verbose_name=_('Name'),
    )
    unit = models.CharField(
        max_length=10,
        choices=UnitOfMeasure.choices,
        default=UnitOfMeasure.PIECE,
        verbose_name=_('Unit'),
    )
    cost_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0'),
        verbose_name=_('Cost price'),
    )
    selling_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0'),
        verbose_name=_('Selling price'),
    )
    min_stock_level = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal('5'),
        verbose_name=_('Minimum stock'),
        help_text=_('Low stock alert fires at or below this quantity'),
    )
    supplier = models.ForeignKey(
        Supplier,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='products',
        verbose_name=_('Supplier'),
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Product')
        verbose_name_plural = _('Products')
        ordering = ['name']

    @property
    def margin(self) -> Decimal:
        """Gross margin as a percentage of the selling price."""
        if not self.selling_price:
            return Decimal('0')
        return (self.selling_price - self.cost_price) / self.selling_price * 100

    def __str__(self) -> str:
        return self.name
