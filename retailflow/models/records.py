"""
Bookkeeping models — daily sales, purchases and expenses per store.
"""

from decimal import Decimal

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from retailflow.models.enums import ExpenseCategory


class Sale(models.Model):
    """
    One day of takings for a store, split in two shifts.

    Shift JSON keys: pos_sales, card_sales, cash_counted, opening_fund,
    expected_cash, difference, employee_name, shift_time.
    """

    date = models.DateField(default=timezone.localdate, db_index=True, verbose_name=_('Date'))
    store = models.ForeignKey(
        'retailflow.Store',
        on_delete=models.PROTECT,
        related_name='sales',
        verbose_name=_('Store'),
    )
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0'),
        verbose_name=_('Amount'),
    )
    morning_shift = models.JSONField(default=dict, blank=True, verbose_name=_('Morning shift'))
    afternoon_shift = models.JSONField(default=dict, blank=True, verbose_name=_('Afternoon shift'))
    receipt_image = models.TextField(blank=True, default='', verbose_name=_('Receipt'))
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Sale')
        verbose_name_plural = _('Sales')
        ordering = ['-date']
        indexes = [
            models.Index(fields=['store', 'date'], name='sale_store_date_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.store} {self.date}: {self.amount}"


class Purchase(models.Model):
    """Goods bought by a store, itemized or as a quick total."""

    date = models.DateField(default=timezone.localdate, db_index=True, verbose_name=_('Date'))
    store = models.ForeignKey(
        'retailflow.Store',
        on_delete=models.PROTECT,
        related_name='purchases',
        verbose_name=_('Store'),
    )
    supplier = models.CharField(max_length=200, blank=True, default='', verbose_name=_('Supplier'))
    items = models.JSONField(
        default=list,
        blank=True,
        verbose_name=_('Items'),
        help_text=_('List of {description, quantity, unit, cost}'),
    )
    receipt_image = models.TextField(blank=True, default='', verbose_name=_('Receipt'))
    total_cost = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0'),
        verbose_name=_('Total cost'),
    )
    is_quick_entry = models.BooleanField(default=False, verbose_name=_('Quick entry'))
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Purchase')
        verbose_name_plural = _('Purchases')
        ordering = ['-date']
        indexes = [
            models.Index(fields=['store', 'date'], name='purchase_store_date_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.store} {self.date}: {self.total_cost}"


class Expense(models.Model):
    date = models.DateField(default=timezone.localdate, db_index=True, verbose_name=_('Date'))
    store = models.ForeignKey(
        'retailflow.Store',
        on_delete=models.PROTECT,
        related_name='expenses',
        verbose_name=_('Store'),
    )
    category = models.CharField(
        max_length=20,
        choices=ExpenseCategory.choices,
        default=ExpenseCategory.MISC,
        verbose_name=_('Category'),
    )
    description = models.CharField(max_length=255, blank=True, default='', verbose_name=_('Description'))
    amount = models.DecimalField(max_digits=12, decimal_places=2, verbose_name=_('Amount'))
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Expense')
        verbose_name_plural = _('Expenses')
        ordering = ['-date']
        indexes = [
            models.Index(fields=['store', 'date'], name='expense_store_date_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.store} {self.date} {self.category}: {self.amount}"
