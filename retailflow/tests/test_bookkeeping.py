"""
Tests for sales, purchases, expenses and wastage.
"""

from decimal import Decimal

import pytest

from retailflow import retail
from retailflow.exceptions import PayloadError, RecordError
from retailflow.models import ExpenseCategory, WastageItem
from retailflow.protocols import ShiftData
from retailflow.services import Bookkeeping


pytestmark = pytest.mark.django_db


class TestRecordSale:
    """Tests for Bookkeeping.record_sale()."""

    def test_amount_is_both_shifts(self, store_a, today):
        sale = retail.record_sale(
            store_a,
            date=today,
            morning_shift={'posSales': '210.40', 'cardSales': 150, 'employeeName': 'Marc', 'shiftTime': '08-15'},
            afternoon_shift={'pos_sales': 189.6, 'cash_counted': 40},
        )

        assert sale.amount == Decimal('400.00')
        assert sale.morning_shift['pos_sales'] == 210.4
        assert sale.morning_shift['card_sales'] == 150
        assert sale.morning_shift['employee_name'] == 'Marc'
        assert sale.afternoon_shift['cash_counted'] == 40

    def test_accepts_shift_dataclass(self, store_a):
        sale = Bookkeeping.record_sale(store_a, morning_shift=ShiftData(pos_sales=Decimal('12.5')))

        assert sale.amount == Decimal('12.50')
        assert sale.afternoon_shift['pos_sales'] == 0

    def test_zero_amount_rejected(self, store_a):
        with pytest.raises(RecordError) as exc:
            Bookkeeping.record_sale(store_a, morning_shift={}, afternoon_shift={})

        assert exc.value.code == 'INVALID_AMOUNT'

    def test_malformed_shift(self, store_a):
        with pytest.raises(PayloadError):
            Bookkeeping.record_sale(store_a, morning_shift={'posSales': 'lots'})


class TestRecordPurchase:
    """Quick entry vs. itemized."""

    def test_itemized_total(self, store_a):
        purchase = Bookkeeping.record_purchase(
            store_a,
            supplier='Oleícola Sur',
            items=[
                {'description': 'Olive Oil 1L', 'quantity': 12, 'cost': '4.50'},
                {'description': 'Olive Oil 5L', 'quantity': 2, 'unitCost': 19.99},
            ],
        )

        assert purchase.total_cost == Decimal('93.98')
        assert not purchase.is_quick_entry
        assert len(purchase.items) == 2

    def test_quick_entry_uses_given_total(self, store_a):
        purchase = Bookkeeping.record_purchase(store_a, supplier='Market', total_cost='55.10')

        assert purchase.total_cost == Decimal('55.10')
        assert purchase.is_quick_entry
        assert purchase.items == []

    def test_empty_purchase_rejected(self, store_a):
        with pytest.raises(RecordError):
            Bookkeeping.record_purchase(store_a, supplier='Market')


class TestRecordExpense:
    def test_expense(self, store_a):
        expense = Bookkeeping.record_expense(
            store_a, category=ExpenseCategory.RENT, description='October', amount='1200',
        )

        assert expense.amount == Decimal('1200.00')
        assert expense.category == 'Rent'

    def test_negative_amount_rejected(self, store_a):
        with pytest.raises(RecordError) as exc:
            Bookkeeping.record_expense(store_a, amount=-5)

        assert exc.value.code == 'INVALID_AMOUNT'


class TestWastage:
    """Wastage reports and their line totals."""

    def test_line_totals_and_report_total(self, store_a, product):
        report = Bookkeeping.record_wastage(
            store_a,
            responsible='Marc',
            lines=[
                {'productId': product.pk, 'quantity': 3, 'reason': 'Broken bottle'},
                {'productName': 'Bread', 'quantity': '1.5', 'unitPrice': '0.333', 'time': '09:30'},
            ],
        )

        items = list(report.items.order_by('pk'))
        # 3 × cost price 4.50
        assert items[0].unit_price == Decimal('4.50')
        assert items[0].total == Decimal('13.50')
        assert items[0].product_name == 'Olive Oil'
        # 1.5 × 0.333 = 0.4995 → 0.50
        assert items[1].total == Decimal('0.50')
        assert items[1].product is None
        assert report.total_wastage == Decimal('14.00')

    def test_empty_report_rejected(self, store_a):
        with pytest.raises(RecordError) as exc:
            Bookkeeping.record_wastage(store_a, lines=[])

        assert exc.value.code == 'EMPTY_REPORT'

    def test_replace_lines(self, store_a, product):
        report = Bookkeeping.record_wastage(store_a, lines=[{'productId': product.pk, 'quantity': 1}])

        Bookkeeping.replace_wastage_lines(report, [
            {'productName': 'Milk', 'quantity': 2, 'unitPrice': '0.95'},
        ])

        assert report.total_wastage == Decimal('1.90')
        assert WastageItem.objects.filter(report=report).count() == 1
        assert report.items.get().product_name == 'Milk'

    def test_recompute_after_in_place_edit(self, store_a, product):
        report = Bookkeeping.record_wastage(store_a, lines=[{'productId': product.pk, 'quantity': 2}])
        item = report.items.get()
        WastageItem.objects.filter(pk=item.pk).update(quantity=Decimal('3'), unit_price=Decimal('1.25'))

        Bookkeeping.recompute_wastage_totals(report)

        item.refresh_from_db()
        assert item.total == Decimal('3.75')
        assert report.total_wastage == Decimal('3.75')
