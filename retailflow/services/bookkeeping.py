"""
Bookkeeping — sales shifts, purchases, expenses and wastage per store.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal

from django.db import transaction
from django.utils import timezone

from retailflow.exceptions import RecordError
from retailflow.models.product import Product
from retailflow.models.records import Expense, Purchase, Sale
from retailflow.models.wastage import WastageItem, WastageReport
from retailflow.protocols.payloads import PurchaseItem, ShiftData, WastageLine, to_decimal

logger = logging.getLogger('retailflow')

CENT = Decimal('0.01')


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _shift(data) -> ShiftData:
    if isinstance(data, ShiftData):
        return data
    return ShiftData.from_payload(data)


class Bookkeeping:
    """Daily records. Every amount is stored rounded to cents."""

    @classmethod
    def record_sale(cls, store, date=None, morning_shift=None, afternoon_shift=None,
                    receipt_image: str = '') -> Sale:
        """
        Record a day of takings. amount = morning + afternoon POS sales.

        Raises:
            RecordError('INVALID_AMOUNT'): If the amount is not positive
        """
        morning = _shift(morning_shift)
        afternoon = _shift(afternoon_shift)
        amount = _money(morning.pos_sales + afternoon.pos_sales)
        if amount <= 0:
            raise RecordError('INVALID_AMOUNT', amount=amount)

        sale = Sale.objects.create(
            date=date or timezone.localdate(),
            store=store,
            amount=amount,
            morning_shift=morning.as_dict(),
            afternoon_shift=afternoon.as_dict(),
            receipt_image=receipt_image or '',
        )
        logger.info(
            "record.sale",
            extra={"sale_id": sale.pk, "store_id": store.pk, "amount": str(amount)},
        )
        return sale

    @classmethod
    def record_purchase(cls, store, date=None, supplier: str = '', items=None,
                        total_cost=None, receipt_image: str = '') -> Purchase:
        """
        Quick entry when total_cost is given; otherwise the total is
        the sum of quantity × cost over the items.

        Raises:
            RecordError('INVALID_AMOUNT'): If the total is not positive
        """
        parsed = [
            item if isinstance(item, PurchaseItem) else PurchaseItem.from_payload(item)
            for item in (items or [])
        ]
        is_quick = total_cost is not None and total_cost != ''
        if is_quick:
            total = _money(to_decimal(total_cost, 'total_cost'))
        else:
            total = _money(sum((item.line_total for item in parsed), Decimal('0')))
        if total <= 0:
            raise RecordError('INVALID_AMOUNT', amount=total)

        purchase = Purchase.objects.create(
            date=date or timezone.localdate(),
            store=store,
            supplier=supplier or '',
            items=[item.as_dict() for item in parsed],
            receipt_image=receipt_image or '',
            total_cost=total,
            is_quick_entry=is_quick,
        )
        logger.info(
            "record.purchase",
            extra={
                "purchase_id": purchase.pk,
                "store_id": store.pk,
                "total": str(total),
                "quick": is_quick,
            },
        )
        return purchase

    @classmethod
    def record_expense(cls, store, date=None, category: str = 'Misc',
                       description: str = '', amount=None) -> Expense:
        amount = _money(to_decimal(amount, 'amount'))
        if amount <= 0:
            raise RecordError('INVALID_AMOUNT', amount=amount)

        expense = Expense.objects.create(
            date=date or timezone.localdate(),
            store=store,
            category=category,
            description=description or '',
            amount=amount,
        )
        logger.info(
            "record.expense",
            extra={
                "expense_id": expense.pk,
                "store_id": store.pk,
                "category": category,
                "amount": str(amount),
            },
        )
        return expense

    # ══════════════════════════════════════════════════════════════
    # WASTAGE
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def _build_items(cls, report: WastageReport, lines) -> list[WastageItem]:
        parsed = [
            line if isinstance(line, WastageLine) else WastageLine.from_payload(line)
            for line in lines
        ]
        product_ids = {line.product_id for line in parsed if line.product_id is not None}
        products = Product.objects.in_bulk(product_ids)

        items = []
        for line in parsed:
            product = products.get(line.product_id)
            unit_price = line.unit_price
            if unit_price is None:
                unit_price = product.cost_price if product is not None else Decimal('0')
            items.append(WastageItem(
                report=report,
                time=line.time,
                product=product,
                product_name=line.product_name or (product.name if product else ''),
                reason=line.reason,
                quantity=line.quantity,
                unit=line.unit,
                unit_price=unit_price,
                total=_money(line.quantity * unit_price),
            ))
        return items

    @classmethod
    def record_wastage(cls, store, date=None, responsible: str = '', lines=None,
                       receipt_image: str = '') -> WastageReport:
        """
        Line total = quantity × unit price (product cost price when omitted),
        rounded to cents. Report total is the sum of line totals.

        Raises:
            RecordError('EMPTY_REPORT'): If there are no lines
        """
        if not lines:
            raise RecordError('EMPTY_REPORT', store_id=store.pk)

        with transaction.atomic():
            report = WastageReport.objects.create(
                date=date or timezone.localdate(),
                store=store,
                responsible=responsible or '',
                receipt_image=receipt_image or '',
            )
            cls._store_items(report, lines)

        logger.info(
            "record.wastage",
            extra={
                "report_id": report.pk,
                "store_id": store.pk,
                "total": str(report.total_wastage),
            },
        )
        return report

    @classmethod
    def replace_wastage_lines(cls, report: WastageReport, lines) -> WastageReport:
        """Rewrite every line of an existing report and its total."""
        if not lines:
            raise RecordError('EMPTY_REPORT', report_id=report.pk)

        with transaction.atomic():
            locked = WastageReport.objects.select_for_update().get(pk=report.pk)
            locked.items.all().delete()
            cls._store_items(locked, lines)

        report.refresh_from_db()
        logger.info(
            "record.wastage.replaced",
            extra={"report_id": report.pk, "total": str(report.total_wastage)},
        )
        return report

    @classmethod
    def recompute_wastage_totals(cls, report: WastageReport) -> WastageReport:
        """Refresh every line total and the report total after items were edited in place."""
        with transaction.atomic():
            locked = WastageReport.objects.select_for_update().get(pk=report.pk)
            total = Decimal('0')
            for item in locked.items.all():
                line_total = _money(item.quantity * item.unit_price)
                if line_total != item.total:
                    item.total = line_total
                    item.save(update_fields=['total'])
                total += line_total
            locked.total_wastage = total
            locked.save(update_fields=['total_wastage'])

        report.refresh_from_db()
        return report

    @classmethod
    def _store_items(cls, report: WastageReport, lines) -> None:
        items = WastageItem.objects.bulk_create(cls._build_items(report, lines))
        report.total_wastage = sum((item.total for item in items), Decimal('0'))
        report.save(update_fields=['total_wastage'])
