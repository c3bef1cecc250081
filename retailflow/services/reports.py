"""
Reports — financial aggregates, store overview and low-stock alerts.
"""

import csv
import io
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from django.db.models import Count, F, OuterRef, Q, Subquery, Sum
from django.db.models.functions import Coalesce

from retailflow.conf import retailflow_settings
from retailflow.models.enums import RequestStatus
from retailflow.models.product import Product
from retailflow.models.records import Expense, Purchase, Sale
from retailflow.models.stock import StockEntry
from retailflow.models.store import Store
from retailflow.models.wastage import WastageReport
from retailflow.services.ledger import StockLedger
from retailflow.services.transfers import TransferLog

logger = logging.getLogger('retailflow')

ZERO = Decimal('0')


@dataclass(frozen=True)
class FinancialSummary:
    date_from: date
    date_to: date
    sales: Decimal
    purchases: Decimal
    expenses: Decimal
    wastage: Decimal

    @property
    def net_profit(self) -> Decimal:
        """Wastage is reported but not subtracted."""
        return self.sales - self.purchases - self.expenses


@dataclass(frozen=True)
class StorePerformance:
    store: Store
    revenue: Decimal
    purchases: Decimal
    expenses: Decimal

    @property
    def profit(self) -> Decimal:
        return self.revenue - self.purchases - self.expenses


@dataclass(frozen=True)
class StoreOverview:
    store: Store
    stock_units: Decimal
    pending_requests: int
    last_transfer: object = None


@dataclass(frozen=True)
class LowStock:
    product: Product
    store: Store
    quantity: Decimal
    min_stock_level: Decimal


def _total(qs, field: str) -> Decimal:
    return qs.aggregate(t=Coalesce(Sum(field), ZERO))['t']


def _in_period(model, date_from, date_to, store=None):
    qs = model.objects.filter(date__gte=date_from, date__lte=date_to)
    if store is not None:
        qs = qs.filter(store=store)
    return qs


class Reports:
    """Read-only aggregates."""

    @classmethod
    def financial_summary(cls, date_from: date, date_to: date, store=None) -> FinancialSummary:
        return FinancialSummary(
            date_from=date_from,
            date_to=date_to,
            sales=_total(_in_period(Sale, date_from, date_to, store), 'amount'),
            purchases=_total(_in_period(Purchase, date_from, date_to, store), 'total_cost'),
            expenses=_total(_in_period(Expense, date_from, date_to, store), 'amount'),
            wastage=_total(_in_period(WastageReport, date_from, date_to, store), 'total_wastage'),
        )

    @classmethod
    def store_performance(cls, date_from: date, date_to: date) -> list[StorePerformance]:
        """Per branch, hub excluded, best revenue first."""
        period = Q(date__gte=date_from, date__lte=date_to)
        rows = []
        for store in Store.objects.branches().order_by('name'):
            rows.append(StorePerformance(
                store=store,
                revenue=_total(store.sales.filter(period), 'amount'),
                purchases=_total(store.purchases.filter(period), 'total_cost'),
                expenses=_total(store.expenses.filter(period), 'amount'),
            ))
        return sorted(rows, key=lambda r: r.revenue, reverse=True)

    @classmethod
    def store_overview(cls) -> list[StoreOverview]:
        """Per branch: units on hand, pending requests, most recent assignment."""
        latest = TransferLog.latest_by_destination()
        stores = (
            Store.objects.branches()
            .annotate(
                _units=Coalesce(Sum('stock_entries__quantity'), ZERO),
            )
            .order_by('name')
        )
        pending = dict(
            Store.objects.branches()
            .annotate(_pending=Count('requests', filter=Q(requests__status=RequestStatus.PENDING)))
            .values_list('pk', '_pending')
        )
        return [
            StoreOverview(
                store=store,
                stock_units=store._units,
                pending_requests=pending.get(store.pk, 0),
                last_transfer=latest.get(store.pk),
            )
            for store in stores
        ]

    @classmethod
    def summary_csv(cls, date_from: date, date_to: date, store=None) -> str:
        """
        Export the financial summary.

        Columns: Category, Metric, Value.
        """
        summary = cls.financial_summary(date_from, date_to, store)
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator='\n')
        writer.writerow(['Category', 'Metric', 'Value'])
        writer.writerow(['Summary', 'Period Start', date_from.isoformat()])
        writer.writerow(['Summary', 'Period End', date_to.isoformat()])
        writer.writerow(['Financial', 'Total Sales', f'{summary.sales:.2f}'])
        writer.writerow(['Financial', 'Total Purchases', f'{summary.purchases:.2f}'])
        writer.writerow(['Financial', 'Total Expenses', f'{summary.expenses:.2f}'])
        writer.writerow(['Financial', 'Net Profit', f'{summary.net_profit:.2f}'])
        for row in cls.store_performance(date_from, date_to):
            if store is not None and row.store != store:
                continue
            writer.writerow(['Store', row.store.name, f'{row.revenue:.2f}'])
        recipients = retailflow_settings.REPORT_RECIPIENTS
        if recipients:
            writer.writerow(['Settings', 'Recipients', recipients])
        return buffer.getvalue()

    @classmethod
    def check_low_stock(cls, store=None) -> list[LowStock]:
        """
        Products at or below their min_stock_level at store.

        store defaults to the hub. A product with no entry at the store
        counts as quantity zero. Each hit is logged as a warning.
        """
        target = store if store is not None else StockLedger.hub()
        on_hand = (
            StockEntry.objects
            .filter(product=OuterRef('pk'), store=target)
            .values('quantity')[:1]
        )
        products = (
            Product.objects
            .annotate(_on_hand=Coalesce(Subquery(on_hand), ZERO))
            .filter(_on_hand__lte=F('min_stock_level'))
            .order_by('name')
        )
        low = [
            LowStock(
                product=product,
                store=target,
                quantity=product._on_hand,
                min_stock_level=product.min_stock_level,
            )
            for product in products
        ]
        for row in low:
            logger.warning(
                "stock.low",
                extra={
                    "product_id": row.product.pk,
                    "store_id": target.pk,
                    "quantity": str(row.quantity),
                    "min_stock_level": str(row.min_stock_level),
                },
            )
        return low
