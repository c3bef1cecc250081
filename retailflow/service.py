"""
Retail Service — The single public interface for retail operations.

Usage:
    from retailflow import retail, StockError

    retail.adjust(olive_oil, hub, 30, reason='Delivery')
    retail.assign([{'product_id': olive_oil.pk, 'distribution': {gracia.pk: 10}}])
    retail.quantity(olive_oil, gracia)  # 10
"""

from datetime import date
from decimal import Decimal

from retailflow.models.product import Product
from retailflow.models.request import ProductRequest
from retailflow.models.stock import StockEntry
from retailflow.models.store import Store
from retailflow.models.transfer import Transfer
from retailflow.services import (
    Access,
    AssignmentPlan,
    AssignmentResult,
    Bookkeeping,
    Catalog,
    Locations,
    Reports,
    RequestWorkflow,
    StockLedger,
    TransferLog,
    set_store_quantities,
)


class Retail:
    """
    Single interface for retail operations.

    Every method delegates to a service class in retailflow.services.
    State-changing methods run under transaction.atomic(); see each
    service for its locking.
    """

    # ══════════════════════════════════════════════════════════════
    # LEDGER
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def hub(cls) -> Store:
        return StockLedger.hub()

    @classmethod
    def quantity(cls, product, store) -> Decimal:
        """On-hand quantity at store (0 if never stocked)."""
        return StockLedger.get_quantity(product, store)

    @classmethod
    def adjust(cls, product, store, delta, reason: str, user=None) -> StockEntry:
        return StockLedger.adjust(product, store, delta, reason=reason, user=user)

    @classmethod
    def entries(cls, product=None, store=None, include_empty: bool = False):
        return StockLedger.list_entries(product=product, store=store, include_empty=include_empty)

    # ══════════════════════════════════════════════════════════════
    # CATALOG & LOCATIONS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def create_product(cls, fields) -> Product:
        return Catalog.create_product(fields)

    @classmethod
    def create_product_with_stock(cls, fields, initial_quantity, store=None, user=None) -> Product:
        return Catalog.create_product_with_stock(fields, initial_quantity, store=store, user=user)

    @classmethod
    def set_hub_quantity(cls, product, new_quantity, reason: str = 'Hub correction', user=None):
        return Catalog.set_hub_quantity(product, new_quantity, reason=reason, user=user)

    @classmethod
    def create_store(cls, name: str, location: str = '', is_central: bool = False) -> Store:
        return Locations.create_store(name, location=location, is_central=is_central)

    @classmethod
    def delete_store(cls, store: Store) -> Store:
        return Locations.delete_store(store)

    @classmethod
    def branches(cls):
        return Locations.branches()

    # ══════════════════════════════════════════════════════════════
    # TRANSFERS & ASSIGNMENT
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def transfer(cls, product, quantity, from_store, to_store, user=None) -> Transfer:
        return TransferLog.transfer(product, quantity, from_store, to_store, user=user)

    @classmethod
    def transfers(cls, destination=None, product=None,
                  date_from: date | None = None, date_to: date | None = None):
        return TransferLog.list_transfers(
            destination=destination, product=product, date_from=date_from, date_to=date_to,
        )

    @classmethod
    def plan(cls, rows) -> AssignmentPlan:
        """Build a plan to inspect with check() before committing."""
        return AssignmentPlan(rows)

    @classmethod
    def assign(cls, rows, user=None) -> AssignmentResult:
        """Build and commit a plan in one call."""
        return AssignmentPlan(rows).commit(user=user)

    @classmethod
    def set_store_quantities(cls, product, quantities, user=None) -> list[Transfer]:
        return set_store_quantities(product, quantities, user=user)

    # ══════════════════════════════════════════════════════════════
    # REQUESTS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def request(cls, store, items=None, receipt_image: str = '', note: str = '', user=None) -> ProductRequest:
        return RequestWorkflow.create(store, items=items, receipt_image=receipt_image, note=note, user=user)

    @classmethod
    def approve(cls, request: ProductRequest, user=None) -> ProductRequest:
        return RequestWorkflow.approve(request, user=user)

    @classmethod
    def reject(cls, request: ProductRequest, user=None) -> ProductRequest:
        return RequestWorkflow.reject(request, user=user)

    # ══════════════════════════════════════════════════════════════
    # ACCESS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def login(cls, username: str, password: str):
        return Access.login(username, password)

    # ══════════════════════════════════════════════════════════════
    # BOOKKEEPING & REPORTS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def record_sale(cls, store, date=None, morning_shift=None, afternoon_shift=None, receipt_image: str = ''):
        return Bookkeeping.record_sale(
            store, date=date, morning_shift=morning_shift,
            afternoon_shift=afternoon_shift, receipt_image=receipt_image,
        )

    @classmethod
    def summary(cls, date_from: date, date_to: date, store=None):
        return Reports.financial_summary(date_from, date_to, store=store)

    @classmethod
    def low_stock(cls, store=None) -> list:
        """Products at or below their threshold at store (hub by default)."""
        return Reports.check_low_stock(store=store)
