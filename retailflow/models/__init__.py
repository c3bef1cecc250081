"""
RetailFlow Models.

Core models for multi-store retail management:
- Store: Where stock exists (one central hub, many branches)
- Product / Supplier: Catalog and supplier directory
- StockEntry: Quantity cache per (product, store)
- StockMove: Immutable ledger of quantity changes
- Transfer: Append-only log of hub → store movements
- ProductRequest: Branch supply requests
- StaffProfile: Role and store assignment per user
- Sale / Purchase / Expense / WastageReport: Bookkeeping
"""

from retailflow.models.enums import ExpenseCategory, RequestStatus, UnitOfMeasure, UserRole
from retailflow.models.move import StockMove
from retailflow.models.product import Product, Supplier
from retailflow.models.records import Expense, Purchase, Sale
from retailflow.models.request import ProductRequest
from retailflow.models.staff import StaffProfile
from retailflow.models.stock import StockEntry
from retailflow.models.store import Store
from retailflow.models.transfer import Transfer
from retailflow.models.wastage import WastageItem, WastageReport

__all__ = [
    'UnitOfMeasure',
    'RequestStatus',
    'UserRole',
    'ExpenseCategory',
    'Store',
    'Supplier',
    'Product',
    'StockEntry',
    'StockMove',
    'Transfer',
    'ProductRequest',
    'StaffProfile',
    'Sale',
    'Purchase',
    'Expense',
    'WastageReport',
    'WastageItem',
]
