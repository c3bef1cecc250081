"""
RetailFlow services — modular organization of retail operations.

    from retailflow.services import StockLedger, AssignmentPlan, RequestWorkflow
"""

from retailflow.services.access import Access, ActiveSession
from retailflow.services.assignment import (
    AssignmentPlan,
    AssignmentResult,
    RowCheck,
    set_store_quantities,
)
from retailflow.services.bookkeeping import Bookkeeping
from retailflow.services.catalog import Catalog
from retailflow.services.ledger import StockLedger
from retailflow.services.locations import Locations
from retailflow.services.reports import Reports
from retailflow.services.requests import RequestWorkflow
from retailflow.services.transfers import TransferLog

__all__ = [
    'Access',
    'ActiveSession',
    'AssignmentPlan',
    'AssignmentResult',
    'RowCheck',
    'set_store_quantities',
    'Bookkeeping',
    'Catalog',
    'StockLedger',
    'Locations',
    'Reports',
    'RequestWorkflow',
    'TransferLog',
]
