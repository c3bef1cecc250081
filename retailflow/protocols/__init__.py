"""
RetailFlow Protocols.

Typed payloads exchanged with forms and API clients.
"""

from retailflow.protocols.payloads import (
    AssignmentRow,
    NewProduct,
    PurchaseItem,
    RequestItem,
    ShiftData,
    WastageLine,
)

__all__ = [
    "AssignmentRow",
    "NewProduct",
    "PurchaseItem",
    "RequestItem",
    "ShiftData",
    "WastageLine",
]
