"""
Django RetailFlow — multi-store retail management.

One central hub, many branches: stock ledger, hub-to-branch assignment,
supply requests and daily bookkeeping.

Usage:
    from retailflow import retail, StockError

    retail.adjust(olive_oil, hub, 30, reason='Delivery')
    retail.assign([{'product_id': olive_oil.pk, 'distribution': {gracia.pk: 10}}])
    retail.quantity(olive_oil, gracia)  # 10
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'retail':
        from retailflow.service import Retail
        return Retail
    elif name == 'StockError':
        from retailflow.exceptions import StockError
        return StockError
    elif name == 'RequestError':
        from retailflow.exceptions import RequestError
        return RequestError
    elif name == 'AccessError':
        from retailflow.exceptions import AccessError
        return AccessError
    elif name == 'Store':
        from retailflow.models.store import Store
        return Store
    elif name == 'Product':
        from retailflow.models.product import Product
        return Product
    elif name == 'StockEntry':
        from retailflow.models.stock import StockEntry
        return StockEntry
    elif name == 'Transfer':
        from retailflow.models.transfer import Transfer
        return Transfer
    elif name == 'ProductRequest':
        from retailflow.models.request import ProductRequest
        return ProductRequest
    elif name == 'RequestStatus':
        from retailflow.models.enums import RequestStatus
        return RequestStatus
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'retail',
    'StockError',
    'RequestError',
    'AccessError',
    'Store',
    'Product',
    'StockEntry',
    'Transfer',
    'ProductRequest',
    'RequestStatus',
]

__version__ = '0.1.0'
