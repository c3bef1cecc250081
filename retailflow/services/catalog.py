"""
Catalog — product creation and master inventory edits.
"""

import logging
from decimal import Decimal

from django.db import transaction

from retailflow.conf import retailflow_settings
from retailflow.exceptions import PayloadError, StockError
from retailflow.models.product import Product, Supplier
from retailflow.protocols.payloads import NewProduct
from retailflow.services.ledger import StockLedger

logger = logging.getLogger('retailflow')

MUTABLE_FIELDS = frozenset({
    'name',
    'unit',
    'cost_price',
    'selling_price',
    'min_stock_level',
    'supplier',
})


def _as_new_product(fields) -> NewProduct:
    if isinstance(fields, NewProduct):
        return fields
    return NewProduct.from_payload(fields)


class Catalog:
    """Product lifecycle."""

    @classmethod
    def get_product(cls, product_id) -> Product:
        """
        Raises:
            StockError('PRODUCT_NOT_FOUND')
        """
        try:
            return Product.objects.get(pk=product_id)
        except Product.DoesNotExist:
            raise StockError('PRODUCT_NOT_FOUND', product_id=product_id) from None

    @classmethod
    def create_product(cls, fields) -> Product:
        """
        Create a catalog entry from a NewProduct or a raw dict.

        Missing unit and threshold fall back to DEFAULT_UNIT and
        DEFAULT_MIN_STOCK_LEVEL.

        Raises:
            PayloadError('INVALID_PAYLOAD'): If the name is blank
        """
        data = _as_new_product(fields)
        if not data.name:
            raise PayloadError('INVALID_PAYLOAD', field='name', value=data.name)

        supplier = None
        if data.supplier_id is not None:
            supplier = Supplier.objects.filter(pk=data.supplier_id).first()

        min_stock = data.min_stock_level
        if min_stock is None:
            min_stock = Decimal(retailflow_settings.DEFAULT_MIN_STOCK_LEVEL)

        product = Product.objects.create(
            name=data.name,
            unit=data.unit or retailflow_settings.DEFAULT_UNIT,
            cost_price=data.cost_price,
            selling_price=data.selling_price,
            min_stock_level=min_stock,
            supplier=supplier,
        )
        logger.info(
            "catalog.product.created",
            extra={"product_id": product.pk, "product_name": product.name},
        )
        return product

    @classmethod
    def update_product(cls, product: Product, **fields) -> Product:
        """
        Change mutable fields. Identity never changes.

        Raises:
            PayloadError('INVALID_PAYLOAD'): On an unknown or immutable field
        """
        unknown = set(fields) - MUTABLE_FIELDS
        if unknown:
            raise PayloadError('INVALID_PAYLOAD', field=sorted(unknown)[0])

        for name, value in fields.items():
            setattr(product, name, value)
        product.save(update_fields=list(fields))

        logger.info(
            "catalog.product.updated",
            extra={"product_id": product.pk, "fields": sorted(fields)},
        )
        return product

    @classmethod
    def create_product_with_stock(cls, fields, initial_quantity, store=None, user=None) -> Product:
        """
        Create a product and seed its initial stock in one transaction.

        store defaults to the hub. A zero initial quantity seeds nothing.
        """
        initial_quantity = Decimal(str(initial_quantity or 0))
        if initial_quantity < 0:
            raise StockError('INVALID_QUANTITY', requested=initial_quantity)

        with transaction.atomic():
            product = cls.create_product(fields)
            target = store if store is not None else StockLedger.hub()
            if initial_quantity > 0:
                StockLedger.adjust(
                    product, target, initial_quantity,
                    reason='Initial stock', user=user,
                )
            return product

    @classmethod
    def set_hub_quantity(cls, product: Product, new_quantity, reason: str = 'Hub correction', user=None):
        """
        Master inventory edit: set the hub quantity to new_quantity.

        Returns:
            StockEntry, or None when nothing changed
        """
        if not reason:
            raise StockError('REASON_REQUIRED')

        new_quantity = Decimal(str(new_quantity))
        hub = StockLedger.hub()

        with transaction.atomic():
            delta = new_quantity - StockLedger.get_quantity(product, hub)
            if delta == 0:
                return None
            return StockLedger.adjust(product, hub, delta, reason=reason, user=user)
