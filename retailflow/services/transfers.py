"""
Transfer log — append-only record of stock moved between stores.
"""

import logging
from datetime import date
from decimal import Decimal

from django.db import transaction
from django.db.models import OuterRef, Subquery
from django.utils import timezone

from retailflow.exceptions import StockError
from retailflow.models.transfer import Transfer
from retailflow.services.ledger import StockLedger

logger = logging.getLogger('retailflow')


class TransferLog:
    """Append and read transfers. There is no update or delete."""

    @classmethod
    def record(cls, product, quantity, from_store, to_store,
               date: date | None = None, user=None) -> Transfer:
        """
        Append a transfer without touching the ledger.

        Raises:
            StockError('INVALID_QUANTITY'): If quantity <= 0
            StockError('SAME_LOCATION'): If source and destination match
        """
        quantity = Decimal(str(quantity))
        if quantity <= 0:
            raise StockError('INVALID_QUANTITY', requested=quantity)
        if from_store.pk == to_store.pk:
            raise StockError('SAME_LOCATION', store_id=from_store.pk)

        entry = Transfer.objects.create(
            date=date or timezone.localdate(),
            product=product,
            quantity=quantity,
            from_store=from_store,
            to_store=to_store,
            user=user,
        )
        logger.info(
            "transfer.recorded",
            extra={
                "transfer_id": entry.pk,
                "product_id": product.pk,
                "qty": str(quantity),
                "from_store": from_store.pk,
                "to_store": to_store.pk,
            },
        )
        return entry

    @classmethod
    def transfer(cls, product, quantity, from_store, to_store, user=None) -> Transfer:
        """
        Move quantity between stores.

        Decrement at source, increment at destination, append the log
        entry. All three happen in one transaction or not at all.
        """
        quantity = Decimal(str(quantity))
        if quantity <= 0:
            raise StockError('INVALID_QUANTITY', requested=quantity)
        if from_store.pk == to_store.pk:
            raise StockError('SAME_LOCATION', store_id=from_store.pk)

        with transaction.atomic():
            StockLedger.adjust(product, from_store, -quantity, reason=f'Transfer to {to_store}', user=user)
            StockLedger.adjust(product, to_store, quantity, reason=f'Transfer from {from_store}', user=user)
            return cls.record(product, quantity, from_store, to_store, user=user)

    @classmethod
    def list_transfers(cls, destination=None, product=None,
                       date_from: date | None = None, date_to: date | None = None):
        """Newest first."""
        qs = Transfer.objects.select_related('product', 'from_store', 'to_store')
        if destination is not None:
            qs = qs.filter(to_store=destination)
        if product is not None:
            qs = qs.filter(product=product)
        if date_from is not None:
            qs = qs.filter(date__gte=date_from)
        if date_to is not None:
            qs = qs.filter(date__lte=date_to)
        return qs.order_by('-date', '-created_at', '-pk')

    @classmethod
    def latest_for(cls, destination) -> Transfer | None:
        return cls.list_transfers(destination=destination).first()

    @classmethod
    def latest_by_destination(cls) -> dict[int, Transfer]:
        """Most recent transfer per destination store id."""
        newest = (
            Transfer.objects
            .filter(to_store=OuterRef('to_store'))
            .order_by('-date', '-created_at', '-pk')
            .values('pk')[:1]
        )
        qs = (
            Transfer.objects
            .filter(pk=Subquery(newest))
            .select_related('product', 'from_store', 'to_store')
        )
        return {t.to_store_id: t for t in qs}
