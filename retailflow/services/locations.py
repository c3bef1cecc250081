"""
Location registry — stores and the single central hub.
"""

import logging

from django.db import IntegrityError, transaction

from retailflow.exceptions import StockError
from retailflow.models.staff import StaffProfile
from retailflow.models.store import Store

logger = logging.getLogger('retailflow')


class Locations:
    """Store lifecycle."""

    @classmethod
    def get_store(cls, store_id) -> Store:
        """
        Raises:
            StockError('STORE_NOT_FOUND'): Unknown or soft-deleted store
        """
        try:
            return Store.objects.active().get(pk=store_id)
        except Store.DoesNotExist:
            raise StockError('STORE_NOT_FOUND', store_id=store_id) from None

    @classmethod
    def create_store(cls, name: str, location: str = '', is_central: bool = False) -> Store:
        """
        Raises:
            StockError('HUB_CONFLICT'): If is_central and a hub already exists
        """
        if is_central and Store.objects.filter(is_central=True).exists():
            raise StockError('HUB_CONFLICT', name=name)

        try:
            with transaction.atomic():
                store = Store.objects.create(name=name, location=location, is_central=is_central)
        except IntegrityError:
            # Lost a race against another hub creation
            raise StockError('HUB_CONFLICT', name=name) from None

        logger.info(
            "store.created",
            extra={"store_id": store.pk, "store_name": name, "is_central": is_central},
        )
        return store

    @classmethod
    def set_hub(cls, store: Store) -> Store:
        """Move the hub flag to store. Clears it on the previous hub first."""
        if store.is_deleted:
            raise StockError('STORE_NOT_FOUND', store_id=store.pk)

        with transaction.atomic():
            previous = list(
                Store.objects.select_for_update().filter(is_central=True).exclude(pk=store.pk)
            )
            Store.objects.filter(pk__in=[s.pk for s in previous]).update(is_central=False)
            Store.objects.filter(pk=store.pk).update(is_central=True)
            store.refresh_from_db()

        logger.info(
            "store.hub_changed",
            extra={
                "store_id": store.pk,
                "previous": [s.pk for s in previous],
            },
        )
        return store

    @classmethod
    def delete_store(cls, store: Store) -> Store:
        """
        Soft delete. Staff assigned to the store lose their assignment.

        Raises:
            StockError('HUB_PROTECTED'): If store is the hub
        """
        with transaction.atomic():
            locked = Store.objects.select_for_update().get(pk=store.pk)
            if locked.is_central:
                raise StockError('HUB_PROTECTED', store_id=store.pk)

            unassigned = StaffProfile.objects.filter(assigned_store=locked).update(assigned_store=None)
            locked.is_deleted = True
            locked.save(update_fields=['is_deleted', 'updated_at'])

        logger.info(
            "store.deleted",
            extra={"store_id": store.pk, "unassigned_staff": unassigned},
        )
        store.refresh_from_db()
        return store

    @classmethod
    def branches(cls):
        """Active non-hub stores, by name."""
        return Store.objects.branches().order_by('name')

    @classmethod
    def stores(cls):
        return Store.objects.active().order_by('name')
