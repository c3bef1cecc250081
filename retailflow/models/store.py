"""
Store model — Where stock exists.
"""

from django.db import models
from django.db.models import Q
from django.utils.translation import gettext_lazy as _


class StoreQuerySet(models.QuerySet):
    """Custom QuerySet for Store with convenience filters."""

    def active(self):
        """Stores that were not soft-deleted."""
        return self.filter(is_deleted=False)

    def branches(self):
        """Active stores that receive stock from the hub."""
        return self.active().filter(is_central=False)

    def hub(self):
        """The central hub, or None."""
        return self.filter(is_central=True).first()


class Store(models.Model):
    """
    A retail location. Exactly one store may be the central hub.

    The hub is the source of every assignment; branches receive stock
    from it. The single-hub rule is a database constraint, so toggling
    the flag must go through Locations.set_hub().

    Examples:
        Store.objects.create(name='Central Office', location='Barcelona Center', is_central=True)
        Store.objects.create(name='Store Gràcia', location='Gràcia')
    """

    name = models.CharField(
        max_length=100,
        verbose_name=_('Name'),
    )
    location = models.CharField(
        max_length=255,
        blank=True,
        default='',
        verbose_name=_('Address'),
    )
    is_central = models.BooleanField(
        default=False,
        verbose_name=_('Central hub'),
        help_text=_('Stock is distributed to branches from this store.'),
    )
    is_deleted = models.BooleanField(
        default=False,
        db_index=True,
        verbose_name=_('Deleted'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = StoreQuerySet.as_manager()

    class Meta:
        verbose_name = _('Store')
        verbose_name_plural = _('Stores')
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(
                fields=['is_central'],
                condition=Q(is_central=True),
                name='unique_central_hub',
            )
        ]

    def __str__(self) -> str:
        return self.name
