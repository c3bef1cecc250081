"""
ProductRequest model — Branch ask for hub-supplied stock.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from retailflow.models.enums import RequestStatus


class ProductRequest(models.Model):
    """
    Supply request from a branch to the hub.

    LIFECYCLE:

        ┌─────────┐   approve()   ┌──────────┐
        │ PENDING │ ────────────► │ APPROVED │
        └─────────┘               └──────────┘
             │
             │ reject()           ┌──────────┐
             └──────────────────► │ REJECTED │
                                  └──────────┘

    Items may be edited only while PENDING. Approval is a status flag;
    it does not move stock.

    Carries either an itemized list or an image of a handwritten list
    (opaque data-URL text).
    """

    date = models.DateField(
        default=timezone.localdate,
        db_index=True,
        verbose_name=_('Date'),
    )
    store = models.ForeignKey(
        'retailflow.Store',
        on_delete=models.PROTECT,
        related_name='requests',
        verbose_name=_('Store'),
    )
    status = models.CharField(
        max_length=20,
        choices=RequestStatus.choices,
        default=RequestStatus.PENDING,
        db_index=True,
        verbose_name=_('Status'),
    )
    items = models.JSONField(
        default=list,
        blank=True,
        verbose_name=_('Items'),
        help_text=_('List of {description, quantity, unit}'),
    )
    receipt_image = models.TextField(
        blank=True,
        default='',
        verbose_name=_('Image'),
    )
    note = models.TextField(blank=True, default='', verbose_name=_('Note'))

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
    )
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
    )
    reviewed_at = models.DateTimeField(null=True, blank=True, verbose_name=_('Reviewed at'))
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        verbose_name = _('Product request')
        verbose_name_plural = _('Product requests')
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['store', 'status'], name='request_store_status_idx'),
        ]

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING

    @property
    def is_terminal(self) -> bool:
        return self.status in (RequestStatus.APPROVED, RequestStatus.REJECTED)

    def __str__(self) -> str:
        return f"{self.store} {self.date} ({self.status})"
