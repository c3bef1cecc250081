"""
StaffProfile model — Role and store assignment for an auth user.
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from retailflow.models.enums import UserRole


class StaffProfile(models.Model):
    """Role-gating data attached to a Django user."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='staff_profile',
    )
    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.STORE_MANAGER,
        verbose_name=_('Role'),
    )
    assigned_store = models.ForeignKey(
        'retailflow.Store',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='staff',
        verbose_name=_('Assigned store'),
    )

    class Meta:
        verbose_name = _('Staff profile')
        verbose_name_plural = _('Staff profiles')

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __str__(self) -> str:
        return f"{self.user} ({self.role})"
