"""
Enums for RetailFlow models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class UnitOfMeasure(models.TextChoices):
    """Unit a product is counted in."""
    PIECE = 'pcs', _('Pieces')
    KILOGRAM = 'kg', _('Kilograms')
    POUND = 'lb', _('Pounds')
    BOX = 'box', _('Boxes')
    PACK = 'pack', _('Packs')
    LITER = 'liter', _('Liters')
    METER = 'meter', _('Meters')


class RequestStatus(models.TextChoices):
    """
    Supply request lifecycle.

    PENDING → APPROVED | REJECTED. Both outcomes are terminal.
    """
    PENDING = 'PENDING', _('Pending')
    APPROVED = 'APPROVED', _('Approved')
    REJECTED = 'REJECTED', _('Rejected')


class UserRole(models.TextChoices):
    """Staff role."""
    ADMIN = 'ADMIN', _('Administrator')
    STORE_MANAGER = 'STORE_MANAGER', _('Store manager')


class ExpenseCategory(models.TextChoices):
    RENT = 'Rent', _('Rent')
    UTILITIES = 'Utilities', _('Utilities')
    STAFF = 'Staff', _('Staff')
    TRANSPORT = 'Transport', _('Transport')
    MISC = 'Misc', _('Misc')
