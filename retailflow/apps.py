"""Django app configuration for RetailFlow."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class RetailflowConfig(AppConfig):
    """Configuration for RetailFlow app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "retailflow"
    verbose_name = _("Retail Management")
