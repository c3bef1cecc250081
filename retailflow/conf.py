"""
RetailFlow configuration.

Usage in settings.py:
    RETAILFLOW = {
        "DEFAULT_MIN_STOCK_LEVEL": 5,
        "DEFAULT_UNIT": "pcs",
        "ALLOW_NEGATIVE_STOCK": True,
        "AUDIT_NEGATIVE_ADJUSTMENTS": False,
        "REPORT_RECIPIENTS": "owner@example.com",
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class RetailflowSettings:
    """RetailFlow configuration settings."""

    # Threshold applied to products created without one
    DEFAULT_MIN_STOCK_LEVEL: int = 5

    # Unit applied to products created without one
    DEFAULT_UNIT: str = 'pcs'

    # Ledger accepts quantities below zero
    ALLOW_NEGATIVE_STOCK: bool = True

    # Log store -> hub transfers for negative single-item adjustments
    AUDIT_NEGATIVE_ADJUSTMENTS: bool = False

    # Comma-separated report recipients
    REPORT_RECIPIENTS: str = ''


def get_retailflow_settings() -> RetailflowSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "RETAILFLOW", {})
    return RetailflowSettings(**{
        k: v for k, v in user_settings.items()
        if k in RetailflowSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_retailflow_settings(), name)


retailflow_settings = _LazySettings()
