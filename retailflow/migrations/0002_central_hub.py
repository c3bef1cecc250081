"""
Create the central hub.

Every assignment starts from the hub, so a fresh install gets one.
"""

from django.db import migrations
from django.db.models import ProtectedError

HUB_NAME = 'Central Office'


def create_central_hub(apps, schema_editor):
    """Create the hub unless some store already carries the flag."""
    Store = apps.get_model('retailflow', 'Store')

    if not Store.objects.filter(is_central=True).exists():
        Store.objects.create(name=HUB_NAME, location='', is_central=True)


def remove_central_hub(apps, schema_editor):
    """Remove the seeded hub if nothing references it (for reverse migration)."""
    Store = apps.get_model('retailflow', 'Store')
    for hub in Store.objects.filter(is_central=True, name=HUB_NAME):
        try:
            hub.delete()
        except ProtectedError:
            # Stock, transfers or records point at it; keep it
            continue


class Migration(migrations.Migration):
    """Create the central hub."""

    dependencies = [
        ('retailflow', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(create_central_hub, remove_central_hub),
    ]
