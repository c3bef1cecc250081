"""
Management command to audit stock entries against their move ledger.

Usage:
    python manage.py recalculate_stock
    python manage.py recalculate_stock --dry-run
"""

from django.core.management.base import BaseCommand

from retailflow.services.ledger import StockLedger


class Command(BaseCommand):
    """Recalculate cached stock quantities command."""

    help = 'Recalculates stock quantities from their moves and fixes drift'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show drifted entries without correcting them'
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        drifted = StockLedger.recalculate_all(dry_run=dry_run)

        for entry, cached, ledger_total in drifted:
            self.stdout.write(
                f'{entry.product} @ {entry.store}: cached {cached}, ledger {ledger_total}'
            )

        if dry_run:
            self.stdout.write(f'{len(drifted)} entry(ies) would be corrected')
        else:
            self.stdout.write(
                self.style.SUCCESS(f'{len(drifted)} entry(ies) corrected')
            )
