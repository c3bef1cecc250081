"""
Assignment workflow — distribute hub stock to branches.

A plan is a matrix of rows: one product per row (existing or new),
an incoming quantity arriving at the hub from a supplier, and the
quantity each branch should receive.

Per row, in order:
    1. create the product if the row describes a new one
    2. hub += incoming
    3. for each branch with q > 0: hub -= q, branch += q, log Transfer

Each row commits in its own transaction. A failing row stops the plan;
rows before it stay committed and the error says which ones.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from django.db import DatabaseError, transaction
from django.utils import timezone

from retailflow.conf import retailflow_settings
from retailflow.exceptions import BaseError, StockError
from retailflow.models.store import Store
from retailflow.protocols.payloads import AssignmentRow
from retailflow.services.catalog import Catalog
from retailflow.services.ledger import StockLedger
from retailflow.services.locations import Locations
from retailflow.services.transfers import TransferLog

logger = logging.getLogger('retailflow')


@dataclass(frozen=True)
class RowCheck:
    """Pre-commit projection of one row against the hub."""

    index: int
    hub_before: Decimal
    incoming: Decimal
    assigned: Decimal
    skipped: bool = False

    @property
    def remaining(self) -> Decimal:
        return self.hub_before + self.incoming - self.assigned

    @property
    def is_valid(self) -> bool:
        return self.skipped or self.remaining >= 0


@dataclass
class AssignmentResult:
    committed: list[int] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)
    products: list = field(default_factory=list)
    transfers: list = field(default_factory=list)


class AssignmentPlan:
    """
    Usage:
        plan = AssignmentPlan.from_payload(rows)
        if plan.can_commit:
            result = plan.commit(user=request.user)
    """

    def __init__(self, rows):
        self.rows: list[AssignmentRow] = [
            row if isinstance(row, AssignmentRow) else AssignmentRow.from_payload(row)
            for row in rows
        ]
        self.in_flight = False

    @classmethod
    def from_payload(cls, rows) -> 'AssignmentPlan':
        return cls(rows)

    # ══════════════════════════════════════════════════════════════
    # VALIDATION
    # ══════════════════════════════════════════════════════════════

    def check(self) -> list[RowCheck]:
        """
        Project the hub balance row by row.

        Advisory only: commit() does not re-check balances under lock.
        Rows naming the same product see the balance left by earlier rows.
        Without a hub every existing product starts from zero.
        """
        hub = Store.objects.hub()
        running: dict[int, Decimal] = {}
        checks = []

        for index, row in enumerate(self.rows):
            if not row.has_name:
                checks.append(RowCheck(index, Decimal('0'), row.incoming_qty, row.assigned_total, skipped=True))
                continue

            if row.product_id is None:
                hub_before = Decimal('0')
            elif row.product_id in running:
                hub_before = running[row.product_id]
            elif hub is None:
                hub_before = Decimal('0')
            else:
                hub_before = StockLedger.get_quantity(row.product_id, hub)

            result = RowCheck(index, hub_before, row.incoming_qty, row.assigned_total)
            if row.product_id is not None:
                running[row.product_id] = result.remaining
            checks.append(result)

        return checks

    def invalid_rows(self) -> list[int]:
        return [c.index for c in self.check() if not c.is_valid]

    @property
    def can_commit(self) -> bool:
        if self.in_flight:
            return False
        if not any(row.has_name for row in self.rows):
            return False
        return not self.invalid_rows()

    # ══════════════════════════════════════════════════════════════
    # COMMIT
    # ══════════════════════════════════════════════════════════════

    def commit(self, user=None) -> AssignmentResult:
        """
        Apply every named row in order.

        Raises:
            StockError('INVALID_PLAN'): If can_commit is False
            StockError('HUB_NOT_CONFIGURED'): If there is no hub
            StockError('ROW_FAILED'): A row failed. data carries row,
                committed (indices already applied) and cause (error code)
        """
        if not self.can_commit:
            raise StockError(
                'INVALID_PLAN',
                in_flight=self.in_flight,
                invalid_rows=[] if self.in_flight else self.invalid_rows(),
            )

        hub = StockLedger.hub()
        result = AssignmentResult()
        self.in_flight = True
        try:
            for index, row in enumerate(self.rows):
                if not row.has_name:
                    result.skipped.append(index)
                    continue

                try:
                    with transaction.atomic():
                        # Serializes concurrent commits against the hub
                        Store.objects.select_for_update().get(pk=hub.pk)
                        product, transfers = self._commit_row(row, hub, user)
                except (BaseError, DatabaseError) as exc:
                    cause = getattr(exc, 'code', type(exc).__name__)
                    logger.warning(
                        "assignment.row.failed",
                        extra={
                            "row": index,
                            "cause": cause,
                            "committed": list(result.committed),
                        },
                    )
                    raise StockError(
                        'ROW_FAILED',
                        row=index,
                        committed=list(result.committed),
                        cause=cause,
                    ) from exc

                result.committed.append(index)
                result.products.append(product)
                result.transfers.extend(transfers)
                logger.info(
                    "assignment.row.committed",
                    extra={
                        "row": index,
                        "product_id": product.pk,
                        "incoming": str(row.incoming_qty),
                        "transfers": len(transfers),
                    },
                )
        finally:
            self.in_flight = False

        return result

    def _commit_row(self, row: AssignmentRow, hub: Store, user):
        if row.product_id is not None:
            product = Catalog.get_product(row.product_id)
        else:
            product = Catalog.create_product(row.new_product)

        if row.incoming_qty > 0:
            StockLedger.adjust(product, hub, row.incoming_qty, reason='Supplier delivery', user=user)

        today = timezone.localdate()
        transfers = []
        for store_id, quantity in row.distribution.items():
            if quantity <= 0:
                continue
            store = Locations.get_store(store_id)
            if store.pk == hub.pk:
                raise StockError('SAME_LOCATION', store_id=store.pk)

            StockLedger.adjust(product, hub, -quantity, reason='Assignment', user=user)
            StockLedger.adjust(product, store, quantity, reason='Assignment', user=user)
            transfers.append(
                TransferLog.record(product, quantity, hub, store, date=today, user=user)
            )

        return product, transfers


def set_store_quantities(product, quantities, user=None) -> list:
    """
    Single-item shortcut: set the quantity of product at each store.

    quantities maps Store (or store id) → new quantity. Per store the
    difference is taken from (or returned to) the hub. Only hub → store
    movements are logged unless AUDIT_NEGATIVE_ADJUSTMENTS is on.

    Returns:
        List of Transfers created
    """
    hub = StockLedger.hub()
    audit_negative = retailflow_settings.AUDIT_NEGATIVE_ADJUSTMENTS
    transfers = []

    with transaction.atomic():
        Store.objects.select_for_update().get(pk=hub.pk)

        for key, new_quantity in quantities.items():
            store = key if isinstance(key, Store) else Locations.get_store(key)
            if store.pk == hub.pk:
                raise StockError('SAME_LOCATION', store_id=store.pk)

            new_quantity = Decimal(str(new_quantity))
            delta = new_quantity - StockLedger.get_quantity(product, store)
            if delta == 0:
                continue

            StockLedger.adjust(product, hub, -delta, reason='Store quantity edit', user=user)
            StockLedger.adjust(product, store, delta, reason='Store quantity edit', user=user)

            if delta > 0:
                transfers.append(TransferLog.record(product, delta, hub, store, user=user))
            elif audit_negative:
                transfers.append(TransferLog.record(product, -delta, store, hub, user=user))

            logger.info(
                "assignment.store_quantity",
                extra={
                    "product_id": product.pk,
                    "store_id": store.pk,
                    "delta": str(delta),
                    "logged": delta > 0 or audit_negative,
                },
            )

    return transfers
