"""
Tests for the assignment workflow (hub → branches).
"""

from decimal import Decimal

import pytest

from retailflow import retail, StockError
from retailflow.exceptions import PayloadError
from retailflow.models import Product, StockMove, Store, Transfer
from retailflow.protocols import AssignmentRow
from retailflow.services import AssignmentPlan, Locations, StockLedger, set_store_quantities


pytestmark = pytest.mark.django_db


def row(product=None, incoming=0, **distribution):
    """Build a row payload. distribution keys are store pks passed as s<pk>."""
    payload = {
        'incoming_qty': incoming,
        'distribution': {int(k[1:]): v for k, v in distribution.items()},
    }
    if isinstance(product, Product):
        payload['product_id'] = product.pk
    elif isinstance(product, int):
        payload['product_id'] = product
    else:
        payload['name'] = product or ''
    return payload


class TestAssignmentRowPayload:
    """AssignmentRow.from_payload()."""

    def test_camel_case_and_string_keys(self, store_a):
        parsed = AssignmentRow.from_payload({
            'name': 'Olive Oil 1L',
            'incomingQty': '20',
            'distribution': {str(store_a.pk): '5'},
        })

        assert parsed.product_id is None
        assert parsed.new_product.name == 'Olive Oil 1L'
        assert parsed.incoming_qty == Decimal('20')
        assert parsed.distribution == {store_a.pk: Decimal('5')}
        assert parsed.has_name

    def test_negative_distribution_rejected(self, store_a):
        with pytest.raises(PayloadError) as exc:
            AssignmentRow.from_payload({'name': 'X', 'distribution': {store_a.pk: -1}})

        assert exc.value.code == 'INVALID_PAYLOAD'

    def test_garbage_quantity_rejected(self):
        with pytest.raises(PayloadError):
            AssignmentRow.from_payload({'name': 'X', 'incoming_qty': 'ten'})


class TestCommitRow:
    """Single-row commits."""

    def test_incoming_ten_distribute_six(self, hub, store_a, product, user, today):
        """Hub nets +4, destination +6, one transfer of 6."""
        result = AssignmentPlan([
            row(product, incoming=10, **{f's{store_a.pk}': 6}),
        ]).commit(user=user)

        assert result.committed == [0]
        assert StockLedger.get_quantity(product, hub) == Decimal('4')
        assert StockLedger.get_quantity(product, store_a) == Decimal('6')

        transfer = Transfer.objects.get()
        assert transfer.quantity == Decimal('6')
        assert transfer.from_store == hub
        assert transfer.to_store == store_a
        assert transfer.date == today
        assert transfer.user == user

    def test_new_product_scenario(self, hub, store_a, store_b):
        """New product, 20 in, 5 to each branch: hub keeps 10."""
        result = retail.assign([{
            'name': 'Olive Oil 1L',
            'incomingQty': 20,
            'distribution': {store_a.pk: 5, store_b.pk: 5},
        }])

        product = Product.objects.get(name='Olive Oil 1L')
        assert result.products == [product]
        assert StockLedger.get_quantity(product, hub) == Decimal('10')
        assert StockLedger.get_quantity(product, store_a) == Decimal('5')
        assert StockLedger.get_quantity(product, store_b) == Decimal('5')

        transfers = Transfer.objects.filter(product=product)
        assert transfers.count() == 2
        assert sorted((t.to_store_id, t.quantity) for t in transfers) == sorted([
            (store_a.pk, Decimal('5')),
            (store_b.pk, Decimal('5')),
        ])

    def test_new_product_gets_defaults(self, hub, store_a):
        retail.assign([{'name': 'Chickpeas', 'incoming_qty': 3}])

        product = Product.objects.get(name='Chickpeas')
        assert product.unit == 'pcs'
        assert product.min_stock_level == Decimal('5')
        assert StockLedger.get_quantity(product, hub) == Decimal('3')
        assert not Transfer.objects.exists()

    def test_zero_distribution_skipped(self, hub, store_a, store_b, product):
        StockLedger.adjust(product, hub, 10, reason='Seed')

        AssignmentPlan([
            row(product, **{f's{store_a.pk}': 0, f's{store_b.pk}': 4}),
        ]).commit()

        assert Transfer.objects.count() == 1
        assert StockLedger.get_quantity(product, store_a) == Decimal('0')
        assert StockLedger.get_quantity(product, hub) == Decimal('6')

    def test_blank_rows_are_skipped(self, hub, store_a, product):
        result = AssignmentPlan([
            {'name': '   ', 'incoming_qty': 50, 'distribution': {store_a.pk: 5}},
            row(product, incoming=2),
        ]).commit()

        assert result.skipped == [0]
        assert result.committed == [1]
        assert Product.objects.count() == 1
        assert StockLedger.get_quantity(product, hub) == Decimal('2')


class TestCanCommit:
    """Validation before commit."""

    def test_enabled_when_balance_non_negative(self, hub, store_a, product):
        StockLedger.adjust(product, hub, 2, reason='Seed')
        plan = AssignmentPlan([row(product, incoming=3, **{f's{store_a.pk}': 5})])

        check = plan.check()[0]
        assert check.hub_before == Decimal('2')
        assert check.remaining == Decimal('0')
        assert plan.can_commit

    def test_disabled_when_balance_negative(self, hub, store_a, product):
        StockLedger.adjust(product, hub, 2, reason='Seed')
        plan = AssignmentPlan([row(product, **{f's{store_a.pk}': 5})])

        assert plan.check()[0].remaining == Decimal('-3')
        assert plan.invalid_rows() == [0]
        assert not plan.can_commit

    def test_new_product_starts_from_zero(self, hub, store_a):
        plan = AssignmentPlan([row('Fresh Basil', incoming=1, **{f's{store_a.pk}': 2})])

        assert plan.check()[0].hub_before == Decimal('0')
        assert not plan.can_commit

    def test_disabled_without_named_row(self, hub):
        plan = AssignmentPlan([row('', incoming=5), row('  ')])

        assert not plan.can_commit

    def test_rows_for_same_product_share_balance(self, hub, store_a, store_b, product):
        StockLedger.adjust(product, hub, 10, reason='Seed')
        plan = AssignmentPlan([
            row(product, **{f's{store_a.pk}': 6}),
            row(product, **{f's{store_b.pk}': 6}),
        ])

        checks = plan.check()
        assert checks[1].hub_before == Decimal('4')
        assert plan.invalid_rows() == [1]

    def test_disabled_while_in_flight(self, hub, product):
        plan = AssignmentPlan([row(product, incoming=1)])
        plan.in_flight = True

        assert not plan.can_commit
        with pytest.raises(StockError) as exc:
            plan.commit()
        assert exc.value.code == 'INVALID_PLAN'

    def test_commit_refuses_invalid_plan(self, hub, store_a, product):
        plan = AssignmentPlan([row(product, **{f's{store_a.pk}': 1})])

        with pytest.raises(StockError) as exc:
            plan.commit()

        assert exc.value.code == 'INVALID_PLAN'
        assert exc.value.data['invalid_rows'] == [0]
        assert not StockMove.objects.exists()

    def test_in_flight_cleared_after_commit(self, hub, product):
        plan = AssignmentPlan([row(product, incoming=1)])
        plan.commit()

        assert plan.in_flight is False


class TestPartialFailure:
    """A failing row stops the plan and reports what was committed."""

    def test_unknown_product_stops_plan(self, hub, store_a, product, other_product):
        plan = AssignmentPlan([
            row(product, incoming=10, **{f's{store_a.pk}': 4}),
            row(999999, incoming=1),
            row(other_product, incoming=7),
        ])
        assert plan.can_commit

        with pytest.raises(StockError) as exc:
            plan.commit()

        assert exc.value.code == 'ROW_FAILED'
        assert exc.value.data['row'] == 1
        assert exc.value.committed == [0]
        assert exc.value.data['cause'] == 'PRODUCT_NOT_FOUND'

        # Row 0 stays committed, row 2 never ran
        assert StockLedger.get_quantity(product, hub) == Decimal('6')
        assert StockLedger.get_quantity(product, store_a) == Decimal('4')
        assert StockLedger.get_quantity(other_product, hub) == Decimal('0')
        assert plan.in_flight is False

    def test_failing_row_rolls_back_its_own_writes(self, hub, store_a, product):
        """Incoming is applied before the bad destination is reached; both roll back."""
        plan = AssignmentPlan([
            row(product, incoming=5, **{f's{store_a.pk}': 1, 's999999': 1}),
        ])

        with pytest.raises(StockError) as exc:
            plan.commit()

        assert exc.value.data['cause'] == 'STORE_NOT_FOUND'
        assert exc.value.committed == []
        assert StockLedger.get_quantity(product, hub) == Decimal('0')
        assert StockLedger.get_quantity(product, store_a) == Decimal('0')
        assert not Transfer.objects.exists()

    def test_distribution_to_hub_fails(self, hub, product):
        plan = AssignmentPlan([row(product, incoming=5, **{f's{hub.pk}': 1})])

        with pytest.raises(StockError) as exc:
            plan.commit()

        assert exc.value.data['cause'] == 'SAME_LOCATION'

    def test_deleted_store_fails(self, hub, store_a, product):
        Locations.delete_store(store_a)
        plan = AssignmentPlan([row(product, incoming=5, **{f's{store_a.pk}': 1})])

        with pytest.raises(StockError) as exc:
            plan.commit()

        assert exc.value.data['cause'] == 'STORE_NOT_FOUND'

    def test_no_hub(self, hub, store_a, product):
        Store.objects.filter(pk=hub.pk).update(is_central=False)
        plan = AssignmentPlan([row(product, incoming=5)])

        with pytest.raises(StockError) as exc:
            plan.commit()

        assert exc.value.code == 'HUB_NOT_CONFIGURED'


class TestSetStoreQuantities:
    """Single-item per-store edit."""

    def test_unchanged_quantity_is_noop(self, hub, store_a, product):
        """3 → 3: no ledger mutation, no transfer."""
        StockLedger.adjust(product, store_a, 3, reason='Seed')
        moves_before = StockMove.objects.count()

        transfers = set_store_quantities(product, {store_a: 3})

        assert transfers == []
        assert StockMove.objects.count() == moves_before
        assert not Transfer.objects.exists()

    def test_increase_moves_from_hub_and_logs(self, hub, store_a, product):
        StockLedger.adjust(product, hub, 10, reason='Seed')
        StockLedger.adjust(product, store_a, 3, reason='Seed')

        transfers = set_store_quantities(product, {store_a.pk: 5})

        assert len(transfers) == 1
        assert transfers[0].quantity == Decimal('2')
        assert transfers[0].from_store == hub
        assert StockLedger.get_quantity(product, hub) == Decimal('8')
        assert StockLedger.get_quantity(product, store_a) == Decimal('5')

    def test_decrease_returns_to_hub_without_log(self, hub, store_a, product):
        StockLedger.adjust(product, store_a, 5, reason='Seed')

        transfers = retail.set_store_quantities(product, {store_a: 2})

        assert transfers == []
        assert not Transfer.objects.exists()
        assert StockLedger.get_quantity(product, hub) == Decimal('3')
        assert StockLedger.get_quantity(product, store_a) == Decimal('2')

    def test_decrease_logged_when_audited(self, hub, store_a, product, settings):
        settings.RETAILFLOW = {'AUDIT_NEGATIVE_ADJUSTMENTS': True}
        StockLedger.adjust(product, store_a, 5, reason='Seed')

        transfers = set_store_quantities(product, {store_a: 2})

        assert len(transfers) == 1
        assert transfers[0].from_store == store_a
        assert transfers[0].to_store == hub
        assert transfers[0].quantity == Decimal('3')

    def test_hub_key_rejected(self, hub, product):
        with pytest.raises(StockError) as exc:
            set_store_quantities(product, {hub: 1})

        assert exc.value.code == 'SAME_LOCATION'
