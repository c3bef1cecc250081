"""
Tests for the supply request workflow.
"""

import pytest

from retailflow import retail, RequestError
from retailflow.exceptions import PayloadError
from retailflow.models import ProductRequest, RequestStatus, StockMove
from retailflow.services import ActiveSession, RequestWorkflow


pytestmark = pytest.mark.django_db


ITEMS = [
    {'description': 'Olive Oil 1L', 'quantity': 6, 'unit': 'liter'},
    {'description': 'Rice', 'qty': '2.5', 'unit': 'kg'},
]


class TestCanSave:
    """Save is allowed with a described item or an image."""

    def test_empty_request_cannot_save(self):
        assert not RequestWorkflow.can_save([], '')

    def test_blank_descriptions_do_not_count(self):
        assert not RequestWorkflow.can_save([{'description': '  ', 'quantity': 1}], '')

    def test_one_described_item(self):
        assert RequestWorkflow.can_save([{'description': 'Rice'}], '')

    def test_image_only(self):
        assert RequestWorkflow.can_save([], 'data:image/png;base64,AAAA')


class TestCreate:
    """Tests for RequestWorkflow.create()."""

    def test_creates_pending(self, store_a, manager, today):
        request = RequestWorkflow.create(store_a, items=ITEMS, note='Weekend', user=manager)

        assert request.status == RequestStatus.PENDING
        assert request.date == today
        assert request.created_by == manager
        assert request.items == [
            {'description': 'Olive Oil 1L', 'quantity': 6, 'unit': 'liter'},
            {'description': 'Rice', 'quantity': 2.5, 'unit': 'kg'},
        ]

    def test_blank_items_dropped(self, store_a):
        request = retail.request(store_a, items=[{'description': ''}, {'description': 'Salt'}])

        assert [item['description'] for item in request.items] == ['Salt']

    def test_image_only_request(self, store_a):
        request = RequestWorkflow.create(store_a, receipt_image='data:image/jpeg;base64,BBBB')

        assert request.items == []
        assert request.receipt_image.startswith('data:image/jpeg')

    def test_empty_request_rejected(self, store_a):
        with pytest.raises(RequestError) as exc:
            RequestWorkflow.create(store_a, items=[{'description': ' '}])

        assert exc.value.code == 'EMPTY_REQUEST'
        assert not ProductRequest.objects.exists()


class TestEditItems:
    """Item edits are allowed only while PENDING."""

    def test_add_update_remove(self, store_a):
        request = RequestWorkflow.create(store_a, items=ITEMS)

        RequestWorkflow.add_item(request, {'description': 'Salt', 'quantity': 1})
        RequestWorkflow.update_item(request, 0, {'description': 'Olive Oil 5L', 'quantity': 2, 'unit': 'liter'})
        RequestWorkflow.remove_item(request, 1)

        request.refresh_from_db()
        assert [item['description'] for item in request.items] == ['Olive Oil 5L', 'Salt']

    def test_edit_items_replaces_list(self, store_a):
        request = RequestWorkflow.create(store_a, items=ITEMS)

        RequestWorkflow.edit_items(request, [{'description': 'Flour', 'quantity': 10, 'unit': 'kg'}])

        request.refresh_from_db()
        assert request.items == [{'description': 'Flour', 'quantity': 10, 'unit': 'kg'}]

    def test_bad_index(self, store_a):
        request = RequestWorkflow.create(store_a, items=ITEMS)

        with pytest.raises(PayloadError):
            RequestWorkflow.remove_item(request, 5)

    def test_cannot_empty_without_image(self, store_a):
        request = RequestWorkflow.create(store_a, items=[{'description': 'Salt'}])

        with pytest.raises(RequestError) as exc:
            RequestWorkflow.remove_item(request, 0)
        assert exc.value.code == 'EMPTY_REQUEST'

        with pytest.raises(RequestError):
            RequestWorkflow.edit_items(request, [{'description': '  '}])

        request.refresh_from_db()
        assert [item['description'] for item in request.items] == ['Salt']

    def test_image_only_request_may_drop_items(self, store_a):
        request = RequestWorkflow.create(
            store_a, items=[{'description': 'Salt'}], receipt_image='data:image/png;base64,AAAA',
        )

        RequestWorkflow.remove_item(request, 0)

        request.refresh_from_db()
        assert request.items == []

    def test_locked_after_approval(self, store_a, admin_user):
        request = RequestWorkflow.create(store_a, items=ITEMS)
        RequestWorkflow.approve(request, user=admin_user)

        with pytest.raises(RequestError) as exc:
            RequestWorkflow.add_item(request, {'description': 'Late'})
        assert exc.value.code == 'INVALID_STATUS'

        with pytest.raises(RequestError):
            RequestWorkflow.edit_items(request, [])

        request.refresh_from_db()
        assert len(request.items) == 2


class TestReview:
    """PENDING → APPROVED | REJECTED, exactly once."""

    def test_approve(self, store_a, admin_user):
        request = RequestWorkflow.create(store_a, items=ITEMS)

        retail.approve(request, user=admin_user)

        request.refresh_from_db()
        assert request.status == RequestStatus.APPROVED
        assert request.reviewed_by == admin_user
        assert request.reviewed_at is not None
        assert request.is_terminal

    def test_approve_only_once(self, store_a, admin_user):
        request = RequestWorkflow.create(store_a, items=ITEMS)
        RequestWorkflow.approve(request, user=admin_user)

        with pytest.raises(RequestError) as exc:
            RequestWorkflow.approve(request, user=admin_user)

        assert exc.value.code == 'INVALID_STATUS'
        assert exc.value.data['current_status'] == RequestStatus.APPROVED

    def test_reject_then_approve_fails(self, store_a, admin_user):
        request = RequestWorkflow.create(store_a, items=ITEMS)
        retail.reject(request, user=admin_user)

        with pytest.raises(RequestError):
            RequestWorkflow.approve(request, user=admin_user)

        request.refresh_from_db()
        assert request.status == RequestStatus.REJECTED

    def test_approval_moves_no_stock(self, store_a, admin_user):
        request = RequestWorkflow.create(store_a, items=ITEMS)
        RequestWorkflow.approve(request, user=admin_user)

        assert not StockMove.objects.exists()

    def test_get_not_found(self):
        with pytest.raises(RequestError) as exc:
            RequestWorkflow.get(424242)

        assert exc.value.code == 'REQUEST_NOT_FOUND'


class TestVisibleTo:
    """Admins see everything; managers see their store."""

    def test_scoping(self, store_a, store_b, admin_user, manager):
        mine = RequestWorkflow.create(store_a, items=ITEMS)
        RequestWorkflow.create(store_b, items=ITEMS)

        admin_view = RequestWorkflow.visible_to(ActiveSession.for_user(admin_user))
        manager_view = RequestWorkflow.visible_to(ActiveSession.for_user(manager))

        assert admin_view.count() == 2
        assert list(manager_view) == [mine]

    def test_unassigned_manager_sees_nothing(self, store_a, user):
        RequestWorkflow.create(store_a, items=ITEMS)

        assert RequestWorkflow.visible_to(ActiveSession.for_user(user)).count() == 0
