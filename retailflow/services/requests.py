"""
Request workflow — branch supply requests and their review.

    PENDING → APPROVED | REJECTED

Items may be edited only while PENDING. Approval does not move stock.
"""

import logging

from django.db import transaction
from django.utils import timezone

from retailflow.exceptions import PayloadError, RequestError
from retailflow.models.enums import RequestStatus
from retailflow.models.request import ProductRequest
from retailflow.protocols.payloads import RequestItem

logger = logging.getLogger('retailflow')


def _parse_items(items) -> list[RequestItem]:
    return [
        item if isinstance(item, RequestItem) else RequestItem.from_payload(item)
        for item in (items or [])
    ]


def _serialize(items: list[RequestItem]) -> list[dict]:
    return [item.as_dict() for item in items if not item.is_blank]


class RequestWorkflow:
    """Create, edit and review supply requests."""

    @classmethod
    def can_save(cls, items=None, receipt_image: str = '') -> bool:
        """At least one described item, or an image."""
        if receipt_image:
            return True
        return any(not item.is_blank for item in _parse_items(items))

    @classmethod
    def get(cls, request_id) -> ProductRequest:
        try:
            return ProductRequest.objects.select_related('store').get(pk=request_id)
        except ProductRequest.DoesNotExist:
            raise RequestError('REQUEST_NOT_FOUND', request_id=request_id) from None

    @classmethod
    def create(cls, store, items=None, receipt_image: str = '', note: str = '',
               user=None, date=None) -> ProductRequest:
        """
        Open a PENDING request. Items without a description are dropped.

        Raises:
            RequestError('EMPTY_REQUEST'): No described item and no image
        """
        parsed = _parse_items(items)
        if not cls.can_save(parsed, receipt_image):
            raise RequestError('EMPTY_REQUEST', store_id=store.pk)

        request = ProductRequest.objects.create(
            date=date or timezone.localdate(),
            store=store,
            status=RequestStatus.PENDING,
            items=_serialize(parsed),
            receipt_image=receipt_image or '',
            note=note or '',
            created_by=user,
        )
        logger.info(
            "request.created",
            extra={
                "request_id": request.pk,
                "store_id": store.pk,
                "items": len(request.items),
                "has_image": bool(receipt_image),
            },
        )
        return request

    # ══════════════════════════════════════════════════════════════
    # ITEM EDITS (PENDING only)
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def _locked_pending(cls, request: ProductRequest) -> ProductRequest:
        locked = ProductRequest.objects.select_for_update().get(pk=request.pk)
        if locked.status != RequestStatus.PENDING:
            raise RequestError(
                'INVALID_STATUS',
                request_id=request.pk,
                current_status=locked.status,
            )
        return locked

    @classmethod
    def _save_items(cls, request: ProductRequest, locked: ProductRequest, items: list[dict]):
        if not items and not locked.receipt_image:
            raise RequestError('EMPTY_REQUEST', request_id=request.pk)
        locked.items = items
        locked.save(update_fields=['items'])
        request.items = items
        logger.info(
            "request.items_edited",
            extra={"request_id": request.pk, "items": len(items)},
        )
        return request

    @classmethod
    def edit_items(cls, request: ProductRequest, items) -> ProductRequest:
        """
        Replace the item list.

        Raises:
            RequestError('EMPTY_REQUEST'): If no item is left and there is no image
        """
        parsed = _parse_items(items)
        with transaction.atomic():
            locked = cls._locked_pending(request)
            return cls._save_items(request, locked, _serialize(parsed))

    @classmethod
    def add_item(cls, request: ProductRequest, item) -> ProductRequest:
        parsed = _parse_items([item])
        with transaction.atomic():
            locked = cls._locked_pending(request)
            return cls._save_items(request, locked, list(locked.items) + _serialize(parsed))

    @classmethod
    def update_item(cls, request: ProductRequest, index: int, item) -> ProductRequest:
        """
        Raises:
            PayloadError('INVALID_PAYLOAD'): If index is out of range
        """
        parsed = _parse_items([item])[0]
        with transaction.atomic():
            locked = cls._locked_pending(request)
            items = list(locked.items)
            if not 0 <= index < len(items):
                raise PayloadError('INVALID_PAYLOAD', field='index', value=index)
            items[index] = parsed.as_dict()
            return cls._save_items(request, locked, items)

    @classmethod
    def remove_item(cls, request: ProductRequest, index: int) -> ProductRequest:
        with transaction.atomic():
            locked = cls._locked_pending(request)
            items = list(locked.items)
            if not 0 <= index < len(items):
                raise PayloadError('INVALID_PAYLOAD', field='index', value=index)
            del items[index]
            return cls._save_items(request, locked, items)

    # ══════════════════════════════════════════════════════════════
    # REVIEW
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def _transition(cls, request: ProductRequest, status: str, user) -> ProductRequest:
        with transaction.atomic():
            locked = cls._locked_pending(request)
            locked.status = status
            locked.reviewed_by = user
            locked.reviewed_at = timezone.now()
            locked.save(update_fields=['status', 'reviewed_by', 'reviewed_at'])

        request.status = locked.status
        request.reviewed_by = locked.reviewed_by
        request.reviewed_at = locked.reviewed_at
        logger.info(
            f"request.{status.lower()}",
            extra={
                "request_id": request.pk,
                "store_id": request.store_id,
                "user": str(user) if user else None,
            },
        )
        return request

    @classmethod
    def approve(cls, request: ProductRequest, user=None) -> ProductRequest:
        """
        PENDING → APPROVED. Stock is not touched.

        Raises:
            RequestError('INVALID_STATUS'): If not PENDING
        """
        return cls._transition(request, RequestStatus.APPROVED, user)

    @classmethod
    def reject(cls, request: ProductRequest, user=None) -> ProductRequest:
        """
        PENDING → REJECTED.

        Raises:
            RequestError('INVALID_STATUS'): If not PENDING
        """
        return cls._transition(request, RequestStatus.REJECTED, user)

    @classmethod
    def visible_to(cls, session):
        """Admins see every request; managers see their store's. Newest first."""
        qs = ProductRequest.objects.select_related('store').order_by('-date', '-created_at', '-pk')
        if session.is_admin:
            return qs
        if session.store_id is None:
            return qs.none()
        return qs.filter(store_id=session.store_id)
