"""
Inbound payloads — typed rows validated at the boundary.

Forms and API clients send loosely-shaped dicts (camelCase or snake_case,
numbers as strings or floats). Every service takes these dataclasses
instead, built through from_payload().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

from retailflow.exceptions import PayloadError


def _pick(payload: dict, *keys: str, default: Any = None) -> Any:
    """First present key wins."""
    for key in keys:
        if key in payload and payload[key] is not None:
            return payload[key]
    return default


def to_decimal(value: Any, name: str, default: Decimal | None = Decimal('0')) -> Decimal | None:
    """Parse a number field. Blank strings count as missing."""
    if value is None or value == '':
        return default
    if isinstance(value, bool):
        raise PayloadError('INVALID_PAYLOAD', field=name, value=value)
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise PayloadError('INVALID_PAYLOAD', field=name, value=value) from None
    if not result.is_finite():
        raise PayloadError('INVALID_PAYLOAD', field=name, value=value)
    return result


def json_number(value: Decimal) -> int | float:
    """Decimal → JSON-safe number (JSONField cannot store Decimal)."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def _require_mapping(payload: Any, name: str) -> dict:
    if not isinstance(payload, dict):
        raise PayloadError('INVALID_PAYLOAD', field=name, value=type(payload).__name__)
    return payload


@dataclass(frozen=True)
class RequestItem:
    """One line of a supply request."""

    description: str
    quantity: Decimal = Decimal('1')
    unit: str = 'pcs'

    @classmethod
    def from_payload(cls, payload: dict) -> RequestItem:
        payload = _require_mapping(payload, 'item')
        return cls(
            description=str(_pick(payload, 'description', 'name', default='')).strip(),
            quantity=to_decimal(_pick(payload, 'quantity', 'qty'), 'quantity', Decimal('1')),
            unit=str(_pick(payload, 'unit', default='pcs')),
        )

    @property
    def is_blank(self) -> bool:
        return not self.description

    def as_dict(self) -> dict:
        return {
            'description': self.description,
            'quantity': json_number(self.quantity),
            'unit': self.unit,
        }


@dataclass(frozen=True)
class ShiftData:
    """Cash-up figures for one shift."""

    pos_sales: Decimal = Decimal('0')
    card_sales: Decimal = Decimal('0')
    cash_counted: Decimal = Decimal('0')
    opening_fund: Decimal = Decimal('0')
    expected_cash: Decimal = Decimal('0')
    difference: Decimal = Decimal('0')
    employee_name: str = ''
    shift_time: str = ''

    @classmethod
    def from_payload(cls, payload: dict | None) -> ShiftData:
        if payload is None:
            return cls()
        payload = _require_mapping(payload, 'shift')
        return cls(
            pos_sales=to_decimal(_pick(payload, 'pos_sales', 'posSales'), 'pos_sales'),
            card_sales=to_decimal(_pick(payload, 'card_sales', 'cardSales'), 'card_sales'),
            cash_counted=to_decimal(_pick(payload, 'cash_counted', 'cashCounted'), 'cash_counted'),
            opening_fund=to_decimal(_pick(payload, 'opening_fund', 'openingFund'), 'opening_fund'),
            expected_cash=to_decimal(_pick(payload, 'expected_cash', 'expectedCash'), 'expected_cash'),
            difference=to_decimal(_pick(payload, 'difference'), 'difference'),
            employee_name=str(_pick(payload, 'employee_name', 'employeeName', default='')),
            shift_time=str(_pick(payload, 'shift_time', 'shiftTime', default='')),
        )

    def as_dict(self) -> dict:
        return {
            'pos_sales': json_number(self.pos_sales),
            'card_sales': json_number(self.card_sales),
            'cash_counted': json_number(self.cash_counted),
            'opening_fund': json_number(self.opening_fund),
            'expected_cash': json_number(self.expected_cash),
            'difference': json_number(self.difference),
            'employee_name': self.employee_name,
            'shift_time': self.shift_time,
        }


@dataclass(frozen=True)
class PurchaseItem:
    description: str
    quantity: Decimal = Decimal('1')
    unit: str = 'pcs'
    cost: Decimal = Decimal('0')

    @classmethod
    def from_payload(cls, payload: dict) -> PurchaseItem:
        payload = _require_mapping(payload, 'item')
        return cls(
            description=str(_pick(payload, 'description', 'name', default='')).strip(),
            quantity=to_decimal(_pick(payload, 'quantity', 'qty'), 'quantity', Decimal('1')),
            unit=str(_pick(payload, 'unit', default='pcs')),
            cost=to_decimal(_pick(payload, 'cost', 'unit_cost', 'unitCost'), 'cost'),
        )

    @property
    def line_total(self) -> Decimal:
        return self.quantity * self.cost

    def as_dict(self) -> dict:
        return {
            'description': self.description,
            'quantity': json_number(self.quantity),
            'unit': self.unit,
            'cost': json_number(self.cost),
        }


@dataclass(frozen=True)
class WastageLine:
    """
    One wasted item. unit_price None means "use the product's cost price".
    """

    product_name: str
    quantity: Decimal
    product_id: int | None = None
    reason: str = ''
    unit: str = 'pcs'
    unit_price: Decimal | None = None
    time: str = ''

    @classmethod
    def from_payload(cls, payload: dict) -> WastageLine:
        payload = _require_mapping(payload, 'line')
        product_id = _pick(payload, 'product_id', 'productId')
        try:
            product_id = int(product_id) if product_id not in (None, '') else None
        except (TypeError, ValueError):
            raise PayloadError('INVALID_PAYLOAD', field='product_id', value=product_id) from None
        return cls(
            product_name=str(_pick(payload, 'product_name', 'productName', default='')).strip(),
            quantity=to_decimal(_pick(payload, 'quantity'), 'quantity'),
            product_id=product_id,
            reason=str(_pick(payload, 'reason', default='')),
            unit=str(_pick(payload, 'unit', default='pcs')),
            unit_price=to_decimal(_pick(payload, 'unit_price', 'unitPrice'), 'unit_price', None),
            time=str(_pick(payload, 'time', default='')),
        )


@dataclass(frozen=True)
class NewProduct:
    """Fields for a catalog entry created on the fly."""

    name: str
    unit: str | None = None
    cost_price: Decimal = Decimal('0')
    selling_price: Decimal = Decimal('0')
    min_stock_level: Decimal | None = None
    supplier_id: int | None = None

    @classmethod
    def from_payload(cls, payload: dict) -> NewProduct:
        payload = _require_mapping(payload, 'product')
        supplier_id = _pick(payload, 'supplier_id', 'supplierId')
        try:
            supplier_id = int(supplier_id) if supplier_id not in (None, '') else None
        except (TypeError, ValueError):
            raise PayloadError('INVALID_PAYLOAD', field='supplier_id', value=supplier_id) from None
        return cls(
            name=str(_pick(payload, 'name', 'description', default='')).strip(),
            unit=_pick(payload, 'unit'),
            cost_price=to_decimal(_pick(payload, 'cost_price', 'costPrice', 'cost'), 'cost_price'),
            selling_price=to_decimal(_pick(payload, 'selling_price', 'sellingPrice'), 'selling_price'),
            min_stock_level=to_decimal(
                _pick(payload, 'min_stock_level', 'minStockLevel'), 'min_stock_level', None
            ),
            supplier_id=supplier_id,
        )


@dataclass(frozen=True)
class AssignmentRow:
    """
    One line of the assignment matrix.

    Either product_id (existing catalog entry) or new_product is set.
    distribution maps destination store id → quantity to send.
    """

    product_id: int | None = None
    new_product: NewProduct | None = None
    incoming_qty: Decimal = Decimal('0')
    distribution: dict[int, Decimal] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: dict) -> AssignmentRow:
        payload = _require_mapping(payload, 'row')

        product_id = _pick(payload, 'product_id', 'productId', 'id')
        try:
            product_id = int(product_id) if product_id not in (None, '') else None
        except (TypeError, ValueError):
            raise PayloadError('INVALID_PAYLOAD', field='product_id', value=product_id) from None

        new_product = None
        if product_id is None:
            raw = _pick(payload, 'product', 'new_product', 'newProduct', default=payload)
            new_product = NewProduct.from_payload(raw)

        raw_distribution = _pick(payload, 'distribution', default={})
        _require_mapping(raw_distribution, 'distribution')
        distribution = {}
        for store_id, qty in raw_distribution.items():
            try:
                key = int(store_id)
            except (TypeError, ValueError):
                raise PayloadError('INVALID_PAYLOAD', field='distribution', value=store_id) from None
            amount = to_decimal(qty, f'distribution[{store_id}]')
            if amount < 0:
                raise PayloadError('INVALID_PAYLOAD', field=f'distribution[{store_id}]', value=qty)
            distribution[key] = amount

        incoming = to_decimal(_pick(payload, 'incoming_qty', 'incomingQty', 'addQty'), 'incoming_qty')
        if incoming < 0:
            raise PayloadError('INVALID_PAYLOAD', field='incoming_qty', value=incoming)

        return cls(
            product_id=product_id,
            new_product=new_product,
            incoming_qty=incoming,
            distribution=distribution,
        )

    @property
    def has_name(self) -> bool:
        """Existing products always have one; new ones need a non-blank name."""
        if self.product_id is not None:
            return True
        return bool(self.new_product and self.new_product.name.strip())

    @property
    def assigned_total(self) -> Decimal:
        return sum((q for q in self.distribution.values() if q > 0), Decimal('0'))
