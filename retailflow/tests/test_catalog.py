"""
Tests for the catalog and the location registry.
"""

from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction

from retailflow import retail, StockError
from retailflow.exceptions import PayloadError
from retailflow.models import Product, StaffProfile, Store, Supplier, UserRole
from retailflow.protocols import NewProduct
from retailflow.services import Catalog, Locations, StockLedger


pytestmark = pytest.mark.django_db


class TestCreateProduct:
    """Tests for Catalog.create_product()."""

    def test_from_payload_dict(self):
        supplier = Supplier.objects.create(name='Oleícola Sur')

        product = Catalog.create_product({
            'name': 'Olive Oil 1L',
            'unit': 'liter',
            'costPrice': '4.50',
            'sellingPrice': 7.9,
            'minStockLevel': 8,
            'supplierId': supplier.pk,
        })

        product.refresh_from_db()
        assert product.unit == 'liter'
        assert product.cost_price == Decimal('4.50')
        assert product.selling_price == Decimal('7.90')
        assert product.min_stock_level == Decimal('8')
        assert product.supplier == supplier

    def test_defaults_from_settings(self, settings):
        settings.RETAILFLOW = {'DEFAULT_MIN_STOCK_LEVEL': 12, 'DEFAULT_UNIT': 'box'}

        product = Catalog.create_product(NewProduct(name='Tea'))

        assert product.unit == 'box'
        assert product.min_stock_level == Decimal('12')

    def test_blank_name_rejected(self):
        with pytest.raises(PayloadError):
            Catalog.create_product({'name': '  '})

    def test_margin(self, product):
        assert product.margin.quantize(Decimal('0.1')) == Decimal('43.0')


class TestUpdateProduct:
    """Tests for Catalog.update_product()."""

    def test_mutable_fields(self, product):
        Catalog.update_product(product, selling_price=Decimal('8.50'), min_stock_level=Decimal('2'))

        product.refresh_from_db()
        assert product.selling_price == Decimal('8.50')
        assert product.min_stock_level == Decimal('2')

    def test_identity_is_immutable(self, product):
        with pytest.raises(PayloadError):
            Catalog.update_product(product, id=999)


class TestCreateProductWithStock:
    """Create + seed in one transaction."""

    def test_seeds_hub_by_default(self, hub):
        product = retail.create_product_with_stock({'name': 'Honey'}, 12)

        assert StockLedger.get_quantity(product, hub) == Decimal('12')

    def test_seeds_given_store(self, hub, store_a):
        product = Catalog.create_product_with_stock({'name': 'Honey'}, 4, store=store_a)

        assert StockLedger.get_quantity(product, store_a) == Decimal('4')
        assert StockLedger.get_quantity(product, hub) == Decimal('0')

    def test_no_hub_creates_nothing(self, hub):
        Store.objects.filter(pk=hub.pk).update(is_central=False)

        with pytest.raises(StockError) as exc:
            Catalog.create_product_with_stock({'name': 'Honey'}, 4)

        assert exc.value.code == 'HUB_NOT_CONFIGURED'
        assert not Product.objects.filter(name='Honey').exists()


class TestSetHubQuantity:
    """Master inventory edit."""

    def test_sets_hub_quantity(self, hub, product):
        StockLedger.adjust(product, hub, 10, reason='Seed')

        entry = Catalog.set_hub_quantity(product, 7, reason='Count')

        assert entry.quantity == Decimal('7')
        assert entry.moves.last().delta == Decimal('-3')

    def test_unchanged_is_noop(self, hub, product):
        StockLedger.adjust(product, hub, 10, reason='Seed')

        assert Catalog.set_hub_quantity(product, 10) is None
        assert StockLedger.get_entry(product, hub).moves.count() == 1


class TestLocations:
    """Location registry."""

    def test_second_hub_rejected(self, hub):
        with pytest.raises(StockError) as exc:
            Locations.create_store('Warehouse', is_central=True)

        assert exc.value.code == 'HUB_CONFLICT'

    def test_database_enforces_single_hub(self, hub):
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                Store.objects.create(name='Rogue', is_central=True)

    def test_set_hub_moves_flag(self, hub, store_a):
        Locations.set_hub(store_a)

        hub.refresh_from_db()
        assert not hub.is_central
        assert Store.objects.hub() == store_a

    def test_hub_cannot_be_deleted(self, hub):
        with pytest.raises(StockError) as exc:
            retail.delete_store(hub)

        assert exc.value.code == 'HUB_PROTECTED'
        hub.refresh_from_db()
        assert not hub.is_deleted

    def test_delete_is_soft_and_unassigns_staff(self, store_a, manager):
        Locations.delete_store(store_a)

        assert Store.objects.filter(pk=store_a.pk, is_deleted=True).exists()
        profile = StaffProfile.objects.get(user=manager)
        assert profile.assigned_store is None
        assert profile.role == UserRole.STORE_MANAGER

    def test_branches_exclude_hub_and_deleted(self, hub, store_a, store_b):
        Locations.delete_store(store_b)

        assert list(Locations.branches()) == [store_a]

    def test_get_store_not_found(self, store_a):
        Locations.delete_store(store_a)

        with pytest.raises(StockError) as exc:
            Locations.get_store(store_a.pk)

        assert exc.value.code == 'STORE_NOT_FOUND'
