"""
Pytest fixtures for RetailFlow tests.
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone

from retailflow.models import Product, StaffProfile, Store, UnitOfMeasure, UserRole


User = get_user_model()


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username='testuser',
        password='testpass123'
    )


@pytest.fixture
def admin_user(db):
    """Create a user with the ADMIN role."""
    user = User.objects.create_user(
        username='owner',
        password='ownerpass123',
        first_name='Laura',
    )
    StaffProfile.objects.create(user=user, role=UserRole.ADMIN)
    return user


@pytest.fixture
def hub(db):
    """The central hub seeded by migration 0002."""
    store = Store.objects.hub()
    assert store is not None
    return store


@pytest.fixture
def store_a(db):
    """Create a branch."""
    return Store.objects.create(name='Store Gràcia', location='Gràcia')


@pytest.fixture
def store_b(db):
    """Create a second branch."""
    return Store.objects.create(name='Store Born', location='El Born')


@pytest.fixture
def manager(db, store_a):
    """Create a store manager assigned to store_a."""
    user = User.objects.create_user(
        username='manager',
        password='managerpass123',
        first_name='Marc',
    )
    StaffProfile.objects.create(user=user, role=UserRole.STORE_MANAGER, assigned_store=store_a)
    return user


@pytest.fixture
def product(db):
    """Create a test product."""
    return Product.objects.create(
        name='Olive Oil',
        unit=UnitOfMeasure.LITER,
        cost_price=Decimal('4.50'),
        selling_price=Decimal('7.90'),
        min_stock_level=Decimal('5'),
    )


@pytest.fixture
def other_product(db):
    """Create a second product."""
    return Product.objects.create(
        name='Rice',
        unit=UnitOfMeasure.KILOGRAM,
        cost_price=Decimal('1.20'),
        selling_price=Decimal('2.10'),
        min_stock_level=Decimal('10'),
    )


@pytest.fixture
def today():
    """Return today's date."""
    return timezone.localdate()


@pytest.fixture
def yesterday():
    """Return yesterday's date."""
    return timezone.localdate() - timedelta(days=1)
