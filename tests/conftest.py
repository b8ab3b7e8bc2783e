"""
Shared fixtures: users, actors, a fixed clock, in-memory numbering and
a small seeded catalogue (one area, one store, two products).
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from django.contrib.auth.hashers import make_password

from core.documents.numbering import InMemoryNumberingProvider
from core.identity.models import User, UserRole
from core.identity.service import actor_for_user
from core.time.clock import FixedClock
from engines.catalog.models import Product
from engines.stores.models import Area, Store

FIXED_NOW = datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)
TEST_PASSWORD = "secret-pass-1"


def make_user(*, email: str, role: str, name: str = "", password: str = TEST_PASSWORD) -> User:
    return User.objects.create(
        email=email,
        password=make_password(password),
        name=name or email.split("@")[0],
        role=role,
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(FIXED_NOW)


@pytest.fixture
def numbering() -> InMemoryNumberingProvider:
    return InMemoryNumberingProvider()


@pytest.fixture
def admin_user(db) -> User:
    return make_user(email="admin@example.com", role=UserRole.ADMIN, name="Admin")


@pytest.fixture
def captain_user(db) -> User:
    return make_user(email="captain@example.com", role=UserRole.SALES_CAPTAIN, name="Ravi")


@pytest.fixture
def other_captain_user(db) -> User:
    return make_user(email="captain2@example.com", role=UserRole.SALES_CAPTAIN, name="Meena")


@pytest.fixture
def admin(admin_user):
    return actor_for_user(admin_user)


@pytest.fixture
def captain(captain_user):
    return actor_for_user(captain_user)


@pytest.fixture
def other_captain(other_captain_user):
    return actor_for_user(other_captain_user)


@pytest.fixture
def area(db, captain_user) -> Area:
    return Area.objects.create(name="North", sales_captain=captain_user)


@pytest.fixture
def store(area, captain_user) -> Store:
    return Store.objects.create(
        name="Lakshmi Stores",
        city="Pune",
        area=area,
        margin_discount_percent=Decimal("10"),
        created_by=captain_user,
    )


@pytest.fixture
def masala(db) -> Product:
    return Product.objects.create(
        name="Garam Masala 100g",
        sku="GM-100",
        mrp=Decimal("100.00"),
        gst_percent=Decimal("18"),
        hsn_code="0910",
    )


@pytest.fixture
def turmeric(db) -> Product:
    return Product.objects.create(
        name="Turmeric 200g",
        sku="TU-200",
        mrp=Decimal("45.50"),
        gst_percent=Decimal("5"),
        hsn_code="0910",
    )
