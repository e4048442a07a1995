"""
Pytest fixtures and configuration for Storefront Backend tests

This file provides shared fixtures that can be used across all test modules.
Everything runs against the in-memory stores; repository tests mock the
psycopg2 connection helpers instead of touching a database.
"""
import os

# Must be set before storefront.core.config is imported
os.environ.setdefault("STORE_BACKEND", "memory")

import pytest
from datetime import date, datetime, timezone
from decimal import Decimal

from storefront.domain.product import Product, Restricted, Unrestricted
from storefront.domain.user import User
from storefront.repositories.memory import (
    InMemoryOrderStore,
    InMemoryProductStore,
    InMemoryUserStore,
)
from storefront.services.order_placement_service import OrderPlacementService
from storefront.services.order_validator import OrderValidator

# Pinned "current date" for every age computation in the suite
TODAY = date(2025, 6, 15)
NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def adult_user():
    """Born 1990-01-01: 35 on TODAY"""
    return User(
        id="user-adult",
        name="Adult",
        email="adult@example.com",
        date_of_birth=date(1990, 1, 1),
        created_at=NOW,
    )


@pytest.fixture
def teen_user():
    """Born 2010-01-01: 15 on TODAY"""
    return User(
        id="user-teen",
        name="Teen",
        email="teen@example.com",
        date_of_birth=date(2010, 1, 1),
        created_at=NOW,
    )


@pytest.fixture
def bread():
    """Unrestricted product ({required: false, age: 0})"""
    return Product(
        id="product-bread",
        name="Bread",
        description="Fresh bread",
        price=Decimal("10"),
        discount=Decimal("0"),
        age_policy=Unrestricted(),
        created_at=NOW,
    )


@pytest.fixture
def wine():
    """Restricted product ({required: true, age: 21})"""
    return Product(
        id="product-wine",
        name="Wine",
        description="Red wine",
        price=Decimal("100"),
        discount=Decimal("10"),
        age_policy=Restricted(minimum_age=21),
        created_at=NOW,
    )


@pytest.fixture
def user_store(adult_user, teen_user):
    store = InMemoryUserStore(now=lambda: NOW)
    store.add(adult_user)
    store.add(teen_user)
    return store


@pytest.fixture
def product_store(bread, wine):
    store = InMemoryProductStore(now=lambda: NOW)
    store.add(bread)
    store.add(wine)
    return store


@pytest.fixture
def order_store():
    return InMemoryOrderStore(now=lambda: NOW)


@pytest.fixture
def validator(user_store, product_store):
    return OrderValidator(user_store, product_store, today=lambda: TODAY)


@pytest.fixture
def placement_service(validator, order_store):
    return OrderPlacementService(validator, order_store)


@pytest.fixture
def sample_order_data(adult_user, bread):
    """
    Provides a raw order payload, as an API caller would send it
    """
    return {
        "buyer_id": adult_user.id,
        "line_items": [{"product_id": bread.id, "quantity": 2}],
        "total_amount": 20,
        "discounted_amount": 0,
    }


@pytest.fixture
def mock_db(monkeypatch):
    """
    Replaces the psycopg2 connection helper used by the repositories

    Returns (connection, cursor) mocks; configure cursor.fetchone /
    cursor.fetchall per test.
    """
    from unittest.mock import MagicMock

    mock_conn = MagicMock()
    mock_cursor = MagicMock()
    mock_conn.cursor.return_value = mock_cursor
    mock_conn.closed = 0
    monkeypatch.setattr(
        "storefront.repositories.base.get_db_connection_dict_with_retry",
        lambda: mock_conn,
    )
    return mock_conn, mock_cursor
