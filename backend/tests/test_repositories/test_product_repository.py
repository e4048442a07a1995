"""
Unit tests for ProductRepository

These tests validate repository logic without requiring a database connection.
"""
import pytest
from datetime import datetime
from decimal import Decimal

import psycopg2

from storefront.domain.errors import StoreUnavailable
from storefront.domain.product import (
    AgeRequirement, Product, ProductCreate, Restricted, Unrestricted,
)
from storefront.repositories.product_repository import ProductRepository


def product_row(**overrides):
    row = {
        'id': 'product-wine',
        'name': 'Wine',
        'description': 'Red wine',
        'price': Decimal('100.00'),
        'discount': Decimal('10.00'),
        'age_required': True,
        'minimum_age': 21,
        'created_at': datetime.now(),
        'updated_at': None,
    }
    row.update(overrides)
    return row


class TestProductRepository:
    """Test ProductRepository methods"""

    def test_find_by_id_returns_product(self, mock_db):
        """Test find_by_id returns a Product domain model"""
        # Arrange: Mock database row
        mock_conn, mock_cursor = mock_db
        mock_cursor.fetchone.return_value = product_row()

        # Act: Call repository method
        repo = ProductRepository()
        product = repo.find_by_id('product-wine')

        # Assert: Verify result
        assert isinstance(product, Product)
        assert product.id == 'product-wine'
        assert product.price == Decimal('100.00')
        assert product.age_policy == Restricted(minimum_age=21)
        assert product.is_age_restricted is True

        # Verify database was called correctly
        mock_cursor.execute.assert_called_once()
        assert mock_cursor.execute.call_args.args[1] == ('product-wine',)
        mock_cursor.close.assert_called_once()
        mock_conn.close.assert_called_once()
        mock_conn.commit.assert_not_called()

    def test_find_by_id_returns_none_when_not_found(self, mock_db):
        """Test find_by_id returns None when product doesn't exist"""
        _, mock_cursor = mock_db
        mock_cursor.fetchone.return_value = None

        assert ProductRepository().find_by_id('missing') is None

    @pytest.mark.parametrize("required, age", [(False, 0), (False, 18), (None, None)])
    def test_unrequired_policy_maps_to_unrestricted(self, mock_db, required, age):
        _, mock_cursor = mock_db
        mock_cursor.fetchone.return_value = product_row(age_required=required, minimum_age=age)

        product = ProductRepository().find_by_id('product-wine')

        assert product.age_policy == Unrestricted()

    def test_find_all_returns_products_and_count(self, mock_db):
        _, mock_cursor = mock_db
        mock_cursor.fetchone.return_value = {'total': 2}
        mock_cursor.fetchall.return_value = [
            product_row(id='product-bread', name='Bread', age_required=False, minimum_age=0),
            product_row(),
        ]

        products, total = ProductRepository().find_all(limit=10)

        assert total == 2
        assert [p.name for p in products] == ['Bread', 'Wine']
        assert products[0].age_policy == Unrestricted()

    def test_create_inserts_policy_flags_and_commits(self, mock_db):
        mock_conn, mock_cursor = mock_db
        mock_cursor.fetchone.return_value = product_row()
        data = ProductCreate(
            name='Wine',
            description='Red wine',
            price=Decimal('100'),
            discount=Decimal('10'),
            age_required=AgeRequirement(required=True, age=21),
        )

        product = ProductRepository().create(data)

        params = mock_cursor.execute.call_args.args[1]
        assert params[1:] == ('Wine', 'Red wine', Decimal('100'), Decimal('10'), True, 21)
        assert product.age_policy == Restricted(minimum_age=21)
        mock_conn.commit.assert_called_once()

    def test_statement_timeout_raises_store_unavailable(self, mock_db):
        mock_conn, mock_cursor = mock_db
        mock_cursor.execute.side_effect = psycopg2.extensions.QueryCanceledError("canceling statement due to statement timeout")

        with pytest.raises(StoreUnavailable) as exc_info:
            ProductRepository().find_by_id('product-wine')

        assert exc_info.value.store == 'products'
        mock_conn.close.assert_called_once()

    def test_connection_failure_raises_store_unavailable(self, monkeypatch):
        def refuse():
            raise psycopg2.OperationalError("could not connect to server")

        monkeypatch.setattr("storefront.repositories.base.get_db_connection_dict_with_retry", refuse)

        with pytest.raises(StoreUnavailable, match="could not connect"):
            ProductRepository().find_by_id('product-wine')
