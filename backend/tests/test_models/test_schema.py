"""
Tests for the SQLAlchemy table declarations

Uses an in-memory SQLite engine; the CHECK constraints are enforced there too.
"""
import pytest
import warnings
from datetime import date

from sqlalchemy import create_engine, inspect
from sqlalchemy.exc import IntegrityError, SAWarning

from storefront.models import (
    OrderItemRecord, OrderRecord, ProductRecord, UserRecord, create_schema,
)


@pytest.fixture
def engine():
    engine = create_engine("sqlite://")
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", SAWarning)
        create_schema(engine)
    yield engine
    engine.dispose()


def insert(engine, record, **values):
    with warnings.catch_warnings():
        # SQLite has no native DECIMAL
        warnings.simplefilter("ignore", SAWarning)
        with engine.begin() as conn:
            conn.execute(record.__table__.insert().values(**values))


class TestSchema:

    def test_tables_created(self, engine):
        tables = set(inspect(engine).get_table_names())

        assert {"users", "products", "orders", "order_items"} <= tables

    def test_product_policy_columns(self, engine):
        columns = {c["name"] for c in inspect(engine).get_columns("products")}

        assert {"age_required", "minimum_age", "price", "discount"} <= columns

    def test_valid_order_rows_insert(self, engine):
        insert(engine, UserRecord, id="u", name="Adult", email="a@example.com", date_of_birth=date(1990, 1, 1))
        insert(engine, ProductRecord, id="p", name="Wine", price=100, discount=10, age_required=True, minimum_age=21)
        insert(engine, OrderRecord, id="o", buyer_id="u", total_amount=90, discounted_amount=10, status="pending")
        insert(engine, OrderItemRecord, order_id="o", product_id="p", position=0, quantity=1)

    def test_quantity_below_one_rejected(self, engine):
        with pytest.raises(IntegrityError):
            insert(engine, OrderItemRecord, order_id="o", product_id="p", position=0, quantity=0)

    def test_unknown_status_rejected(self, engine):
        with pytest.raises(IntegrityError):
            insert(engine, OrderRecord, id="o", buyer_id="u", total_amount=0, discounted_amount=0, status="lost")

    def test_negative_total_rejected(self, engine):
        with pytest.raises(IntegrityError):
            insert(engine, OrderRecord, id="o", buyer_id="u", total_amount=-1, discounted_amount=0, status="pending")
