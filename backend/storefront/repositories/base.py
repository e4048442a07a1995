"""
Store interfaces and shared PostgreSQL plumbing for repositories

The validator and the placement service only depend on the Protocols below,
so any object with matching methods (PostgreSQL repositories, in-memory
stores, test doubles) can be plugged in.
"""
import logging
from contextlib import contextmanager
from typing import List, Optional, Protocol

import psycopg2

from storefront.core.database import get_db_connection_dict_with_retry
from storefront.domain.errors import StoreUnavailable
from storefront.domain.order import Order
from storefront.domain.product import Product
from storefront.domain.user import User

logger = logging.getLogger(__name__)


class UserStore(Protocol):
    def find_by_id(self, user_id: str) -> Optional[User]:
        ...


class ProductStore(Protocol):
    def find_by_id(self, product_id: str) -> Optional[Product]:
        ...


class OrderStore(Protocol):
    def create(self, order: Order) -> Order:
        ...

    def find_by_id(self, order_id: str) -> Optional[Order]:
        ...

    def find_by_buyer(self, buyer_id: str, limit: int = 50, offset: int = 0) -> List[Order]:
        ...


@contextmanager
def store_cursor(store: str, commit: bool = False):
    """
    Yield a RealDictCursor on a fresh connection, closing both afterwards

    Connection failures and statement timeouts (psycopg2.OperationalError)
    are raised as StoreUnavailable so callers never mistake them for a
    missing row. With commit=True the transaction is committed when the block
    exits cleanly and rolled back otherwise.
    """
    try:
        conn = get_db_connection_dict_with_retry()
    except psycopg2.OperationalError as e:
        raise StoreUnavailable(store, str(e)) from e

    cursor = conn.cursor()
    try:
        yield cursor
        if commit:
            conn.commit()
    except psycopg2.OperationalError as e:
        logger.error(f"{store} store query failed: {e}")
        if commit and not conn.closed:
            conn.rollback()
        raise StoreUnavailable(store, str(e)) from e
    except Exception:
        if commit and not conn.closed:
            conn.rollback()
        raise
    finally:
        cursor.close()
        conn.close()
