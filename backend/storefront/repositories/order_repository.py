"""
Order Repository - Data Access Layer for Orders

Handles all database queries for orders and returns Order domain models.
An order and its line items are written in a single transaction, so a
failure part-way leaves nothing behind.
"""
import uuid
from typing import List, Optional

from storefront.domain.order import Order, OrderLineItem
from storefront.repositories.base import store_cursor

ORDER_COLUMNS = """
    id, buyer_id, total_amount, discounted_amount, status, created_at, updated_at
"""


class OrderRepository:
    """
    Repository for Order data access

    All SQL queries for orders are centralized here.
    Returns Order domain models with their line items.
    """

    store_name = "orders"

    def find_by_id(self, order_id: str) -> Optional[Order]:
        """
        Find order by ID with its line items

        Args:
            order_id: Order identifier

        Returns:
            Order with items or None if not found
        """
        with store_cursor(self.store_name) as cursor:
            cursor.execute(f"""
                SELECT {ORDER_COLUMNS}
                FROM orders
                WHERE id = %s
            """, (order_id,))

            row = cursor.fetchone()
            if not row:
                return None

            cursor.execute("""
                SELECT product_id, quantity
                FROM order_items
                WHERE order_id = %s
                ORDER BY position
            """, (order_id,))

            order_dict = dict(row)
            order_dict['line_items'] = [OrderLineItem(**item) for item in cursor.fetchall()]

            return Order(**order_dict)

    def find_by_buyer(self, buyer_id: str, limit: int = 50, offset: int = 0) -> List[Order]:
        """List a buyer's orders, newest first, with their line items"""
        with store_cursor(self.store_name) as cursor:
            cursor.execute(f"""
                SELECT {ORDER_COLUMNS}
                FROM orders
                WHERE buyer_id = %s
                ORDER BY created_at DESC
                LIMIT %s OFFSET %s
            """, (buyer_id, limit, offset))

            order_rows = cursor.fetchall()
            if not order_rows:
                return []

            # All items for these orders in one query
            order_ids = [row['id'] for row in order_rows]
            cursor.execute("""
                SELECT order_id, product_id, quantity
                FROM order_items
                WHERE order_id = ANY(%s)
                ORDER BY order_id, position
            """, (order_ids,))

            items_by_order = {}
            for item in cursor.fetchall():
                items_by_order.setdefault(item['order_id'], []).append(
                    OrderLineItem(product_id=item['product_id'], quantity=item['quantity'])
                )

            orders = []
            for row in order_rows:
                order_dict = dict(row)
                order_dict['line_items'] = items_by_order.get(row['id'], [])
                orders.append(Order(**order_dict))

            return orders

    def create(self, order: Order) -> Order:
        """
        Persist a validated order and its line items

        Assigns the order ID; created_at/updated_at come from the database.

        Returns:
            The persisted Order
        """
        order_id = str(uuid.uuid4())

        with store_cursor(self.store_name, commit=True) as cursor:
            cursor.execute(f"""
                INSERT INTO orders (id, buyer_id, total_amount, discounted_amount, status)
                VALUES (%s, %s, %s, %s, %s)
                RETURNING {ORDER_COLUMNS}
            """, (
                order_id,
                order.buyer_id,
                order.total_amount,
                order.discounted_amount,
                order.status.value,
            ))
            row = cursor.fetchone()

            if order.line_items:
                cursor.executemany("""
                    INSERT INTO order_items (order_id, product_id, position, quantity)
                    VALUES (%s, %s, %s, %s)
                """, [
                    (order_id, item.product_id, position, item.quantity)
                    for position, item in enumerate(order.line_items)
                ])

            order_dict = dict(row)
            order_dict['line_items'] = [item.model_copy() for item in order.line_items]

            return Order(**order_dict)
