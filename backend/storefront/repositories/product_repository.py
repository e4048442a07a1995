"""
Product Repository - Data Access Layer for Products

Handles all database queries for products and returns Product domain models.
The age policy is stored as two columns (age_required, minimum_age).
"""
import uuid
from typing import List, Optional, Tuple

from storefront.domain.product import AgeRequirement, Product, ProductCreate
from storefront.repositories.base import store_cursor

PRODUCT_COLUMNS = """
    id, name, description, price, discount,
    age_required, minimum_age, created_at, updated_at
"""


class ProductRepository:
    """
    Repository for Product data access

    All SQL queries for products are centralized here.
    Returns Product domain models, not raw dictionaries.
    """

    store_name = "products"

    @staticmethod
    def _map_row_to_product(row: dict) -> Product:
        """Map a database row to the Product domain model"""
        requirement = AgeRequirement(
            required=bool(row.get('age_required')),
            age=row.get('minimum_age') or 0,
        )
        return Product(
            id=row['id'],
            name=row['name'],
            description=row.get('description'),
            price=row['price'],
            discount=row['discount'],
            age_policy=requirement.to_policy(),
            created_at=row.get('created_at'),
            updated_at=row.get('updated_at'),
        )

    def find_by_id(self, product_id: str) -> Optional[Product]:
        """
        Find product by ID

        Args:
            product_id: Product identifier

        Returns:
            Product or None if not found
        """
        with store_cursor(self.store_name) as cursor:
            cursor.execute(f"""
                SELECT {PRODUCT_COLUMNS}
                FROM products
                WHERE id = %s
            """, (product_id,))

            row = cursor.fetchone()
            if not row:
                return None

            return self._map_row_to_product(row)

    def find_all(self, limit: int = 100, offset: int = 0) -> Tuple[List[Product], int]:
        """
        List products ordered by name

        Returns:
            Tuple of (list of products, total count)
        """
        with store_cursor(self.store_name) as cursor:
            cursor.execute("SELECT COUNT(*) as total FROM products")
            total = cursor.fetchone()['total']

            cursor.execute(f"""
                SELECT {PRODUCT_COLUMNS}
                FROM products
                ORDER BY name
                LIMIT %s OFFSET %s
            """, (limit, offset))

            return [self._map_row_to_product(row) for row in cursor.fetchall()], total

    def create(self, data: ProductCreate) -> Product:
        """Insert a new product and return it"""
        product_id = str(uuid.uuid4())
        requirement = data.age_required

        with store_cursor(self.store_name, commit=True) as cursor:
            cursor.execute(f"""
                INSERT INTO products (
                    id, name, description, price, discount, age_required, minimum_age
                ) VALUES (%s, %s, %s, %s, %s, %s, %s)
                RETURNING {PRODUCT_COLUMNS}
            """, (
                product_id,
                data.name,
                data.description,
                data.price,
                data.discount,
                requirement.required,
                requirement.age,
            ))

            return self._map_row_to_product(cursor.fetchone())
