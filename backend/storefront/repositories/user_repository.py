"""
User Repository - Data Access Layer for Users

Handles all database queries for users and returns User domain models.
"""
import uuid
from typing import List, Optional, Tuple

import psycopg2

from storefront.domain.user import User, UserCreate
from storefront.repositories.base import store_cursor

USER_COLUMNS = "id, name, email, date_of_birth, created_at, updated_at"


class UserRepository:
    """
    Repository for User data access

    All SQL queries for users are centralized here.
    """

    store_name = "users"

    def find_by_id(self, user_id: str) -> Optional[User]:
        """
        Find user by ID

        Args:
            user_id: User identifier

        Returns:
            User or None if not found
        """
        with store_cursor(self.store_name) as cursor:
            cursor.execute(f"""
                SELECT {USER_COLUMNS}
                FROM users
                WHERE id = %s
            """, (user_id,))

            row = cursor.fetchone()
            if not row:
                return None

            return User(**row)

    def find_by_email(self, email: str) -> Optional[User]:
        """Find user by email (case-insensitive)"""
        with store_cursor(self.store_name) as cursor:
            cursor.execute(f"""
                SELECT {USER_COLUMNS}
                FROM users
                WHERE LOWER(email) = LOWER(%s)
            """, (email,))

            row = cursor.fetchone()
            return User(**row) if row else None

    def find_all(self, limit: int = 50, offset: int = 0) -> Tuple[List[User], int]:
        """
        List users ordered by creation date

        Returns:
            Tuple of (list of users, total count)
        """
        with store_cursor(self.store_name) as cursor:
            cursor.execute("SELECT COUNT(*) as total FROM users")
            total = cursor.fetchone()['total']

            cursor.execute(f"""
                SELECT {USER_COLUMNS}
                FROM users
                ORDER BY created_at, id
                LIMIT %s OFFSET %s
            """, (limit, offset))

            return [User(**row) for row in cursor.fetchall()], total

    def create(self, data: UserCreate) -> User:
        """
        Insert a new user

        Raises:
            ValueError: if the email is already registered
        """
        user_id = str(uuid.uuid4())
        try:
            with store_cursor(self.store_name, commit=True) as cursor:
                cursor.execute(f"""
                    INSERT INTO users (id, name, email, date_of_birth)
                    VALUES (%s, %s, %s, %s)
                    RETURNING {USER_COLUMNS}
                """, (user_id, data.name, data.email, data.date_of_birth))

                return User(**cursor.fetchone())
        except psycopg2.IntegrityError as e:
            raise ValueError(f"Email {data.email} is already registered") from e
