"""
In-memory stores

Process-local counterparts of the PostgreSQL repositories, with the same
method names. Used when STORE_BACKEND=memory and throughout the tests.
"""
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple

from storefront.domain.order import Order
from storefront.domain.product import Product, ProductCreate
from storefront.domain.user import User, UserCreate


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _match_email(users, email: str) -> Optional[User]:
    email = email.lower()
    return next((u for u in users if u.email.lower() == email), None)


class InMemoryUserStore:
    def __init__(self, now: Callable[[], datetime] = _utcnow):
        self._users: Dict[str, User] = {}
        self._lock = threading.Lock()
        self._now = now

    def add(self, user: User) -> User:
        """Insert a fully-formed user as-is (fixtures, seeding)"""
        with self._lock:
            self._users[user.id] = user
        return user

    def find_by_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def find_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            users = list(self._users.values())
        return _match_email(users, email)

    def find_all(self, limit: int = 50, offset: int = 0) -> Tuple[List[User], int]:
        with self._lock:
            users = list(self._users.values())
        return users[offset:offset + limit], len(users)

    def create(self, data: UserCreate) -> User:
        with self._lock:
            if _match_email(self._users.values(), data.email):
                raise ValueError(f"Email {data.email} is already registered")
            now = self._now()
            user = User(id=str(uuid.uuid4()), created_at=now, updated_at=now, **data.model_dump())
            self._users[user.id] = user
        return user


class InMemoryProductStore:
    def __init__(self, now: Callable[[], datetime] = _utcnow):
        self._products: Dict[str, Product] = {}
        self._lock = threading.Lock()
        self._now = now

    def add(self, product: Product) -> Product:
        with self._lock:
            self._products[product.id] = product
        return product

    def find_by_id(self, product_id: str) -> Optional[Product]:
        with self._lock:
            return self._products.get(product_id)

    def find_all(self, limit: int = 100, offset: int = 0) -> Tuple[List[Product], int]:
        with self._lock:
            products = list(self._products.values())
        products.sort(key=lambda p: p.name)
        return products[offset:offset + limit], len(products)

    def create(self, data: ProductCreate) -> Product:
        now = self._now()
        product = Product(
            id=str(uuid.uuid4()),
            name=data.name,
            description=data.description,
            price=data.price,
            discount=data.discount,
            age_policy=data.to_age_policy(),
            created_at=now,
            updated_at=now,
        )
        return self.add(product)


class InMemoryOrderStore:
    def __init__(self, now: Callable[[], datetime] = _utcnow):
        self._orders: Dict[str, Order] = {}
        self._lock = threading.Lock()
        self._now = now

    def create(self, order: Order) -> Order:
        """Assign an ID and timestamps and keep a copy of the order"""
        now = self._now()
        persisted = order.model_copy(
            update={'id': str(uuid.uuid4()), 'created_at': now, 'updated_at': now},
            deep=True,
        )
        with self._lock:
            self._orders[persisted.id] = persisted
        return persisted.model_copy(deep=True)

    def find_by_id(self, order_id: str) -> Optional[Order]:
        with self._lock:
            order = self._orders.get(order_id)
        return order.model_copy(deep=True) if order else None

    def find_by_buyer(self, buyer_id: str, limit: int = 50, offset: int = 0) -> List[Order]:
        with self._lock:
            orders = [o for o in self._orders.values() if o.buyer_id == buyer_id]
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return [o.model_copy(deep=True) for o in orders[offset:offset + limit]]

    def count(self) -> int:
        with self._lock:
            return len(self._orders)
