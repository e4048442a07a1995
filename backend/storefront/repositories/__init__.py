"""
Repository Layer - Data Access

This layer handles all store access and returns domain models.
Repositories abstract away SQL details from business logic.
"""
from storefront.repositories.base import OrderStore, ProductStore, UserStore
from storefront.repositories.user_repository import UserRepository
from storefront.repositories.product_repository import ProductRepository
from storefront.repositories.order_repository import OrderRepository
from storefront.repositories.memory import (
    InMemoryOrderStore,
    InMemoryProductStore,
    InMemoryUserStore,
)

__all__ = [
    'UserStore',
    'ProductStore',
    'OrderStore',
    'UserRepository',
    'ProductRepository',
    'OrderRepository',
    'InMemoryUserStore',
    'InMemoryProductStore',
    'InMemoryOrderStore',
]
