"""
Domain Layer - Business Entities

Pydantic models for users, products and orders, plus the errors raised while
placing an order.
"""
from storefront.domain.user import User, UserCreate
from storefront.domain.product import (
    Product, ProductCreate, AgePolicy, AgeRequirement, Restricted, Unrestricted,
)
from storefront.domain.order import (
    Order, OrderCreate, OrderLineItem, OrderStatus, ValidatedOrder,
)

__all__ = [
    'User', 'UserCreate',
    'Product', 'ProductCreate', 'AgePolicy', 'AgeRequirement', 'Restricted', 'Unrestricted',
    'Order', 'OrderCreate', 'OrderLineItem', 'OrderStatus', 'ValidatedOrder',
]
