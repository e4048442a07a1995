"""
FastAPI dependencies: store selection and service wiring

STORE_BACKEND picks the PostgreSQL repositories or the in-memory stores.
Tests swap any of these through app.dependency_overrides.
"""
from functools import lru_cache

from fastapi import Depends, HTTPException

from storefront.core.config import settings
from storefront.domain.errors import (
    InvalidQuantity,
    OrderNotFound,
    OrderPlacementError,
    ProductNotFound,
    StoreUnavailable,
    UnderageForProduct,
    UserNotFound,
)
from storefront.repositories import (
    InMemoryOrderStore,
    InMemoryProductStore,
    InMemoryUserStore,
    OrderRepository,
    ProductRepository,
    UserRepository,
)
from storefront.services.order_placement_service import OrderPlacementService
from storefront.services.order_validator import OrderValidator

ERROR_STATUS_CODES = {
    UserNotFound: 404,
    ProductNotFound: 404,
    OrderNotFound: 404,
    UnderageForProduct: 403,
    InvalidQuantity: 422,
    StoreUnavailable: 503,
}


def http_error(error: OrderPlacementError) -> HTTPException:
    """Translate an order placement error into an HTTPException"""
    status_code = next(
        (code for cls, code in ERROR_STATUS_CODES.items() if isinstance(error, cls)),
        400,
    )
    return HTTPException(status_code=status_code, detail=error.to_dict())


@lru_cache(maxsize=1)
def get_user_store():
    if settings.STORE_BACKEND == "memory":
        return InMemoryUserStore()
    return UserRepository()


@lru_cache(maxsize=1)
def get_product_store():
    if settings.STORE_BACKEND == "memory":
        return InMemoryProductStore()
    return ProductRepository()


@lru_cache(maxsize=1)
def get_order_store():
    if settings.STORE_BACKEND == "memory":
        return InMemoryOrderStore()
    return OrderRepository()


def get_order_validator(
    user_store=Depends(get_user_store),
    product_store=Depends(get_product_store),
) -> OrderValidator:
    return OrderValidator(user_store, product_store)


def get_order_placement_service(
    validator: OrderValidator = Depends(get_order_validator),
    order_store=Depends(get_order_store),
) -> OrderPlacementService:
    return OrderPlacementService(validator, order_store)
