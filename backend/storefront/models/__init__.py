"""
Modelos de base de datos
"""
from storefront.core.database import Base, get_engine
from .user import UserRecord
from .product import ProductRecord
from .order import OrderRecord, OrderItemRecord


def create_schema(engine=None) -> None:
    """
    Create every table declared above (existing tables are left alone)

    Defaults to the engine built from settings.DATABASE_URL.
    """
    Base.metadata.create_all(bind=engine or get_engine())


__all__ = [
    "UserRecord",
    "ProductRecord",
    "OrderRecord",
    "OrderItemRecord",
    "create_schema",
]
