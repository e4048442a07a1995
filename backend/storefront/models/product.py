"""
Modelo de productos
"""
from sqlalchemy import Column, String, Boolean, Integer, DateTime, Text, DECIMAL, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from storefront.core.database import Base


class ProductRecord(Base):
    """
    Catálogo de productos con su política de edad (age_required, minimum_age)
    """
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("minimum_age >= 0", name="ck_products_minimum_age"),
        CheckConstraint("price >= 0", name="ck_products_price"),
        CheckConstraint("discount >= 0", name="ck_products_discount"),
    )

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text)

    # Precio
    price = Column(DECIMAL(12, 2), nullable=False, default=0)
    discount = Column(DECIMAL(12, 2), nullable=False, default=0)

    # Restricción de edad
    age_required = Column(Boolean, nullable=False, default=False)
    minimum_age = Column(Integer, nullable=False, default=0)

    # Metadata
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    order_items = relationship("OrderItemRecord", back_populates="product")
