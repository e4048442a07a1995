"""
Modelos relacionados con órdenes/pedidos
"""
from sqlalchemy import Column, Integer, String, DateTime, DECIMAL, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from storefront.core.database import Base


class OrderRecord(Base):
    """
    Tabla principal de órdenes
    """
    __tablename__ = "orders"
    __table_args__ = (
        CheckConstraint("total_amount >= 0", name="ck_orders_total_amount"),
        CheckConstraint("discounted_amount >= 0", name="ck_orders_discounted_amount"),
        CheckConstraint(
            "status IN ('pending', 'confirmed', 'shipped', 'delivered', 'cancelled')",
            name="ck_orders_status",
        ),
    )

    id = Column(String(36), primary_key=True)
    buyer_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    # Montos (provistos por el cliente, no se recalculan)
    total_amount = Column(DECIMAL(12, 2), nullable=False)
    discounted_amount = Column(DECIMAL(12, 2), nullable=False, default=0)

    # Estado
    status = Column(String(20), nullable=False, default="pending", index=True)

    # Metadata
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    buyer = relationship("UserRecord", back_populates="orders")
    items = relationship(
        "OrderItemRecord",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemRecord.position",
    )


class OrderItemRecord(Base):
    """
    Items/productos de cada orden, en el orden en que fueron enviados
    """
    __tablename__ = "order_items"
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_order_items_quantity"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), index=True, nullable=False)
    product_id = Column(String(36), ForeignKey("products.id"), index=True, nullable=False)
    position = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False)

    # Relationships
    order = relationship("OrderRecord", back_populates="items")
    product = relationship("ProductRecord", back_populates="order_items")
