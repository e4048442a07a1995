"""
Order Domain Models

Represents order-related entities: candidate orders as submitted by callers,
validated orders ready for persistence, and persisted orders.
"""
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from storefront.domain.product import Product
from storefront.domain.user import User


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class OrderLineItem(BaseModel):
    """
    One (product, quantity) pair within an order.

    Line items have no identity of their own; the order owns them.
    """

    product_id: str = Field(..., description="Product ID")
    quantity: int = Field(..., description="Quantity ordered", ge=1)

    model_config = ConfigDict(from_attributes=True)


class OrderCreate(BaseModel):
    """
    Candidate order as submitted by a caller.

    Amounts are caller-supplied and stored as given; nothing here recomputes them.
    """

    buyer_id: str = Field(..., description="Buyer user ID")
    line_items: List[OrderLineItem] = Field(default_factory=list, description="Line items")
    total_amount: Decimal = Field(..., description="Total order amount", ge=0, max_digits=12, decimal_places=2)
    discounted_amount: Decimal = Field(Decimal("0"), description="Discount applied", ge=0, max_digits=12, decimal_places=2)


class Order(BaseModel):
    """
    Order domain model - a persisted (or about to be persisted) order

    Fields:
        id: Order ID, assigned by the order store
        buyer_id: Reference to the purchasing user
        line_items: Ordered sequence of line items (duplicates allowed)
        total_amount: Caller-supplied total
        discounted_amount: Caller-supplied discount
        status: Order status (pending on creation)
        created_at: When order was persisted
        updated_at: When order was last updated
    """

    id: Optional[str] = Field(None, description="Order ID")
    buyer_id: str = Field(..., description="Buyer user ID")
    line_items: List[OrderLineItem] = Field(default_factory=list, description="Line items")
    total_amount: Decimal = Field(..., description="Total order amount", ge=0, max_digits=12, decimal_places=2)
    discounted_amount: Decimal = Field(Decimal("0"), description="Discount applied", ge=0, max_digits=12, decimal_places=2)
    status: OrderStatus = Field(OrderStatus.PENDING, description="Order status")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)

    @property
    def item_count(self) -> int:
        """Number of line items in the order"""
        return len(self.line_items)

    @property
    def total_quantity(self) -> int:
        """Total quantity across all line items"""
        return sum(item.quantity for item in self.line_items)

    def to_dict(self) -> dict:
        """
        Convert to dictionary with computed fields

        Decimals become floats and datetimes ISO strings for JSON responses.
        """
        data = self.model_dump(mode="json", exclude={"total_amount", "discounted_amount"})
        data["total_amount"] = float(self.total_amount)
        data["discounted_amount"] = float(self.discounted_amount)
        data["item_count"] = self.item_count
        data["total_quantity"] = self.total_quantity
        return data


class ValidatedOrder(BaseModel):
    """
    A candidate order that passed validation, with what was resolved for it.

    `products` follows line-item order, one entry per line item.
    """

    candidate: OrderCreate
    buyer: User
    buyer_age: int
    products: List[Product]

    def to_order(self) -> Order:
        """Build the pending order to hand to the order store"""
        return Order(
            buyer_id=self.candidate.buyer_id,
            line_items=[item.model_copy() for item in self.candidate.line_items],
            total_amount=self.candidate.total_amount,
            discounted_amount=self.candidate.discounted_amount,
            status=OrderStatus.PENDING,
        )
