"""
Order placement errors

Raised by the validator and the placement service when an order cannot be
accepted. The API layer catches these and translates them into HTTP responses.
"""
from typing import Any, Dict, Optional


class OrderPlacementError(Exception):
    """Base class for every failure while placing an order"""

    code = "order_placement_error"
    message = "Order could not be placed"

    def __init__(self, message: Optional[str] = None, **context: Any):
        self.context = context
        super().__init__(message or self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "detail": str(self), **self.context}


class OrderValidationError(OrderPlacementError):
    """The candidate order broke a validation rule; nothing was persisted"""

    code = "order_validation_error"


class UserNotFound(OrderValidationError):
    code = "user_not_found"
    message = "User not found"

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(user_id=user_id)


class ProductNotFound(OrderValidationError):
    code = "product_not_found"
    message = "Product not found"

    def __init__(self, product_id: str, line_index: Optional[int] = None):
        self.product_id = product_id
        self.line_index = line_index
        super().__init__(product_id=product_id, line_index=line_index)


class UnderageForProduct(OrderValidationError):
    """Buyer is younger than the product's minimum age"""

    code = "underage_for_product"
    message = "User is underage for this product"

    def __init__(self, product_id: str, buyer_age: int, minimum_age: int, line_index: Optional[int] = None):
        self.product_id = product_id
        self.buyer_age = buyer_age
        self.minimum_age = minimum_age
        self.line_index = line_index
        super().__init__(
            product_id=product_id,
            buyer_age=buyer_age,
            minimum_age=minimum_age,
            line_index=line_index,
        )


class InvalidQuantity(OrderValidationError):
    code = "invalid_quantity"

    def __init__(self, line_index: int, product_id: Optional[str], quantity: Any):
        self.line_index = line_index
        self.product_id = product_id
        self.quantity = quantity
        super().__init__(
            f"Quantity must be at least 1 (line {line_index}, got {quantity!r})",
            line_index=line_index,
            product_id=product_id,
            quantity=quantity,
        )


class StoreUnavailable(OrderPlacementError):
    """A backing store could not answer (connection failure, timeout)"""

    code = "store_unavailable"

    def __init__(self, store: str, reason: str = ""):
        self.store = store
        self.reason = reason
        super().__init__(f"{store} store unavailable: {reason}" if reason else f"{store} store unavailable", store=store)


class OrderNotFound(OrderPlacementError):
    code = "order_not_found"
    message = "Order not found"

    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(order_id=order_id)
