"""
Order Placement Service
Validates candidate orders and persists the ones that pass

Two explicit phases: validate, then persist. The order store is only called
after validation fully succeeded, so a rejected order never leaves a trace.
"""
import logging
from typing import List

from storefront.domain.errors import OrderNotFound, OrderPlacementError
from storefront.domain.order import Order, OrderCreate
from storefront.repositories.base import OrderStore
from storefront.services.order_validator import OrderValidator

logger = logging.getLogger(__name__)


class OrderPlacementService:
    """
    Service for placing orders

    Handles:
    - Age-policy validation (via OrderValidator)
    - Persisting accepted orders with status pending
    - Order lookups
    """

    def __init__(self, validator: OrderValidator, order_store: OrderStore):
        self.validator = validator
        self.order_store = order_store

    def place_order(self, candidate: OrderCreate) -> Order:
        """
        Validate and persist a candidate order

        Args:
            candidate: Order as submitted by the caller

        Returns:
            The persisted Order (ID and timestamps assigned, status pending)

        Raises:
            OrderPlacementError subclasses from validation or the stores
        """
        try:
            validated = self.validator.validate(candidate)
        except OrderPlacementError as e:
            logger.info(f"Order for buyer {candidate.buyer_id} rejected: {e.code} ({e})")
            raise

        order = self.order_store.create(validated.to_order())

        logger.info(
            f"Order {order.id} placed for buyer {order.buyer_id}: "
            f"{order.item_count} items, total {order.total_amount}, discount {order.discounted_amount}"
        )
        return order

    def get_order(self, order_id: str) -> Order:
        """Fetch a persisted order or raise OrderNotFound"""
        order = self.order_store.find_by_id(order_id)
        if order is None:
            raise OrderNotFound(order_id)
        return order

    def list_buyer_orders(self, buyer_id: str, limit: int = 50, offset: int = 0) -> List[Order]:
        """Orders placed by a buyer, newest first"""
        return self.order_store.find_by_buyer(buyer_id, limit=limit, offset=offset)
