"""
Unit tests for OrderPlacementService

Validate-then-persist: accepted orders are stored as pending with the
caller's amounts, rejected orders never reach the order store.
"""
import pytest
from decimal import Decimal
from unittest.mock import Mock

from storefront.domain.errors import (
    OrderNotFound,
    ProductNotFound,
    StoreUnavailable,
    UnderageForProduct,
    UserNotFound,
)
from storefront.domain.order import OrderCreate, OrderLineItem, OrderStatus
from storefront.services.order_placement_service import OrderPlacementService


class TestPlaceOrder:
    """Test place_order"""

    def test_creates_pending_order_with_regular_product(self, placement_service, order_store, adult_user, bread):
        # Arrange
        candidate = OrderCreate(
            buyer_id=adult_user.id,
            line_items=[OrderLineItem(product_id=bread.id, quantity=2)],
            total_amount=Decimal("20"),
        )

        # Act
        order = placement_service.place_order(candidate)

        # Assert
        assert order.id is not None
        assert order.status == OrderStatus.PENDING
        assert order.total_amount == Decimal("20")
        assert order.discounted_amount == Decimal("0")
        assert order.line_items == candidate.line_items
        assert order.created_at is not None
        assert order.updated_at is not None
        assert order_store.find_by_id(order.id) == order

    def test_amounts_are_stored_unmodified(self, placement_service, adult_user, wine):
        candidate = OrderCreate(
            buyer_id=adult_user.id,
            line_items=[OrderLineItem(product_id=wine.id, quantity=1)],
            total_amount=Decimal("90"),
            discounted_amount=Decimal("10"),
        )

        order = placement_service.place_order(candidate)

        assert order.total_amount == Decimal("90")
        assert order.discounted_amount == Decimal("10")

    @pytest.mark.parametrize("buyer_id, product_id, error", [
        ("user-teen", "product-wine", UnderageForProduct),
        ("user-adult", "no-such-product", ProductNotFound),
        ("no-such-user", "product-bread", UserNotFound),
    ])
    def test_rejected_orders_are_not_persisted(self, placement_service, order_store, buyer_id, product_id, error):
        candidate = OrderCreate(
            buyer_id=buyer_id,
            line_items=[
                OrderLineItem(product_id="product-bread", quantity=1),
                OrderLineItem(product_id=product_id, quantity=1),
            ],
            total_amount=Decimal("0"),
        )

        with pytest.raises(error):
            placement_service.place_order(candidate)

        assert order_store.count() == 0

    def test_order_store_untouched_on_rejection(self, validator, teen_user, wine):
        order_store = Mock()
        service = OrderPlacementService(validator, order_store)
        candidate = OrderCreate(
            buyer_id=teen_user.id,
            line_items=[OrderLineItem(product_id=wine.id, quantity=1)],
            total_amount=Decimal("100"),
        )

        with pytest.raises(UnderageForProduct):
            service.place_order(candidate)

        order_store.create.assert_not_called()

    def test_order_store_receives_pending_order(self, validator, adult_user, bread):
        order_store = Mock()
        order_store.create.side_effect = lambda order: order.model_copy(update={"id": "order-1"})
        service = OrderPlacementService(validator, order_store)
        candidate = OrderCreate(
            buyer_id=adult_user.id,
            line_items=[OrderLineItem(product_id=bread.id, quantity=3)],
            total_amount=Decimal("30"),
        )

        order = service.place_order(candidate)

        order_store.create.assert_called_once()
        submitted = order_store.create.call_args.args[0]
        assert submitted.id is None
        assert submitted.status == OrderStatus.PENDING
        assert submitted.total_quantity == 3
        assert order.id == "order-1"

    def test_store_failure_on_persist_propagates(self, validator, adult_user, bread):
        order_store = Mock()
        order_store.create.side_effect = StoreUnavailable("orders", "connection reset")
        service = OrderPlacementService(validator, order_store)
        candidate = OrderCreate(
            buyer_id=adult_user.id,
            line_items=[OrderLineItem(product_id=bread.id, quantity=1)],
            total_amount=Decimal("10"),
        )

        with pytest.raises(StoreUnavailable):
            service.place_order(candidate)


class TestOrderQueries:
    """Test get_order and list_buyer_orders"""

    def test_get_order_returns_persisted_order(self, placement_service, sample_order_data):
        placed = placement_service.place_order(OrderCreate(**sample_order_data))

        assert placement_service.get_order(placed.id) == placed

    def test_get_order_raises_when_missing(self, placement_service):
        with pytest.raises(OrderNotFound) as exc_info:
            placement_service.get_order("missing")

        assert exc_info.value.order_id == "missing"

    def test_list_buyer_orders(self, placement_service, sample_order_data, teen_user, bread):
        placement_service.place_order(OrderCreate(**sample_order_data))
        placement_service.place_order(OrderCreate(**sample_order_data))
        placement_service.place_order(OrderCreate(
            buyer_id=teen_user.id,
            line_items=[OrderLineItem(product_id=bread.id, quantity=1)],
            total_amount=Decimal("10"),
        ))

        orders = placement_service.list_buyer_orders(sample_order_data["buyer_id"])

        assert len(orders) == 2
        assert all(o.buyer_id == sample_order_data["buyer_id"] for o in orders)
