"""
Order Validator
Checks a candidate order against the buyer's age and each product's age policy

Runs once per order, before anything is persisted:
- Schema stage: every line item needs quantity >= 1
- Buyer must exist
- Every referenced product must exist
- Restricted products require buyer age >= minimum age

Fails fast: the first failing line item (in submission order) is reported and
later items are never looked up.
"""
import logging
from datetime import date
from typing import Any, Callable, List, Mapping, Optional

from pydantic import ValidationError

from storefront.domain.errors import (
    InvalidQuantity,
    ProductNotFound,
    StoreUnavailable,
    UnderageForProduct,
    UserNotFound,
)
from storefront.domain.order import OrderCreate, ValidatedOrder
from storefront.domain.product import Product
from storefront.repositories.base import ProductStore, UserStore

logger = logging.getLogger(__name__)


def parse_candidate_order(payload: Mapping[str, Any]) -> OrderCreate:
    """
    Build an OrderCreate from a raw payload

    A quantity below 1 is reported as InvalidQuantity for the first offending
    line item; any other schema problem raises pydantic's ValidationError.
    """
    try:
        return OrderCreate.model_validate(payload)
    except ValidationError as e:
        for error in e.errors():
            loc = error.get('loc', ())
            if len(loc) == 3 and loc[0] == 'line_items' and loc[2] == 'quantity' and error.get('type') == 'greater_than_equal':
                index = loc[1]
                item = payload['line_items'][index]
                product_id = item.get('product_id') if isinstance(item, Mapping) else None
                raise InvalidQuantity(index, product_id, error.get('input')) from e
        raise


class OrderValidator:
    """
    Validates candidate orders against the user and product stores

    The validator keeps no state between calls: validating the same candidate
    against unchanged stores always gives the same outcome.
    """

    def __init__(
        self,
        user_store: UserStore,
        product_store: ProductStore,
        today: Callable[[], date] = date.today,
    ):
        self.user_store = user_store
        self.product_store = product_store
        self.today = today

    def validate(self, candidate: OrderCreate) -> ValidatedOrder:
        """
        Validate a candidate order

        Args:
            candidate: Order as submitted by the caller

        Returns:
            ValidatedOrder with the resolved buyer, buyer age and products

        Raises:
            InvalidQuantity: a line item has quantity < 1
            UserNotFound: buyer ID does not resolve
            ProductNotFound: a line item's product ID does not resolve
            UnderageForProduct: buyer is younger than a restricted product allows
            StoreUnavailable: a store lookup failed or timed out
        """
        self._check_quantities(candidate)

        buyer = self._lookup(self.user_store, "users", candidate.buyer_id)
        if buyer is None:
            raise UserNotFound(candidate.buyer_id)

        buyer_age = buyer.age_on(self.today())

        products: List[Product] = []
        for index, item in enumerate(candidate.line_items):
            product = self._lookup(self.product_store, "products", item.product_id)
            if product is None:
                raise ProductNotFound(item.product_id, line_index=index)

            if not product.age_policy.permits(buyer_age):
                raise UnderageForProduct(
                    product.id,
                    buyer_age=buyer_age,
                    minimum_age=product.age_policy.minimum_age,
                    line_index=index,
                )

            products.append(product)

        logger.debug(
            f"Order for buyer {buyer.id} validated: {len(products)} line items, buyer age {buyer_age}"
        )

        return ValidatedOrder(
            candidate=candidate,
            buyer=buyer,
            buyer_age=buyer_age,
            products=products,
        )

    @staticmethod
    def _check_quantities(candidate: OrderCreate) -> None:
        for index, item in enumerate(candidate.line_items):
            if item.quantity < 1:
                raise InvalidQuantity(index, item.product_id, item.quantity)

    @staticmethod
    def _lookup(store, store_name: str, key: str) -> Optional[Any]:
        """Look `key` up, reporting timeouts and dropped connections as StoreUnavailable"""
        try:
            return store.find_by_id(key)
        except StoreUnavailable:
            raise
        except (TimeoutError, ConnectionError) as e:
            logger.warning(f"{store_name} lookup for {key} failed: {e}")
            raise StoreUnavailable(store_name, str(e) or type(e).__name__) from e
