"""
Orders API Endpoints
Order placement (validated against buyer age and product policies) and queries
"""
import logging

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from typing import Any, Dict
from pydantic import ValidationError

from storefront.api.dependencies import get_order_placement_service, http_error
from storefront.domain.errors import OrderPlacementError
from storefront.services.order_placement_service import OrderPlacementService
from storefront.services.order_validator import parse_candidate_order

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/", status_code=201)
def place_order(
    payload: Dict[str, Any] = Body(..., description="buyer_id, line_items, total_amount, discounted_amount"),
    service: OrderPlacementService = Depends(get_order_placement_service),
):
    """
    Place an order

    The order is stored with status pending only if the buyer exists, every
    product exists and the buyer is old enough for every restricted product.
    """
    try:
        candidate = parse_candidate_order(payload)
        order = service.place_order(candidate)

        return {
            "status": "success",
            "data": order.to_dict()
        }

    except OrderPlacementError as e:
        raise http_error(e)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))
    except Exception as e:
        logger.error(f"Error placing order: {e}")
        raise HTTPException(status_code=500, detail=f"Error placing order: {str(e)}")


@router.get("/")
def get_orders(
    buyer_id: str = Query(..., description="Buyer user ID"),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    service: OrderPlacementService = Depends(get_order_placement_service),
):
    """List a buyer's orders, newest first"""
    try:
        orders = service.list_buyer_orders(buyer_id, limit=limit, offset=offset)

        return {
            "status": "success",
            "limit": limit,
            "offset": offset,
            "count": len(orders),
            "data": [order.to_dict() for order in orders]
        }

    except OrderPlacementError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error fetching orders for buyer {buyer_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching orders: {str(e)}")


@router.get("/{order_id}")
def get_order(
    order_id: str,
    service: OrderPlacementService = Depends(get_order_placement_service),
):
    """Get a single order with its line items"""
    try:
        order = service.get_order(order_id)

        return {
            "status": "success",
            "data": order.to_dict()
        }

    except OrderPlacementError as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error fetching order {order_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching order: {str(e)}")
