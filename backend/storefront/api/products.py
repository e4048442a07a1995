"""
Products API Endpoints
Catalog management, including each product's age-restriction policy
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from storefront.api.dependencies import get_product_store, http_error
from storefront.domain.errors import ProductNotFound, StoreUnavailable
from storefront.domain.product import ProductCreate

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/", status_code=201)
def create_product(data: ProductCreate, store=Depends(get_product_store)):
    """
    Add a product to the catalog

    `age_required` uses the flag form {"required": bool, "age": int};
    required=false means anyone may buy it.
    """
    try:
        product = store.create(data)

        return {
            "status": "success",
            "data": product.to_dict()
        }

    except StoreUnavailable as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error creating product: {e}")
        raise HTTPException(status_code=500, detail=f"Error creating product: {str(e)}")


@router.get("/")
def get_products(
    limit: int = Query(100, ge=1, le=5000),
    offset: int = Query(0, ge=0),
    store=Depends(get_product_store),
):
    """List products ordered by name"""
    try:
        products, total = store.find_all(limit=limit, offset=offset)

        return {
            "status": "success",
            "total": total,
            "limit": limit,
            "offset": offset,
            "count": len(products),
            "data": [product.to_dict() for product in products]
        }

    except StoreUnavailable as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error fetching products: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching products: {str(e)}")


@router.get("/{product_id}")
def get_product(product_id: str, store=Depends(get_product_store)):
    """Get a single product"""
    try:
        product = store.find_by_id(product_id)
        if not product:
            raise ProductNotFound(product_id)

        return {
            "status": "success",
            "data": product.to_dict()
        }

    except (ProductNotFound, StoreUnavailable) as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error fetching product {product_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching product: {str(e)}")
