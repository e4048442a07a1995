"""
Users API Endpoints
Buyer registration and lookups
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from storefront.api.dependencies import get_user_store, http_error
from storefront.domain.errors import StoreUnavailable, UserNotFound
from storefront.domain.user import UserCreate

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/", status_code=201)
def create_user(data: UserCreate, store=Depends(get_user_store)):
    """Register a new user"""
    try:
        user = store.create(data)

        return {
            "status": "success",
            "data": user.to_dict()
        }

    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StoreUnavailable as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error creating user: {e}")
        raise HTTPException(status_code=500, detail=f"Error creating user: {str(e)}")


@router.get("/")
def get_users(
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    store=Depends(get_user_store),
):
    """List users"""
    try:
        users, total = store.find_all(limit=limit, offset=offset)

        return {
            "status": "success",
            "total": total,
            "limit": limit,
            "offset": offset,
            "count": len(users),
            "data": [user.to_dict() for user in users]
        }

    except StoreUnavailable as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error fetching users: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching users: {str(e)}")


@router.get("/{user_id}")
def get_user(user_id: str, store=Depends(get_user_store)):
    """Get a single user"""
    try:
        user = store.find_by_id(user_id)
        if not user:
            raise UserNotFound(user_id)

        return {
            "status": "success",
            "data": user.to_dict()
        }

    except (UserNotFound, StoreUnavailable) as e:
        raise http_error(e)
    except Exception as e:
        logger.error(f"Error fetching user {user_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching user: {str(e)}")
