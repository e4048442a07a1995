"""
Storefront - Backend API
Order placement with age-gated product validation
"""
import logging
import time
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)

from storefront.core.config import settings
from storefront.core.database import get_db_connection_with_retry
from storefront.api import orders, products, users

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Crear aplicación FastAPI
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(users.router, prefix="/api/v1/users", tags=["Users"])
app.include_router(products.router, prefix="/api/v1/products", tags=["Products"])
app.include_router(orders.router, prefix="/api/v1/orders", tags=["Orders"])


@app.get("/")
async def root():
    """Endpoint raíz - Verificación de estado de la API"""
    return {
        "message": settings.API_TITLE,
        "status": "online",
        "version": settings.API_VERSION,
        "store_backend": settings.STORE_BACKEND,
    }


@app.get("/health")
def health():
    """Health check endpoint - tests database connectivity when backed by PostgreSQL"""
    if settings.STORE_BACKEND == "memory":
        return {
            "status": "healthy",
            "version": settings.API_VERSION,
            "database": {"status": "not_used"},
        }

    start_time = time.time()
    db_error = None

    try:
        conn = get_db_connection_with_retry(max_retries=1, retry_delay=0)
        conn.close()
        db_status = "connected"
    except Exception as e:
        logger.warning(f"Health check could not reach the database: {e}")
        db_status = "disconnected"
        db_error = str(e)

    return {
        "status": "healthy" if db_status == "connected" else "degraded",
        "version": settings.API_VERSION,
        "database": {
            "status": db_status,
            "error": db_error,
            "latency_ms": round((time.time() - start_time) * 1000, 2),
        },
    }
