"""
Conexión a base de datos PostgreSQL

Este módulo centraliza las formas de acceso a la base de datos:
- SQLAlchemy (declaración del esquema y creación de tablas)
- psycopg2 directo (para queries SQL raw de los repositorios)

Lookups run with a statement timeout so a stalled database surfaces as an
error instead of hanging the request.
"""
import time
import logging
from functools import lru_cache

import psycopg2
from psycopg2.extras import RealDictCursor
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from .config import settings

logger = logging.getLogger(__name__)


# ============================================================================
# SQLAlchemy Configuration (schema declaration)
# ============================================================================

# Base para modelos
Base = declarative_base()


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """
    Lazily build the SQLAlchemy engine from settings.DATABASE_URL

    Raises:
        Exception if DATABASE_URL is not configured
    """
    if not settings.DATABASE_URL:
        raise Exception("DATABASE_URL not configured")

    return create_engine(
        settings.DATABASE_URL,
        pool_pre_ping=True,  # Verificar conexión antes de usar
        pool_size=5,
        max_overflow=10,
    )


# ============================================================================
# psycopg2 Direct Connections (raw SQL for repositories)
# ============================================================================

def _connect_kwargs() -> dict:
    return {
        "connect_timeout": settings.DB_CONNECT_TIMEOUT,
        "options": f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}",
    }


def get_db_connection_with_retry(max_retries=None, retry_delay=None, cursor_factory=None):
    """
    Get a psycopg2 connection with automatic retry on connection failures

    - Retries failed connections up to max_retries times
    - Exponential backoff between retries
    - Logs connection attempts for debugging

    Args:
        max_retries: Maximum number of connection attempts (default: settings.DB_MAX_RETRIES)
        retry_delay: Initial delay between retries in seconds (default: settings.DB_RETRY_DELAY)
        cursor_factory: Optional psycopg2 cursor factory

    Returns:
        psycopg2 connection object

    Raises:
        psycopg2.OperationalError: If all retry attempts fail
    """
    database_url = settings.DATABASE_URL
    if not database_url:
        raise Exception("DATABASE_URL not configured")

    max_retries = max_retries or settings.DB_MAX_RETRIES
    retry_delay = settings.DB_RETRY_DELAY if retry_delay is None else retry_delay

    last_error = None

    for attempt in range(1, max_retries + 1):
        try:
            logger.debug(f"Database connection attempt {attempt}/{max_retries}")
            conn = psycopg2.connect(database_url, cursor_factory=cursor_factory, **_connect_kwargs())

            # Test connection with a simple query
            cursor = conn.cursor()
            cursor.execute("SELECT 1")
            cursor.close()

            logger.debug(f"Database connection successful on attempt {attempt}")
            return conn

        except psycopg2.OperationalError as e:
            last_error = e
            logger.warning(f"Connection error on attempt {attempt}/{max_retries}: {e}")

            if attempt < max_retries:
                delay = retry_delay * (2 ** (attempt - 1))
                logger.info(f"Retrying in {delay:.2f} seconds...")
                time.sleep(delay)
            else:
                logger.error(f"All {max_retries} connection attempts failed")
                raise

    raise last_error if last_error else Exception("Connection failed after all retries")


def get_db_connection_dict_with_retry(max_retries=None, retry_delay=None):
    """
    Get a psycopg2 connection with RealDictCursor and automatic retry

    Same as get_db_connection_with_retry but cursors return dicts instead of tuples.

    Example:
        conn = get_db_connection_dict_with_retry()
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM orders")
        results = cursor.fetchall()  # Returns list of dicts
        cursor.close()
        conn.close()
    """
    return get_db_connection_with_retry(
        max_retries=max_retries,
        retry_delay=retry_delay,
        cursor_factory=RealDictCursor,
    )
