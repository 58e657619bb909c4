"""
Database Module

This module manages the MongoDB connection and the entries collection
for the application.

Features:
- Connection management
- Collection access
- Database initialization
- Lifecycle management

Security:
- SSL/TLS (optional)
- Connection pooling

Dependencies:
- Motor for async MongoDB
- FastAPI for lifecycle
- certifi for SSL (via config)

Author: Annotation Tracker Team
"""

from motor.motor_asyncio import AsyncIOMotorClient
from fastapi import FastAPI
from contextlib import asynccontextmanager
import asyncio
import logging

from .config import (
    MONGODB_URL,
    MONGO_SETTINGS,
    DB_NAME,
    ENTRIES_COLLECTION,
    DB_INIT_RETRIES,
    DB_INIT_RETRY_DELAY
)

logger = logging.getLogger(__name__)

# Create client
async_client = AsyncIOMotorClient(MONGODB_URL, **MONGO_SETTINGS)

# Database references
db = async_client[DB_NAME]
entries_collection = db[ENTRIES_COLLECTION]

async def init_db(retry_count: int = DB_INIT_RETRIES, retry_delay: int = DB_INIT_RETRY_DELAY) -> bool:
    """
    Initialize database connection.

    Args:
        retry_count: Number of ping attempts
        retry_delay: Seconds between attempts

    Returns:
        bool: Connection status
    """
    for attempt in range(retry_count):
        try:
            logger.info(f"Database initialization attempt {attempt + 1}/{retry_count}...")
            await async_client.admin.command('ping')
            logger.info("MongoDB ping successful")
            return True
        except Exception as e:
            logger.warning(f"Database connection attempt {attempt + 1} failed: {e}")
            if attempt < retry_count - 1:
                logger.info(f"Retrying in {retry_delay} seconds...")
                await asyncio.sleep(retry_delay)
    logger.error("All connection attempts failed")
    return False

async def ping_db() -> bool:
    """Single ping used by the health endpoint."""
    try:
        await async_client.admin.command('ping')
        return True
    except Exception as e:
        logger.error(f"Database ping failed: {e}")
        return False

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage database lifecycle.

    Args:
        app: FastAPI application

    Yields:
        None
    """
    logger.info("Starting database initialization...")
    success = await init_db()
    if not success:
        raise RuntimeError("Failed to initialize database")
    logger.info("Database initialization complete")

    yield

    logger.info("Shutting down database connections...")
    async_client.close()
    logger.info("Database connections closed")

__all__ = [
    'async_client',
    'db',
    'entries_collection',
    'init_db',
    'ping_db',
    'lifespan'
]
