"""
Main Application Module

This module serves as the FastAPI application entry point, configuring
routes, middleware, error handlers and the development server.

Features:
- Router mounting
- CORS configuration
- Request logging
- Error handling
- Health endpoints

Dependencies:
- FastAPI for routing
- CORS middleware
- uvicorn for server
- Logging
- Database

Author: Annotation Tracker Team
"""

# First import database to ensure it's initialized first
from .shared.database import lifespan, ping_db

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from datetime import datetime, timezone
import logging

from .shared.config import CORS_ORIGINS, HOST, PORT, LOG_LEVEL
from .shared.errors import register_exception_handlers
from .features.entries.routes_entries import router as entries_router
from .features.reports.routes_reports import router as reports_router

# Set up logging
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

SERVICE_NAME = "annotation-tracker"

app = FastAPI(title="Annotation Tracker", lifespan=lifespan)

# CORS middleware setup
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

register_exception_handlers(app)

app.include_router(entries_router)
app.include_router(reports_router)

@app.get("/")
async def root():
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }

@app.get("/health")
async def health():
    """
    Liveness and database status.

    Returns:
        dict: Service status with database connectivity
    """
    database_ok = await ping_db()
    return {
        "status": "ok" if database_ok else "degraded",
        "service": SERVICE_NAME,
        "database": "connected" if database_ok else "unavailable",
        "timestamp": datetime.now(timezone.utc).isoformat()
    }

@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    """
    Log HTTP requests and responses.

    Args:
        request: HTTP request
        call_next: Next handler

    Returns:
        Response: HTTP response
    """
    logger.info(f"Incoming request: {request.method} {request.url}")
    try:
        response = await call_next(request)
        logger.info(f"Response status: {response.status_code}")
        return response
    except Exception as e:
        logger.exception(f"Request failed: {str(e)}")
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"}
        )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "annotation_tracker.main:app",
        host=HOST,
        port=PORT,
        reload=True,
        log_level=LOG_LEVEL.lower()
    )
