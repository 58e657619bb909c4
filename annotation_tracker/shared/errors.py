"""
Error Handling Module

Exception handlers that shape validation, not-found and HTTP errors into
the JSON payloads the dashboard expects.

Features:
- 400 for invalid request fields
- 404 with attempted method/path
- Pass-through for other HTTP errors

Dependencies:
- FastAPI exception handling
- Starlette HTTP exceptions

Author: Annotation Tracker Team
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import List
import logging

logger = logging.getLogger(__name__)

def offending_fields(errors: List[dict]) -> List[str]:
    """
    Collapse pydantic error locations into unique field names.

    ("body", "userName") becomes "userName"; a missing body stays "body".
    Malformed JSON reports a character offset, ("body", 13), which also
    maps to "body".
    """
    fields = []
    for error in errors:
        loc = list(error.get("loc", ()))
        if len(loc) > 1 and isinstance(loc[1], str):
            name = loc[1]
        elif loc and loc[0] != "body":
            name = str(loc[0])
        else:
            name = "body"
        if name not in fields:
            fields.append(name)
    return fields

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    fields = offending_fields(exc.errors())
    logger.warning(f"Validation failed for {request.method} {request.url.path}: {fields}")
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "Missing or invalid fields",
            "fields": fields
        }
    )

async def not_found_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code != 404:
        return await http_exception_handler(request, exc)
    return JSONResponse(
        status_code=404,
        content={
            "error": "Route not found",
            "method": request.method,
            "path": request.url.path
        }
    )

def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, not_found_exception_handler)
