from fastapi import Request
from fastapi.responses import JSONResponse
import logging

logger = logging.getLogger(__name__)

async def general_exception_handler(request: Request, exc: Exception):
    """Handle anything that escaped a router"""
    logger.error(f"Unexpected error: {exc!r} - Path: {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "type": "InternalError"}
    )
