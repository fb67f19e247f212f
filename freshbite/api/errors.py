# freshbite/api/errors.py
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from freshbite.utils.logging import get_logger

logger = get_logger(__name__)


def register_error_handlers(app: FastAPI):
    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        # szczegoly tylko w logu, klient dostaje ogolny komunikat
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"detail": "Server error"})
