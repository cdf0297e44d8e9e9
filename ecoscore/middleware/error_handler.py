from fastapi import FastAPI, Request, status, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import logging

from ecoscore.utils.exceptions import (
    BatchShareNotFoundError,
    ComparisonNotFoundError,
    ProductNotFoundError,
    SourceUnavailableError,
)

logger = logging.getLogger(__name__)


def error_response(status_code: int, error: str, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": message, **extra},
    )


async def product_not_found_handler(request: Request, exc: ProductNotFoundError):
    return error_response(
        status.HTTP_404_NOT_FOUND,
        "product_not_found",
        f"Product {exc.barcode} not found",
        barcode=exc.barcode,
    )


async def source_unavailable_handler(request: Request, exc: SourceUnavailableError):
    # Pas de retry côté serveur : le client peut relancer sa requête
    return error_response(
        status.HTTP_502_BAD_GATEWAY,
        "source_unavailable",
        "The product database is unavailable, please retry later",
        operation=exc.operation,
    )


async def comparison_not_found_handler(request: Request, exc: ComparisonNotFoundError):
    return error_response(
        status.HTTP_404_NOT_FOUND,
        "comparison_not_found",
        f"Comparison {exc.comparison_id} not found or access denied",
    )


async def batch_share_not_found_handler(request: Request, exc: BatchShareNotFoundError):
    return error_response(
        status.HTTP_404_NOT_FOUND,
        "batch_share_not_found",
        "Shared batch not found or expired",
    )


async def global_exception_handler(request: Request, exc: Exception):
    """Dernier recours : erreurs de base de données et exceptions imprévues"""

    if isinstance(exc, IntegrityError):
        logger.error(f"Database integrity error on {request.url.path}: {exc.orig}")
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": "Database integrity error: resource already exists."},
        )

    if isinstance(exc, HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    if isinstance(exc, SQLAlchemyError):
        logger.critical(f"Database error on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "A database operation failed."},
        )

    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected error occurred on the server."},
    )


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(ProductNotFoundError, product_not_found_handler)
    app.add_exception_handler(SourceUnavailableError, source_unavailable_handler)
    app.add_exception_handler(ComparisonNotFoundError, comparison_not_found_handler)
    app.add_exception_handler(BatchShareNotFoundError, batch_share_not_found_handler)
    app.add_exception_handler(Exception, global_exception_handler)
