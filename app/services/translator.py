from typing import Any, Dict, List, Union

from fastapi.responses import JSONResponse

from app.core.errors import (
    DatabaseError,
    DuplicateKeyError,
    NotFoundError,
    PoolExhaustedError,
    QueryTimeoutError,
    UpstreamFetchError,
)
from app.core.logging import get_logger

logger = get_logger(__name__)

OPERATION_MESSAGES = {
    "list": "Error loading data from {entity} table.",
    "get": "Error loading data from {entity} table.",
    "create": "Error inserting data into {entity} table.",
    "update": "Error updating data in {entity} table.",
    "delete": "Error deleting data from {entity} table.",
    "add_to_cart": "Error adding product to cart.",
    "image": "Error loading image.",
}

DUPLICATE_DATA = "duplicate data"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def not_found(entity: str) -> JSONResponse:
    return error_response(404, f"{entity} not found")


def single_row(rows: List[Dict[str, Any]], entity: str) -> Union[Dict[str, Any], JSONResponse]:
    """First row of a result that must hold exactly one, or a 404."""
    if not rows:
        return not_found(entity)
    return rows[0]


def translate_error(error: Exception, entity: str, operation: str) -> JSONResponse:
    """Map a failure raised below the handler boundary to a client response.

    The driver message is only ever logged.
    """
    if isinstance(error, NotFoundError):
        return not_found(error.entity)
    if isinstance(error, DuplicateKeyError):
        logger.warning(f"Duplicate data on {operation} {entity}: {error}")
        return error_response(409, DUPLICATE_DATA)
    if isinstance(error, QueryTimeoutError):
        logger.error(f"Timed out during {operation} {entity}: {error}")
        return error_response(504, "database timeout")
    if isinstance(error, PoolExhaustedError):
        logger.error(f"No database connection available for {operation} {entity}: {error}")
        return error_response(503, "database unavailable")
    if isinstance(error, (DatabaseError, UpstreamFetchError)):
        logger.error(f"Failed {operation} {entity}: {error}", exc_info=error)
        return error_response(500, OPERATION_MESSAGES[operation].format(entity=entity))
    raise error
