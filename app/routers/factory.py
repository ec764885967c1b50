"""Generic route handlers built from an EntityDescriptor.

Each ``make_*_handler`` returns a FastAPI endpoint performing exactly one
CRUD shape against the descriptor's table; ``build_entity_router`` wires the
full set for one entity.
"""
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Path

from app.core.errors import DatabaseError
from app.core.logging import get_logger
from app.db.gateway import MAX_BIGINT, Gateway
from app.db.session import get_gateway
from app.models.entity import EntityDescriptor
from app.services.translator import single_row, translate_error

logger = get_logger(__name__)


def make_list_all_handler(entity: EntityDescriptor):
    def list_all(gateway: Gateway = Depends(get_gateway)):
        try:
            return gateway.fetch_all(entity.name)
        except DatabaseError as e:
            return translate_error(e, entity.name, "list")
    return list_all


def make_get_handler(entity: EntityDescriptor):
    def get_one(entity_id: str, gateway: Gateway = Depends(get_gateway)):
        try:
            rows = gateway.fetch_by_id(entity, entity_id)
        except DatabaseError as e:
            return translate_error(e, entity.name, "get")
        return single_row(rows, entity.name)
    return get_one


def make_list_bounded_handler(entity: EntityDescriptor):
    def list_bounded(
        quant: int = Path(..., ge=0, le=MAX_BIGINT),
        gateway: Gateway = Depends(get_gateway),
    ):
        try:
            return gateway.fetch_all(entity.name, limit=quant)
        except DatabaseError as e:
            return translate_error(e, entity.name, "list")
    return list_bounded


def make_list_filtered_handler(entity: EntityDescriptor, column: str):
    """List rows whose ``column`` equals the last path segment."""
    def list_filtered(value: str, gateway: Gateway = Depends(get_gateway)):
        try:
            return gateway.fetch_all(entity.name, filters={column: value})
        except DatabaseError as e:
            return translate_error(e, entity.name, "list")
    return list_filtered


def make_create_handler(entity: EntityDescriptor):
    def create(
        values: Dict[str, Any] = Body(...),
        gateway: Gateway = Depends(get_gateway),
    ):
        try:
            rows = gateway.create(entity, values)
        except DatabaseError as e:
            return translate_error(e, entity.name, "create")
        return single_row(rows, entity.name)
    return create


def make_update_handler(entity: EntityDescriptor):
    def update(
        entity_id: str,
        values: Dict[str, Any] = Body(...),
        gateway: Gateway = Depends(get_gateway),
    ):
        try:
            rows = gateway.update(entity, entity_id, values)
        except DatabaseError as e:
            return translate_error(e, entity.name, "update")
        if rows:
            logger.info(f"Updated {entity.name} {entity_id}")
        return single_row(rows, entity.name)
    return update


def make_delete_handler(entity: EntityDescriptor):
    def delete(entity_id: str, gateway: Gateway = Depends(get_gateway)):
        try:
            deleted = gateway.delete(entity, entity_id)
        except DatabaseError as e:
            return translate_error(e, entity.name, "delete")
        logger.info(f"Deleted {deleted} {entity.name} row(s) for id {entity_id}")
        # Deleting a missing id is still a success
        return {"success": f"{entity.name} deleted"}
    return delete


def build_entity_router(entity: EntityDescriptor) -> APIRouter:
    router = APIRouter()
    route = entity.route
    router.add_api_route("", make_list_all_handler(entity), methods=["GET"], name=f"list_{route}")
    router.add_api_route(
        "/quantity/{quant}", make_list_bounded_handler(entity), methods=["GET"], name=f"list_{route}_bounded"
    )
    router.add_api_route("/{entity_id}", make_get_handler(entity), methods=["GET"], name=f"get_{route}")
    router.add_api_route("", make_create_handler(entity), methods=["POST"], name=f"create_{route}")
    router.add_api_route("/{entity_id}", make_update_handler(entity), methods=["PUT"], name=f"update_{route}")
    router.add_api_route("/{entity_id}", make_delete_handler(entity), methods=["DELETE"], name=f"delete_{route}")
    return router
