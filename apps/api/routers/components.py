import logging
from fastapi import APIRouter, Depends, Query, Request
from typing import Optional, List, Dict, Any

from apps.api.errors import ApiError
from packages.catalog.schemas import (
    InvalidFilterValue, build_component_query, validate_document, validate_patch,
)
from packages.storage.db import ComponentStore

logger = logging.getLogger(__name__)

router = APIRouter()

def get_store(request: Request) -> ComponentStore:
    return request.app.state.store

@router.get("")
def list_components(store: ComponentStore = Depends(get_store)) -> List[Dict[str, Any]]:
    """Fetch all components"""
    try:
        return store.find_all()
    except Exception as e:
        logger.error(f"Fetching components failed: {e}")
        raise ApiError(500, "Error fetching components", e)

@router.get("/search")
def search_components(component_type: Optional[str] = Query(None, alias="type"),
                      socket: Optional[str] = None,
                      memory_type: Optional[str] = Query(None, alias="memoryType"),
                      wattage: Optional[str] = None,
                      store: ComponentStore = Depends(get_store)) -> List[Dict[str, Any]]:
    """Search components for compatibility filtering (all filters ANDed)"""
    try:
        query = build_component_query(component_type, socket, memory_type, wattage)
    except InvalidFilterValue as e:
        raise ApiError(400, f"Invalid {e.name} value")

    try:
        return store.find_all(query)
    except Exception as e:
        logger.error(f"Component search failed for {query}: {e}")
        raise ApiError(500, "Error searching components", e)

@router.post("", status_code=201)
def add_component(body: Dict[str, Any], store: ComponentStore = Depends(get_store)):
    """Add a new component"""
    try:
        return store.insert(validate_document(body))
    except Exception as e:
        logger.error(f"Adding component failed: {e}")
        raise ApiError(500, "Error adding component", e)

@router.api_route("/{component_id}", methods=["PATCH", "PUT"])
def update_component(component_id: str, body: Dict[str, Any],
                     store: ComponentStore = Depends(get_store)):
    """Merge the body's fields into a stored component"""
    if not store.is_valid_id(component_id):
        raise ApiError(400, "Invalid ObjectId format")

    try:
        updated = store.find_by_id_and_update(component_id, validate_patch(body))
    except Exception as e:
        logger.error(f"Updating component {component_id} failed: {e}")
        raise ApiError(500, "Error updating component", e)

    if updated is None:
        raise ApiError(404, "Component not found")
    return updated

@router.delete("/{component_id}")
def delete_component(component_id: str, store: ComponentStore = Depends(get_store)):
    # no id format check here; an id the store can't parse simply matches nothing
    try:
        deleted = store.find_by_id_and_delete(component_id)
    except Exception as e:
        logger.error(f"Deleting component {component_id} failed: {e}")
        raise ApiError(500, "Error deleting component", e)

    if deleted is None:
        raise ApiError(404, "Component not found")
    return {"message": "Component deleted successfully"}
