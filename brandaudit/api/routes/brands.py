"""
Brand Routes — guideline catalog listing, lookup and upsert.
"""
from fastapi import APIRouter, Query, Request
from typing import Any, Dict
import logging

from brandaudit.api.routes.common import error_response
from brandaudit.core.limiter import limiter, BRANDS_LIMIT
from brandaudit.services.catalog import CatalogError

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/brands")
@limiter.limit(BRANDS_LIMIT)
async def list_brands(
    request: Request,
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    search: str = "",
):
    catalog = request.app.state.catalog
    guidelines = catalog.search(search) if search else catalog.list_paginated(limit, offset)
    return {"success": True, "data": [g.to_dict() for g in guidelines]}


@router.post("/brands", status_code=201)
@limiter.limit(BRANDS_LIMIT)
async def upsert_brand(request: Request, payload: Dict[str, Any]):
    """Create a guideline, or update the existing one with the same brand name."""
    if not (payload.get("brand_name") or payload.get("brandName")):
        return error_response(400, "Brand name is required")

    try:
        guideline = request.app.state.catalog.upsert(payload)
    except CatalogError as e:
        logger.error(f"Error saving brand guideline: {e}")
        return error_response(500, "Failed to save brand guideline")
    return {"success": True, "data": guideline.to_dict()}


@router.get("/brands/{brand_name}")
@limiter.limit(BRANDS_LIMIT)
async def get_brand(request: Request, brand_name: str):
    guideline = request.app.state.catalog.find_by_brand_name(brand_name)
    if not guideline:
        return error_response(404, f'Brand guideline "{brand_name}" not found')
    return {"success": True, "data": guideline.to_dict()}


@router.put("/brands/{brand_name}")
@limiter.limit(BRANDS_LIMIT)
async def update_brand(request: Request, brand_name: str, payload: Dict[str, Any]):
    catalog = request.app.state.catalog
    guideline = catalog.find_by_brand_name(brand_name)
    if not guideline:
        return error_response(404, f'Brand guideline "{brand_name}" not found')
    updated = catalog.update(guideline.id, payload)
    return {"success": True, "data": updated.to_dict()}


@router.delete("/brands/{brand_name}")
@limiter.limit(BRANDS_LIMIT)
async def delete_brand(request: Request, brand_name: str):
    catalog = request.app.state.catalog
    guideline = catalog.find_by_brand_name(brand_name)
    if not guideline or not catalog.delete(guideline.id):
        return error_response(404, f'Brand guideline "{brand_name}" not found')
    return {"success": True, "message": f'Brand guideline "{brand_name}" deleted'}
