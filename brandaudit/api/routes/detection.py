"""
Detection Routes — brand auto-detection and manual-selection suggestions.
"""
from fastapi import APIRouter, Request
from pydantic import BaseModel
from typing import Optional
import logging

from brandaudit.api.routes.common import error_response, is_valid_url
from brandaudit.core.limiter import limiter, DETECT_LIMIT, SUGGEST_LIMIT
from brandaudit.services.brand_detection import BrandDetectionService

logger = logging.getLogger(__name__)
router = APIRouter()

class DetectBrandRequest(BaseModel):
    url: Optional[str] = None
    company_name: Optional[str] = None


@router.post("/detect-brand")
@limiter.limit(DETECT_LIMIT)
async def detect_brand(request: Request, payload: DetectBrandRequest):
    """Detect which brand guideline applies to a URL (plus optional company hint)."""
    if not payload.url:
        return error_response(400, "URL is required")
    if not is_valid_url(payload.url):
        return error_response(400, "Invalid URL format")

    service = BrandDetectionService(request.app.state.catalog)
    result = service.detect_brand(payload.url, payload.company_name or "")
    return result.to_dict()


@router.get("/detect-brand/suggestions")
@limiter.limit(SUGGEST_LIMIT)
async def brand_suggestions(request: Request, q: str = ""):
    """Fuzzy brand-name search for the manual selection fallback."""
    if not q:
        return error_response(400, 'Query parameter "q" is required')

    service = BrandDetectionService(request.app.state.catalog)
    return {"success": True, "data": service.get_brand_suggestions(q)}
