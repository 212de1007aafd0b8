"""
Analysis Routes — run a compliance audit on a scraped observation, fetch stored results.
"""
from fastapi import APIRouter, Query, Request
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional
import logging

from brandaudit.api.routes.common import error_response, is_valid_url
from brandaudit.core.limiter import limiter, ANALYZE_LIMIT
from brandaudit.services.audit import AuditService, BrandNotFoundError
from brandaudit.services.compliance import GuidelineParseError
from brandaudit.services.models import WebsiteObservation

logger = logging.getLogger(__name__)
router = APIRouter()

class ElementModel(BaseModel):
    type: str = "element"
    text: str = ""
    styles: Dict[str, Any] = Field(default_factory=dict)

class ImageModel(BaseModel):
    model_config = ConfigDict(extra="allow")
    src: str = ""
    alt: str = ""

class ObservationModel(BaseModel):
    elements: List[ElementModel] = Field(default_factory=list)
    colors: List[str] = Field(default_factory=list)
    images: List[ImageModel] = Field(default_factory=list)

class AnalyzeComplianceRequest(BaseModel):
    url: Optional[str] = None
    brand_name: Optional[str] = None
    company_name: Optional[str] = None
    observation: ObservationModel = Field(default_factory=ObservationModel)


@router.post("/analyze-compliance")
@limiter.limit(ANALYZE_LIMIT)
async def analyze_compliance(request: Request, payload: AnalyzeComplianceRequest):
    """
    Audit a scraped page against a brand guideline.
    Without brand_name the brand is auto-detected from the URL / company hint.
    """
    if not payload.url:
        return error_response(400, "URL is required")
    if not is_valid_url(payload.url):
        return error_response(400, "Invalid URL format")

    observation = WebsiteObservation.from_dict({"url": payload.url, **payload.observation.model_dump()})
    service = AuditService(request.app.state.catalog, request.app.state.analysis_store)

    try:
        result = await run_in_threadpool(
            service.audit_website,
            payload.url,
            observation,
            payload.brand_name,
            payload.company_name or "",
        )
    except BrandNotFoundError as e:
        logger.warning(f"Audit aborted: {e}")
        return error_response(404, str(e))
    except GuidelineParseError as e:
        logger.error(f"Stored guideline is malformed: {e}")
        return error_response(422, str(e))

    return {"success": True, "data": result.to_dict()}


@router.get("/analyses/{analysis_id}")
async def get_analysis(request: Request, analysis_id: str):
    record = request.app.state.analysis_store.get(analysis_id)
    if not record:
        return error_response(404, "Analysis not found")
    return {"success": True, "data": record.to_dict()}


@router.get("/analyses")
async def list_analyses(request: Request, limit: int = Query(10, ge=1, le=100)):
    records = request.app.state.analysis_store.list_recent(limit)
    return {"success": True, "data": [r.to_dict() for r in records]}
