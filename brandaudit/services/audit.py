"""
Website audit orchestration.

Resolves which guideline applies (explicit brand name, else detection, else the
top suggestion), runs the compliance engine and stores the result.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

from brandaudit.services.analysis_store import AnalysisRecord, AnalysisStore
from brandaudit.services.brand_detection import BrandDetectionService, DetectionResult
from brandaudit.services.catalog import GuidelineCatalog
from brandaudit.services.compliance import ComplianceReport, analyze_website
from brandaudit.services.models import BrandGuideline, WebsiteObservation

logger = logging.getLogger(__name__)


class BrandNotFoundError(LookupError): pass


@dataclass
class AuditResult:
    brand_name: str
    website_url: str
    report: ComplianceReport
    analysis_id: str
    detection: DetectionResult | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "brand_name": self.brand_name,
            "website_url": self.website_url,
            "analysis": self.report.to_dict(),
            "analysis_id": self.analysis_id,
            "detection": self.detection.to_dict() if self.detection else None,
        }


class AuditService:
    def __init__(self, catalog: GuidelineCatalog, store: AnalysisStore):
        self.catalog = catalog
        self.store = store
        self.detector = BrandDetectionService(catalog)

    def resolve_guideline(
        self, url: str, brand_name: str | None = None, company_name: str = ""
    ) -> tuple[BrandGuideline, DetectionResult | None]:
        if brand_name:
            guideline = self.catalog.find_by_brand_name(brand_name)
            if not guideline:
                raise BrandNotFoundError(f'No brand guidelines found for "{brand_name}"')
            return guideline, None

        logger.info("No brand specified, attempting auto-detection...")
        detection = self.detector.detect_brand(url, company_name)
        if detection.success:
            return detection.brand, detection

        if detection.suggestions:
            # No confident match: fall back to the top-ranked candidate
            fallback_name = detection.suggestions[0]["brand_name"]
            logger.warning(f"Using suggested brand: {fallback_name} (confidence: {detection.suggestions[0]['confidence']})")
            guideline = self.catalog.find_by_brand_name(fallback_name)
            if guideline:
                return guideline, detection

        raise BrandNotFoundError(detection.error or "No brand guidelines found for this website")

    def audit_website(
        self,
        url: str,
        observation: WebsiteObservation,
        brand_name: str | None = None,
        company_name: str = "",
    ) -> AuditResult:
        start = time.perf_counter()
        guideline, detection = self.resolve_guideline(url, brand_name, company_name)
        logger.info(f"Auditing {url} against {guideline.brand_name}")

        report = analyze_website(observation, guideline)
        elapsed_ms = (time.perf_counter() - start) * 1000

        record: AnalysisRecord = self.store.create(
            guideline_id=guideline.id,
            brand_name=guideline.brand_name,
            website_url=url,
            score=report.score,
            total_violations=len(report.violations),
            severity_breakdown=report.severity_breakdown,
            report=report.to_dict(),
            processing_time_ms=elapsed_ms,
            elements_analyzed=len(observation.elements),
        )

        return AuditResult(
            brand_name=guideline.brand_name,
            website_url=url,
            report=report,
            analysis_id=record.id,
            detection=detection,
        )
