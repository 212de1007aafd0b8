"""
Brand Detection Service

Picks the most likely brand guideline for a URL and optional company-name hint.

Every catalog entry is scored by a fixed sequence of rules:
  domain_mapping (0.9) → company_name_exact (0.8) → company_name_partial (0.6)
  → brand_name_partial (0.5) → domain_contains_brand (0.4)
  → brand_contains_domain (0.3) → fuzzy_match (0.2 × similarity)
  → fallback (0.1 when nothing fired)

Scores accumulate across rules and are capped at 1.0. The reported method and
reason come from the LAST rule that fired, not the strongest one.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping
from urllib.parse import urlsplit

from brandaudit.core.config import settings
from brandaudit.services.catalog import GuidelineCatalog
from brandaudit.services.models import BrandGuideline
from brandaudit.services.similarity import similarity

logger = logging.getLogger(__name__)

# ─── Constants ───────────────────────────────────────────────────────────────
MATCH_CONFIDENCE_THRESHOLD: float = settings.MATCH_CONFIDENCE_THRESHOLD
FUZZY_MATCH_THRESHOLD: float = settings.FUZZY_MATCH_THRESHOLD
MAX_ALTERNATIVES: int = settings.MAX_ALTERNATIVES
MAX_SUGGESTIONS: int = settings.MAX_SUGGESTIONS
MAX_BRAND_SUGGESTIONS: int = settings.MAX_BRAND_SUGGESTIONS

FALLBACK_SCORE: float = 0.1
FUZZY_WEIGHT: float = 0.2
MAX_SCORE: float = 1.0

# Normalized hostname → brand name
DOMAIN_BRAND_MAP: Mapping[str, str] = MappingProxyType({
    "github.com": "GitHub",
    "www.github.com": "GitHub",
    "github.io": "GitHub",
    "buffer.com": "Buffer",
    "www.buffer.com": "Buffer",
    "bufferapp.com": "Buffer",
    "apple.com": "Apple",
    "www.apple.com": "Apple",
    "hbl.com": "Habib Bank",
    "www.hbl.com": "Habib Bank",
    "habibbank.com": "Habib Bank",
    "www.habibbank.com": "Habib Bank",
    "switcherstudio.com": "Switcher",
    "www.switcherstudio.com": "Switcher",
    "switcher.com": "Switcher",
    "www.switcher.com": "Switcher",
    "saasgamma.com": "SaaSGamma",
    "www.saasgamma.com": "SaaSGamma",
    "stripe.com": "Stripe",
    "shopify.com": "Shopify",
    "slack.com": "Slack",
    "spotify.com": "Spotify",
    "netflix.com": "Netflix",
    "airbnb.com": "Airbnb",
    "uber.com": "Uber",
    "twitter.com": "Twitter",
    "x.com": "Twitter",
    "facebook.com": "Facebook",
    "meta.com": "Meta",
    "google.com": "Google",
    "microsoft.com": "Microsoft",
    "amazon.com": "Amazon",
    "tesla.com": "Tesla",
})


class MatchMethod(str, Enum):
    DOMAIN_MAPPING = "domain_mapping"
    COMPANY_NAME_EXACT = "company_name_exact"
    COMPANY_NAME_PARTIAL = "company_name_partial"
    BRAND_NAME_PARTIAL = "brand_name_partial"
    DOMAIN_CONTAINS_BRAND = "domain_contains_brand"
    BRAND_CONTAINS_DOMAIN = "brand_contains_domain"
    FUZZY_MATCH = "fuzzy_match"
    FALLBACK = "fallback"


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class UrlInfo:
    hostname: str
    domain: str
    subdomain: str | None
    suggested_brand: str | None
    path: str
    full_url: str


@dataclass(frozen=True)
class BrandMatch:
    brand: BrandGuideline
    score: float
    method: MatchMethod
    reason: str


@dataclass
class DetectionResult:
    success: bool
    brand: BrandGuideline | None = None
    confidence: float | None = None
    detection_method: MatchMethod | None = None
    alternatives: list[dict[str, Any]] = field(default_factory=list)
    suggestions: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.success:
            return {
                "success": True,
                "brand": self.brand.to_dict() if self.brand else None,
                "confidence": self.confidence,
                "detection_method": self.detection_method.value if self.detection_method else None,
                "alternatives": self.alternatives,
            }
        return {
            "success": False,
            "error": self.error,
            "suggestions": self.suggestions,
        }


# =============================================================================
# URL Parsing
# =============================================================================

def extract_url_info(url: str) -> UrlInfo:
    """
    Split a URL into hostname/domain/subdomain. Never raises: an unparseable
    URL degrades to using the raw string as both hostname and domain.
    """
    try:
        parts = urlsplit(url)
        hostname = (parts.hostname or "").lower()
        if not parts.scheme or not hostname:
            raise ValueError(f"Not an absolute URL: {url!r}")
    except ValueError as e:
        logger.warning(f"URL parse failed, using degraded info: {e}")
        raw = url or ""
        return UrlInfo(
            hostname=raw, domain=raw, subdomain=None,
            suggested_brand=None, path="/", full_url=raw,
        )

    labels = hostname.split(".")
    domain = labels[-2] if len(labels) >= 2 and labels[-2] else hostname
    subdomain = labels[0] if len(labels) > 2 else None

    return UrlInfo(
        hostname=hostname,
        domain=domain,
        subdomain=subdomain,
        suggested_brand=DOMAIN_BRAND_MAP.get(hostname),
        path=parts.path or "/",
        full_url=url,
    )


# =============================================================================
# Scoring
# =============================================================================

def score_brand(brand: BrandGuideline, url_info: UrlInfo, company_name: str = "") -> BrandMatch:
    score = 0.0
    method: MatchMethod | None = None
    reason = ""

    brand_lower = brand.brand_name.lower()
    company_lower = (brand.company_name or "").lower()
    hint = company_name.lower() if company_name else ""
    domain = url_info.domain.lower()

    if url_info.suggested_brand and brand_lower == url_info.suggested_brand.lower():
        score += 0.9
        method = MatchMethod.DOMAIN_MAPPING
        reason = f"Domain {url_info.hostname} maps to {brand.brand_name}"

    if hint and company_lower and company_lower == hint:
        score += 0.8
        method = MatchMethod.COMPANY_NAME_EXACT
        reason = f'Company name "{company_name}" matches exactly'

    if hint and company_lower and hint in company_lower:
        score += 0.6
        method = MatchMethod.COMPANY_NAME_PARTIAL
        reason = f'Company name "{company_name}" partially matches "{brand.company_name}"'

    if hint and hint in brand_lower:
        score += 0.5
        method = MatchMethod.BRAND_NAME_PARTIAL
        reason = f'Brand name "{brand.brand_name}" contains "{company_name}"'

    if domain and domain in brand_lower:
        score += 0.4
        method = MatchMethod.DOMAIN_CONTAINS_BRAND
        reason = f'Domain "{url_info.domain}" found in brand name "{brand.brand_name}"'

    if domain and brand_lower and brand_lower in domain:
        score += 0.3
        method = MatchMethod.BRAND_CONTAINS_DOMAIN
        reason = f'Brand name "{brand.brand_name}" found in domain "{url_info.domain}"'

    probe = company_name or url_info.domain
    fuzzy = similarity(probe, brand.brand_name)
    if fuzzy > FUZZY_MATCH_THRESHOLD:
        score += fuzzy * FUZZY_WEIGHT
        method = MatchMethod.FUZZY_MATCH
        reason = f'Fuzzy match between "{probe}" and "{brand.brand_name}"'

    if score == 0:
        score = FALLBACK_SCORE
        method = MatchMethod.FALLBACK
        reason = f"Available brand: {brand.brand_name}"

    return BrandMatch(brand=brand, score=min(score, MAX_SCORE), method=method, reason=reason)


def score_brands(brands: list[BrandGuideline], url_info: UrlInfo, company_name: str = "") -> list[BrandMatch]:
    """Score every brand and rank by score, highest first (ties keep catalog order)."""
    matches = [score_brand(b, url_info, company_name) for b in brands]
    return sorted(matches, key=lambda m: m.score, reverse=True)


def decide(ranked: list[BrandMatch]) -> DetectionResult:
    """Turn a ranked match list into a success/failure detection result."""
    if not ranked:
        return DetectionResult(success=False, error="No brand guidelines available")

    best = ranked[0]
    if best.score > MATCH_CONFIDENCE_THRESHOLD:
        return DetectionResult(
            success=True,
            brand=best.brand,
            confidence=best.score,
            detection_method=best.method,
            alternatives=[
                {"brand_name": m.brand.brand_name, "confidence": m.score, "method": m.method.value}
                for m in ranked[1:1 + MAX_ALTERNATIVES]
            ],
        )

    return DetectionResult(
        success=False,
        error="No brand guidelines found for this website",
        suggestions=[
            {"brand_name": m.brand.brand_name, "confidence": m.score, "reason": m.reason}
            for m in ranked[:MAX_SUGGESTIONS]
        ],
    )


# =============================================================================
# Service
# =============================================================================

class BrandDetectionService:
    """Brand identification over an injected guideline catalog."""

    def __init__(self, catalog: GuidelineCatalog):
        self.catalog = catalog

    def rank(self, url: str, company_name: str = "") -> list[BrandMatch]:
        url_info = extract_url_info(url)
        brands = self.catalog.list_all()
        logger.info(f"Scoring {len(brands)} brands for {url_info.hostname} (hint: {company_name!r})")
        return score_brands(brands, url_info, company_name)

    def detect_brand(self, url: str, company_name: str = "") -> DetectionResult:
        if not url:
            return DetectionResult(success=False, error="URL is required")

        try:
            ranked = self.rank(url, company_name or "")
        except Exception as e:
            logger.error(f"Brand detection failed: {e}")
            return DetectionResult(success=False, error=str(e))

        result = decide(ranked)
        if result.success:
            logger.info(f"Best match: {result.brand.brand_name} (score: {result.confidence:.2f}, method: {result.detection_method.value})")
        else:
            logger.info(f"No confident brand match for {url}")
        return result

    def get_brand_suggestions(self, query: str) -> list[dict[str, Any]]:
        """Fuzzy-rank catalog brands by name for manual selection."""
        if not query:
            return []
        try:
            brands = self.catalog.list_all()
        except Exception as e:
            logger.error(f"Error getting brand suggestions: {e}")
            return []

        scored = [
            {
                "id": b.id,
                "brand_name": b.brand_name,
                "company_name": b.company_name,
                "industry": b.industry,
                "score": similarity(query, b.brand_name),
            }
            for b in brands
        ]
        scored = [s for s in scored if s["score"] > FALLBACK_SCORE]
        scored.sort(key=lambda s: s["score"], reverse=True)
        return scored[:MAX_BRAND_SUGGESTIONS]
