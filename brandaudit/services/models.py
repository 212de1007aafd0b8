"""
Shared domain types for the brand audit engine.

- BrandGuideline: one brand's rule set (colors, typography, logo, tone)
- WebsiteObservation: the scraper's snapshot of a live page
- Violation / Severity: one detected mismatch and its remediation tier

Guideline sections stay as plain dicts (or their JSON-serialized form, as
stored by the catalog). The compliance aggregator parses them on use.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


# ═══════════════════════════════════════════════════════════════════════════════
# SEVERITY
# ═══════════════════════════════════════════════════════════════════════════════

class Severity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"



# ═══════════════════════════════════════════════════════════════════════════════
# BRAND GUIDELINE
# ═══════════════════════════════════════════════════════════════════════════════

GuidelineSection = dict[str, Any] | str | None


def _pick(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """First present key wins (accepts snake_case and camelCase payloads)."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


@dataclass
class BrandGuideline:
    """Canonical brand rule set. Read-only to the engine."""
    id: int | str | None
    brand_name: str
    company_name: str
    industry: str | None = None
    colors: GuidelineSection = None       # {primary, semantic, neutral, forbidden}
    typography: GuidelineSection = None   # {fonts: {primary, fallback, monospace}}
    logo: GuidelineSection = None         # {variants, rules}
    tone: GuidelineSection = None         # {style, forbidden}
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BrandGuideline":
        brand_name = _pick(data, "brand_name", "brandName", default="")
        return cls(
            id=data.get("id"),
            brand_name=brand_name,
            company_name=_pick(data, "company_name", "companyName", default=brand_name),
            industry=data.get("industry"),
            colors=data.get("colors"),
            typography=data.get("typography"),
            logo=data.get("logo"),
            tone=_pick(data, "tone", "voiceAndTone"),
            is_active=_pick(data, "is_active", "isActive", default=True),
        )

    def to_summary(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "brand_name": self.brand_name,
            "company_name": self.company_name,
            "industry": self.industry,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.to_summary(),
            "colors": self.colors,
            "typography": self.typography,
            "logo": self.logo,
            "tone": self.tone,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


# ═══════════════════════════════════════════════════════════════════════════════
# WEBSITE OBSERVATION
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass
class PageElement:
    type: str
    text: str = ""
    styles: dict[str, str] = field(default_factory=dict)

    @property
    def font_family(self) -> str:
        return self.styles.get("font-family") or ""


@dataclass
class PageImage:
    src: str = ""
    alt: str = ""
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class WebsiteObservation:
    """What the scraper saw on one page. Arrays always exist, possibly empty."""
    elements: list[PageElement] = field(default_factory=list)
    colors: list[str] = field(default_factory=list)
    images: list[PageImage] = field(default_factory=list)
    url: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WebsiteObservation":
        elements = [
            PageElement(
                type=e.get("type") or "element",
                text=e.get("text") or "",
                styles=dict(e.get("styles") or {}),
            )
            for e in data.get("elements") or []
        ]
        images = [
            PageImage(
                src=img.get("src") or "",
                alt=img.get("alt") or "",
                extra={k: v for k, v in img.items() if k not in ("src", "alt")},
            )
            for img in data.get("images") or []
        ]
        colors = [c for c in data.get("colors") or [] if isinstance(c, str)]
        return cls(elements=elements, colors=colors, images=images, url=data.get("url"))


# ═══════════════════════════════════════════════════════════════════════════════
# VIOLATION
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Violation:
    """A single guideline mismatch with remediation hints."""
    element_type: str
    issue_type: str
    issue: str
    location: str
    element_text: str
    found: str
    expected: str
    suggestion: str
    severity: Severity
    impact: str
    priority: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "element_type": self.element_type,
            "issue_type": self.issue_type,
            "issue": self.issue,
            "location": self.location,
            "element_text": self.element_text,
            "found": self.found,
            "expected": self.expected,
            "suggestion": self.suggestion,
            "severity": self.severity.value,
            "impact": self.impact,
            "priority": self.priority,
        }
