from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Sequence

from brandaudit.services.compliance.base import Evaluator
from brandaudit.services.compliance.colors import evaluate_colors
from brandaudit.services.compliance.logo import evaluate_logo
from brandaudit.services.compliance.tone import evaluate_tone
from brandaudit.services.compliance.typography import evaluate_typography
from brandaudit.services.compliance.validation import parse_section
from brandaudit.services.models import BrandGuideline, Severity, Violation, WebsiteObservation

logger = logging.getLogger(__name__)

# Run order is report order
DEFAULT_EVALUATORS: tuple[Evaluator, ...] = (
    Evaluator("colors", evaluate_colors),
    Evaluator("typography", evaluate_typography),
    Evaluator("logo", evaluate_logo),
    Evaluator("tone", evaluate_tone),
)

@dataclass(frozen=True)
class ComplianceReport:
    score:               int
    violations:          tuple[Violation, ...]     = ()
    severity_breakdown:  dict[str, int]            = field(default_factory=dict)
    summary:             dict[str, Any]            = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "score":               self.score,
            "violations":          [v.to_dict() for v in self.violations],
            "severity_breakdown":  dict(self.severity_breakdown),
            "summary":             dict(self.summary),
        }

def compute_score(total_elements: int, violation_count: int) -> int:
    """Share of elements left after subtracting violations, as 0-100. Empty page scores 0."""
    if total_elements <= 0:
        return 0
    raw = (total_elements - violation_count) / total_elements * 100
    # Half-up rounding, not Python's banker's rounding
    return max(0, math.floor(raw + 0.5))

def severity_breakdown(violations: Sequence[Violation]) -> dict[str, int]:
    counts = {s.value: 0 for s in Severity}
    for v in violations:
        counts[v.severity.value] += 1
    return counts

def analyze_website(
    observation: WebsiteObservation,
    guideline: BrandGuideline,
    evaluators: Sequence[Evaluator] = DEFAULT_EVALUATORS,
) -> ComplianceReport:
    """
    Run every category evaluator over one (observation, guideline) pair.
    Pure: no I/O, no shared state. Raises GuidelineParseError on malformed sections.
    """
    violations: list[Violation] = []
    for evaluator in evaluators:
        section = parse_section(getattr(guideline, evaluator.category, None), evaluator.category)
        found = evaluator.evaluate(observation, section)
        logger.debug(f"{evaluator.category}: {len(found)} violations")
        violations.extend(found)

    total_elements = len(observation.elements)
    if total_elements == 0:
        logger.warning("Observation has no elements; score defaults to 0")

    score = compute_score(total_elements, len(violations))
    logger.info(f"Compliance for {guideline.brand_name}: score={score}, violations={len(violations)}")

    return ComplianceReport(
        score=score,
        violations=tuple(violations),
        severity_breakdown=severity_breakdown(violations),
        summary={
            "total_elements": total_elements,
            "violation_count": len(violations),
            "score": score,
            "brand_name": guideline.brand_name,
        },
    )
