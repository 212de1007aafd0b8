from __future__ import annotations
from typing import Any

from brandaudit.services.compliance.base import truncate
from brandaudit.services.models import Severity, Violation, WebsiteObservation

FONT_SLOTS = ("primary", "fallback", "monospace")


def approved_fonts(typography: dict[str, Any]) -> list[str]:
    fonts = typography.get("fonts") or {}
    return [fonts[slot].lower() for slot in FONT_SLOTS if isinstance(fonts.get(slot), str) and fonts[slot]]


def evaluate_typography(observation: WebsiteObservation, typography: dict[str, Any] | None) -> list[Violation]:
    """One violation per element whose font-family mentions no approved font."""
    if typography is None:
        return []

    approved = approved_fonts(typography)
    violations = []
    for element in observation.elements:
        font_family = element.font_family
        if not font_family:
            continue
        normalized = font_family.lower()
        if any(font in normalized for font in approved):
            continue
        violations.append(Violation(
            element_type="typography",
            issue_type="font",
            issue="Incorrect font family",
            location=f"{element.type} element",
            element_text=truncate(element.text, 50),
            found=f"Font: {font_family}",
            expected=f"Approved fonts: {', '.join(approved)}",
            suggestion=f'Change font from "{font_family}" to an approved brand font.',
            severity=Severity.MEDIUM,
            impact="Typography consistency affected",
            priority="Update font family",
        ))
    return violations
