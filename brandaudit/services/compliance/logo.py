from __future__ import annotations
from typing import Any

from brandaudit.services.models import Severity, Violation, WebsiteObservation


def logo_requirements(logo: dict[str, Any]) -> list[str]:
    requirements = []
    for name, variant in (logo.get("variants") or {}).items():
        # Variants are either {"description": ...} objects or bare description strings
        description = variant.get("description") if isinstance(variant, dict) else variant
        if description:
            requirements.append(f"{name}: {description}")
    requirements.extend(str(rule) for rule in logo.get("rules") or [])
    return requirements


def evaluate_logo(observation: WebsiteObservation, logo: dict[str, Any] | None) -> list[Violation]:
    if logo is None:
        return []

    if any("logo" in (image.alt or "").lower() for image in observation.images):
        return []

    requirements = logo_requirements(logo)
    if requirements:
        expected = f"Logo should be prominently displayed. Requirements: {', '.join(requirements)}"
    else:
        expected = "Logo should be prominently displayed in the header or navigation area"

    return [Violation(
        element_type="logo",
        issue_type="logo",
        issue="Logo not found",
        location="Website header/navigation",
        element_text="No logo detected",
        found="No logo found on website",
        expected=expected,
        suggestion="Add your brand logo to the website header or navigation area.",
        severity=Severity.HIGH,
        impact="Brand recognition compromised",
        priority="Add logo immediately",
    )]
