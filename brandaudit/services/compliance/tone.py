from __future__ import annotations
from typing import Any

from brandaudit.services.compliance.base import truncate
from brandaudit.services.models import Severity, Violation, WebsiteObservation


def evaluate_tone(observation: WebsiteObservation, tone: dict[str, Any] | None) -> list[Violation]:
    """
    One violation per (element, forbidden word) hit. Repeats across elements are
    kept: each occurrence is a separate piece of copy to fix.
    """
    if tone is None:
        return []

    forbidden_words = [w for w in tone.get("forbidden") or [] if isinstance(w, str) and w]
    violations = []
    for element in observation.elements:
        if not element.text:
            continue
        text = element.text.lower()
        for word in forbidden_words:
            if word.lower() not in text:
                continue
            violations.append(Violation(
                element_type="tone",
                issue_type="tone",
                issue="Forbidden word detected",
                location=f"{element.type} element",
                element_text=truncate(element.text, 100),
                found=f'Forbidden word: "{word}"',
                expected="Use approved brand language" + (f" ({tone['style']})" if tone.get("style") else ""),
                suggestion=f'Replace "{word}" with brand-appropriate language.',
                severity=Severity.MEDIUM,
                impact="Brand voice consistency affected",
                priority="Update content",
            ))
    return violations
