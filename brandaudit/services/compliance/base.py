from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable

from brandaudit.services.models import Violation, WebsiteObservation

EvaluateFn = Callable[[WebsiteObservation, "dict[str, Any] | None"], list[Violation]]

@dataclass(frozen=True)
class Evaluator:
    """One guideline category check: which section it reads and how it checks it."""
    category: str          # guideline attribute name: colors / typography / logo / tone
    evaluate: EvaluateFn

def truncate(text: str, limit: int) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")
