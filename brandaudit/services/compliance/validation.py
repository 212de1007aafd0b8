from __future__ import annotations
import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

class GuidelineParseError(ValueError): pass

def parse_section(section: Any, name: str) -> dict[str, Any] | None:
    """
    Guideline sections arrive either as structured data or as the JSON text the
    catalog stored. Missing sections mean "nothing to check", not an error.
    """
    if section is None or section == "":
        return None
    if isinstance(section, str):
        try:
            section = json.loads(section)
        except json.JSONDecodeError as e:
            raise GuidelineParseError(f"Malformed '{name}' section: {e}") from e
    if section is None:
        return None
    if not isinstance(section, dict):
        raise GuidelineParseError(f"Expected '{name}' section to be an object, got {type(section).__name__}")
    return section
