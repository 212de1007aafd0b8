from __future__ import annotations
import logging
import re
from typing import Any

from brandaudit.services.models import Severity, Violation, WebsiteObservation

logger = logging.getLogger(__name__)

PALETTE_SECTIONS = ("semantic", "neutral", "primary")

_NON_HEX = re.compile(r"[^#a-fA-F0-9]")
_SHORT_HEX = re.compile(r"^#([0-9a-f])([0-9a-f])([0-9a-f])[0-9a-f]?$")
_ALPHA_HEX = re.compile(r"^(#[0-9a-f]{6})[0-9a-f]{2}$")
_RGB = re.compile(r"rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*[\d.]+%?\s*)?\)", re.IGNORECASE)


def normalize_color(raw: Any) -> str:
    """
    Normalize a CSS color to lower-case '#rrggbb'.

    '#FFF' -> '#ffffff', '#f008' -> '#ff0000', 'rgb(255, 0, 0)' -> '#ff0000'. Anything that is neither
    hex nor rgb()/rgba() (named colors, gradients) normalizes to ''.
    """
    if not isinstance(raw, str) or not raw.strip():
        return ""

    stripped = _NON_HEX.sub("", raw).lower()
    if stripped.startswith("#"):
        short = _SHORT_HEX.match(stripped)
        if short:
            return "#" + "".join(ch * 2 for ch in short.groups())
        # Alpha channel is dropped: '#ff000080' compares as '#ff0000'
        with_alpha = _ALPHA_HEX.match(stripped)
        if with_alpha:
            return with_alpha.group(1)
        return stripped if len(stripped) > 1 else ""

    match = _RGB.search(raw)
    if match:
        r, g, b = (min(int(channel), 255) for channel in match.groups())
        return f"#{r:02x}{g:02x}{b:02x}"

    return ""


def approved_palette(colors: dict[str, Any]) -> tuple[list[str], list[str]]:
    """Flatten semantic/neutral/primary palettes into (hex values, 'name: hex' labels)."""
    approved: list[str] = []
    labels: list[str] = []
    for section in PALETTE_SECTIONS:
        palette = colors.get(section)
        if not isinstance(palette, dict):
            continue
        for name, descriptor in palette.items():
            if not isinstance(descriptor, dict) or not descriptor.get("hex"):
                continue
            hex_value = normalize_color(descriptor["hex"])
            if hex_value:
                approved.append(hex_value)
                labels.append(f"{name}: {descriptor['hex']}")
    return approved, labels


def evaluate_colors(observation: WebsiteObservation, colors: dict[str, Any] | None) -> list[Violation]:
    if colors is None:
        logger.warning("No brand colors in guideline; skipping color checks")
        return []

    approved, labels = approved_palette(colors)
    approved_set = set(approved)
    forbidden = {c for c in (normalize_color(f) for f in colors.get("forbidden") or []) if c}
    expected = f"Use only approved brand colors: {', '.join(labels)}"

    found = [c for c in (normalize_color(raw) for raw in observation.colors) if c]
    logger.debug(f"Approved colors: {approved}; observed (normalized): {found}")

    # One violation per (kind, color) no matter how often it appears on the page
    violations: dict[tuple[str, str], Violation] = {}
    for color in found:
        if color in forbidden:
            key = ("forbidden", color)
            if key not in violations:
                violations[key] = Violation(
                    element_type="color_usage",
                    issue_type="color",
                    issue="Forbidden color detected",
                    location="Global color usage",
                    element_text="Forbidden color found in design",
                    found=f"Forbidden color: {color}",
                    expected=expected,
                    suggestion=f"Remove {color} and replace it with an approved brand color from the palette.",
                    severity=Severity.HIGH,
                    impact="Brand consistency compromised",
                    priority="Fix immediately",
                )
        elif color not in approved_set:
            key = ("unapproved", color)
            if key not in violations:
                violations[key] = Violation(
                    element_type="color_usage",
                    issue_type="color",
                    issue="Unapproved color detected",
                    location="Global color usage",
                    element_text="Color not in brand palette",
                    found=f"Unapproved color: {color}",
                    expected=expected,
                    suggestion=f"Replace {color} with an approved brand color from the palette.",
                    severity=Severity.MEDIUM,
                    impact="Brand consistency affected",
                    priority="Review and update",
                )

    return list(violations.values())
