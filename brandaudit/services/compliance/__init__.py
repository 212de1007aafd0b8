from .core import analyze_website, ComplianceReport, DEFAULT_EVALUATORS, compute_score, severity_breakdown
from .base import Evaluator
from .validation import GuidelineParseError, parse_section
from .colors import evaluate_colors, normalize_color
from .typography import evaluate_typography
from .logo import evaluate_logo
from .tone import evaluate_tone
