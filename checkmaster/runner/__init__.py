"""Checklist runner: answer state, validation, pricing and submission."""
from checkmaster.runner.merge import apply_extraction, normalize_plate
from checkmaster.runner.session import ChecklistSession
from checkmaster.runner.submission import finalize
from checkmaster.runner.validation import validate
from checkmaster.runner.valuation import compute_total

__all__ = [
    "ChecklistSession",
    "apply_extraction",
    "compute_total",
    "finalize",
    "normalize_plate",
    "validate",
]
