"""Checklist builder and runner for vehicle inspections."""
from checkmaster.ai import ScanOutcome, VehicleImageAnalyzer
from checkmaster.builder import new_field, save_template, upsert_template
from checkmaster.core import (
    THUMBNAIL_KEY,
    AIResult,
    Field,
    FieldType,
    Option,
    Submission,
    Template,
    configure_logging,
)
from checkmaster.reporting import summarize_history, submissions_to_rows
from checkmaster.runner import (
    ChecklistSession,
    apply_extraction,
    compute_total,
    finalize,
    validate,
)
from checkmaster.storage import JsonStore

__all__ = [
    "THUMBNAIL_KEY",
    "AIResult",
    "ChecklistSession",
    "Field",
    "FieldType",
    "JsonStore",
    "Option",
    "ScanOutcome",
    "Submission",
    "Template",
    "VehicleImageAnalyzer",
    "apply_extraction",
    "compute_total",
    "configure_logging",
    "finalize",
    "new_field",
    "save_template",
    "submissions_to_rows",
    "summarize_history",
    "upsert_template",
    "validate",
]
