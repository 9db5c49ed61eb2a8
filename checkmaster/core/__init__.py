"""Core building blocks for the checkmaster package."""
from checkmaster.core.errors import (
    AnswerTypeError,
    ChecklistError,
    ExtractionTransportFailure,
    ScanInProgress,
    StoreError,
    TemplateError,
    ValidationFailed,
)
from checkmaster.core.logging import configure_logging
from checkmaster.core.models import (
    THUMBNAIL_KEY,
    AIResult,
    AnswerMap,
    AnswerValue,
    Field,
    FieldType,
    Option,
    Submission,
    Template,
)

__all__ = [
    "THUMBNAIL_KEY",
    "AIResult",
    "AnswerMap",
    "AnswerTypeError",
    "AnswerValue",
    "ChecklistError",
    "ExtractionTransportFailure",
    "Field",
    "FieldType",
    "Option",
    "ScanInProgress",
    "StoreError",
    "Submission",
    "Template",
    "TemplateError",
    "ValidationFailed",
    "configure_logging",
]
