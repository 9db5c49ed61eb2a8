"""Domain errors raised by the builder, the runner and the AI client."""
from __future__ import annotations

from typing import List


class ChecklistError(Exception):
    """Base class for failures the application handles at the point they occur."""


class TemplateError(ChecklistError):
    """A template or field edit that cannot be applied."""


class AnswerTypeError(ChecklistError):
    """An answer whose shape does not match its field type."""


class ValidationFailed(ChecklistError):
    """Required fields are unanswered or answers are malformed at submit time."""

    def __init__(self, errors: List[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = list(errors)


class ScanInProgress(ChecklistError):
    """A capture or submit was attempted while a scan is still outstanding."""


class ExtractionTransportFailure(ChecklistError):
    """The image analysis call failed or returned an unreadable payload."""


class StoreError(ChecklistError):
    """The local JSON store could not be read."""
