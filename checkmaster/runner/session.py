"""State of one checklist run: live answers, derived total and the scan guard."""
from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Protocol

from checkmaster.ai.client import ScanOutcome
from checkmaster.core.errors import (
    AnswerTypeError,
    ExtractionTransportFailure,
    ScanInProgress,
    ValidationFailed,
)
from checkmaster.core.models import (
    THUMBNAIL_KEY,
    AIResult,
    AnswerMap,
    AnswerValue,
    Field,
    FieldType,
    Submission,
    Template,
)
from checkmaster.runner.answers import coerce_answer
from checkmaster.runner.merge import apply_extraction
from checkmaster.runner.submission import finalize
from checkmaster.runner.validation import validate
from checkmaster.runner.valuation import compute_total

logger = logging.getLogger(__name__)


class ImageAnalyzer(Protocol):
    def analyze(self, data_uri: str) -> Optional[AIResult]:
        ...


class ChecklistSession:
    """Runs a template: collects answers, prices them and produces a submission.

    Only one scan may be outstanding at a time; while ``scanning`` is set both
    new captures and ``submit`` raise :class:`ScanInProgress`. A failed scan
    never clears answers already entered.
    """

    def __init__(self, template: Template, analyzer: ImageAnalyzer) -> None:
        self.template = template
        self.analyzer = analyzer
        self.answers: AnswerMap = {}
        self.scanning = False

    @property
    def total(self) -> float:
        return compute_total(self.template.fields, self.answers)

    @property
    def errors(self) -> List[str]:
        return validate(self.template.fields, self.answers)

    def _field(self, field_id: str) -> Field:
        field = self.template.field_by_id(field_id)
        if field is None:
            raise AnswerTypeError(f"Template {self.template.name!r} has no field {field_id!r}")
        return field

    def set_answer(self, field_id: str, value: AnswerValue) -> None:
        field = self._field(field_id)
        self.answers[field_id] = coerce_answer(field, value)

    def toggle_checkbox(self, field_id: str) -> bool:
        field = self._field(field_id)
        if field.type is not FieldType.CHECKBOX:
            raise AnswerTypeError(f"{field.label} is not a checkbox")
        checked = self.answers.get(field_id) is not True
        self.answers[field_id] = checked
        return checked

    def select_option(self, field_id: str, option_id: str) -> None:
        field = self._field(field_id)
        if field.type is not FieldType.SINGLE_SELECT:
            raise AnswerTypeError(f"{field.label} is not a single-select field")
        self.answers[field_id] = coerce_answer(field, option_id)

    def toggle_option(self, field_id: str, option_id: str) -> List[str]:
        """Add or remove ``option_id`` from a multi-select answer."""

        field = self._field(field_id)
        if field.type is not FieldType.MULTI_SELECT:
            raise AnswerTypeError(f"{field.label} is not a multi-select field")
        current = self.answers.get(field_id)
        selected = list(current) if isinstance(current, list) else []
        if option_id in selected:
            selected.remove(option_id)
        else:
            selected.append(option_id)
        self.answers[field_id] = coerce_answer(field, selected)
        return list(self.answers[field_id])

    def clear_image(self, field_id: str) -> None:
        field = self._field(field_id)
        if field.type is not FieldType.IMAGE:
            raise AnswerTypeError(f"{field.label} is not an image field")
        self.answers[field_id] = None

    def _begin_scan(self, data_uri: str, field_id: Optional[str]) -> None:
        if self.scanning:
            raise ScanInProgress("A scan is already in progress")
        if field_id is not None:
            field = self._field(field_id)
            if field.type is FieldType.IMAGE:
                self.answers[field_id] = data_uri
        if not self.answers.get(THUMBNAIL_KEY):
            self.answers[THUMBNAIL_KEY] = data_uri
        self.scanning = True

    def _run_analysis(self, data_uri: str) -> ScanOutcome:
        try:
            result = self.analyzer.analyze(data_uri)
        except ExtractionTransportFailure as exc:
            logger.warning("Scan failed for template %s: %s", self.template.name, exc)
            return ScanOutcome.failed(str(exc))
        except Exception as exc:
            logger.exception("Analyzer raised unexpectedly for template %s", self.template.name)
            return ScanOutcome.failed(f"Unexpected analyzer error: {exc}")
        if result is None:
            logger.info("Scan returned no usable extraction")
            return ScanOutcome.empty()
        return ScanOutcome.ok(result)

    def _finish_scan(self, outcome: ScanOutcome) -> ScanOutcome:
        if outcome.status == ScanOutcome.OK and outcome.result is not None:
            self.answers = apply_extraction(self.template.fields, self.answers, outcome.result)
        return outcome

    def capture(self, data_uri: str, field_id: Optional[str] = None) -> ScanOutcome:
        """Record a captured photo and run exactly one analysis attempt on it."""

        self._begin_scan(data_uri, field_id)
        try:
            outcome = self._run_analysis(data_uri)
        finally:
            self.scanning = False
        return self._finish_scan(outcome)

    async def capture_async(self, data_uri: str, field_id: Optional[str] = None) -> ScanOutcome:
        """Awaitable ``capture``; the analyzer call runs in a worker thread."""

        self._begin_scan(data_uri, field_id)
        try:
            outcome = await asyncio.to_thread(self._run_analysis, data_uri)
        finally:
            self.scanning = False
        return self._finish_scan(outcome)

    def submit(self) -> Submission:
        """Validate and finalize the run.

        Raises :class:`ValidationFailed` with every problem at once.
        """

        if self.scanning:
            raise ScanInProgress("Wait for the scan to finish before submitting")
        errors = self.errors
        if errors:
            logger.warning("Submission blocked for %s: %s", self.template.name, "; ".join(errors))
            raise ValidationFailed(errors)
        return finalize(self.template, self.answers, self.total)
