"""Required-field and amount checks run before a checklist is submitted."""
from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from checkmaster.core.models import AnswerValue, Field, FieldType
from checkmaster.runner.answers import is_number, is_present, parse_amount, require_all_types

logger = logging.getLogger(__name__)


def _no_check(field: Field, value: AnswerValue) -> Optional[str]:
    return None


def _check_number(field: Field, value: AnswerValue) -> Optional[str]:
    if not is_number(value):
        return f"{field.label} must be a number."
    return None


def _check_amount(field: Field, value: AnswerValue) -> Optional[str]:
    if not is_number(value) or parse_amount(value) < 0:
        return f"{field.label} must be a valid amount."
    return None


# Checks applied to answers that are present; required-ness is handled first.
_FORMAT_CHECKS: Dict[FieldType, Callable[[Field, AnswerValue], Optional[str]]] = {
    FieldType.TEXT: _no_check,
    FieldType.NUMBER: _check_number,
    FieldType.DATE: _no_check,
    FieldType.CHECKBOX: _no_check,
    FieldType.PLATE_SCAN: _no_check,
    FieldType.IMEI_SCAN: _no_check,
    FieldType.SINGLE_SELECT: _no_check,
    FieldType.MULTI_SELECT: _no_check,
    FieldType.VEHICLE_INFO_SCAN: _no_check,
    FieldType.IMAGE: _no_check,
    FieldType.PRICE_MANUAL: _check_amount,
}
require_all_types(_FORMAT_CHECKS, "validation")


def validate(fields: Iterable[Field], answers: Mapping[str, AnswerValue]) -> List[str]:
    """Return every problem with ``answers`` in field declaration order.

    Each field contributes at most one message. An empty list means the run
    can be submitted.
    """

    errors: List[str] = []
    for field in fields:
        value = answers.get(field.id)
        if not is_present(value):
            if field.required:
                errors.append(f"{field.label} is required.")
            continue
        problem = _FORMAT_CHECKS[field.type](field, value)
        if problem:
            errors.append(problem)

    if errors:
        logger.debug("Validation found %d issue(s)", len(errors))
    return errors
