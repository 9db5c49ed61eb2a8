"""Merge an image-analysis extraction into the answers of a running checklist."""
from __future__ import annotations

import re
from typing import Callable, Dict, Iterable, Mapping, Optional

from checkmaster.core.models import AIResult, AnswerMap, AnswerValue, Field, FieldType
from checkmaster.runner.answers import require_all_types

_PLATE_NOISE = re.compile(r"[^A-Z0-9]")

# A rule returns the value to write, or None to leave the field alone.
_Rule = Callable[[AIResult], Optional[str]]


def normalize_plate(raw: str) -> str:
    """Uppercase a plate and drop everything but letters and digits.

    Covers both the legacy ``ABC-1234`` and the Mercosul ``ABC1D23`` layouts.
    """

    return _PLATE_NOISE.sub("", raw.upper())


def _plate(result: AIResult) -> Optional[str]:
    if not result.placa:
        return None
    return normalize_plate(result.placa)


def _vehicle_info(result: AIResult) -> Optional[str]:
    return f"{result.marca or ''} {result.modelo or ''}".strip()


def _imei(result: AIResult) -> Optional[str]:
    # Only the first IMEI is kept.
    if not result.imei:
        return None
    return result.imei[0]


def _untouched(result: AIResult) -> Optional[str]:
    return None


_MERGE_RULES: Dict[FieldType, _Rule] = {
    FieldType.TEXT: _untouched,
    FieldType.NUMBER: _untouched,
    FieldType.DATE: _untouched,
    FieldType.CHECKBOX: _untouched,
    FieldType.PLATE_SCAN: _plate,
    FieldType.IMEI_SCAN: _imei,
    FieldType.SINGLE_SELECT: _untouched,
    FieldType.MULTI_SELECT: _untouched,
    FieldType.VEHICLE_INFO_SCAN: _vehicle_info,
    FieldType.IMAGE: _untouched,
    FieldType.PRICE_MANUAL: _untouched,
}
require_all_types(_MERGE_RULES, "extraction merge")


def apply_extraction(
    fields: Iterable[Field],
    current_answers: Mapping[str, AnswerValue],
    result: AIResult,
) -> AnswerMap:
    """Return a new answer map with ``result`` written into the scan fields.

    The extraction always wins over what the user typed. ``current_answers``
    is left untouched.
    """

    merged: AnswerMap = dict(current_answers)
    for field in fields:
        value = _MERGE_RULES[field.type](result)
        if value is not None:
            merged[field.id] = value
    return merged
