"""Answer-map helpers shared by the runner engines.

Each engine keeps one rule table keyed by :class:`FieldType`;
:func:`require_all_types` makes a missing entry fail at import time, so a new
field type has to be handled in every engine before the package loads.
"""
from __future__ import annotations

import math
import re
from typing import Any, Callable, Dict, Mapping

from checkmaster.core.errors import AnswerTypeError
from checkmaster.core.models import AnswerValue, Field, FieldType

# Plain ASCII decimal with optional sign and exponent. Rejects "1_000" and
# non-ASCII digits, which float() would otherwise accept.
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def require_all_types(table: Mapping[FieldType, Any], engine: str) -> None:
    """Raise if ``table`` lacks a rule for any field type."""

    missing = [member.value for member in FieldType if member not in table]
    if missing:
        raise RuntimeError(f"{engine} has no rule for field types: {', '.join(missing)}")


def is_present(value: AnswerValue) -> bool:
    """Return whether an answer counts as given.

    ``None``, the empty string and ``False`` are all "unanswered", which means
    an explicitly unchecked checkbox is indistinguishable from an untouched
    one. An empty selection list still counts as present.
    """

    if value is None or value is False:
        return False
    if isinstance(value, str) and value == "":
        return False
    return True


def parse_amount(value: Any) -> float:
    """Coerce a typed-in number to a float, treating anything unusable as 0."""

    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not _DECIMAL.fullmatch(text):
            return 0.0
        number = float(text)
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def is_number(value: Any) -> bool:
    """Return whether ``value`` parses as a finite number."""

    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    if not isinstance(value, str):
        return False
    text = value.strip()
    return bool(_DECIMAL.fullmatch(text)) and math.isfinite(float(text))


def _text(field: Field, value: AnswerValue) -> AnswerValue:
    if not isinstance(value, str):
        raise AnswerTypeError(f"{field.label} expects text, got {type(value).__name__}")
    return value


def _checkbox(field: Field, value: AnswerValue) -> AnswerValue:
    if not isinstance(value, bool):
        raise AnswerTypeError(f"{field.label} expects true or false")
    return value


def _single(field: Field, value: AnswerValue) -> AnswerValue:
    if value is None or value == "":
        return value
    if not isinstance(value, str) or field.option(value) is None:
        raise AnswerTypeError(f"{field.label} has no option {value!r}")
    return value


def _multi(field: Field, value: AnswerValue) -> AnswerValue:
    if not isinstance(value, (list, tuple)):
        raise AnswerTypeError(f"{field.label} expects a list of option ids")
    selected = []
    for option_id in value:
        if not isinstance(option_id, str) or field.option(option_id) is None:
            raise AnswerTypeError(f"{field.label} has no option {option_id!r}")
        if option_id not in selected:
            selected.append(option_id)
    return selected


def _image(field: Field, value: AnswerValue) -> AnswerValue:
    if value is not None and not isinstance(value, str):
        raise AnswerTypeError(f"{field.label} expects an image data URI or nothing")
    return value


_SHAPES: Dict[FieldType, Callable[[Field, AnswerValue], AnswerValue]] = {
    FieldType.TEXT: _text,
    FieldType.NUMBER: _text,
    FieldType.DATE: _text,
    FieldType.CHECKBOX: _checkbox,
    FieldType.PLATE_SCAN: _text,
    FieldType.IMEI_SCAN: _text,
    FieldType.SINGLE_SELECT: _single,
    FieldType.MULTI_SELECT: _multi,
    FieldType.VEHICLE_INFO_SCAN: _text,
    FieldType.IMAGE: _image,
    FieldType.PRICE_MANUAL: _text,
}
require_all_types(_SHAPES, "answer shapes")


def coerce_answer(field: Field, value: AnswerValue) -> AnswerValue:
    """Check ``value`` against the shape ``field.type`` expects.

    Returns the value to store (multi-select lists are de-duplicated copies).
    Raises :class:`AnswerTypeError` on a mismatch.
    """

    return _SHAPES[field.type](field, value)
