"""Monetary total of a checklist run, derived from the template and answers."""
from __future__ import annotations

from typing import Callable, Dict, Iterable, Mapping

from checkmaster.core.models import AnswerValue, Field, FieldType
from checkmaster.runner.answers import is_present, parse_amount, require_all_types


def _unpriced(field: Field, value: AnswerValue) -> float:
    return 0.0


def _checkbox_price(field: Field, value: AnswerValue) -> float:
    return float(field.price or 0) if value is True else 0.0


def _manual_price(field: Field, value: AnswerValue) -> float:
    return parse_amount(value)


def _single_select_price(field: Field, value: AnswerValue) -> float:
    option = field.option(value) if isinstance(value, str) else None
    return float(option.price or 0) if option else 0.0


def _multi_select_price(field: Field, value: AnswerValue) -> float:
    if not isinstance(value, (list, tuple)):
        return 0.0
    return sum(float(option.price or 0) for option in field.options or [] if option.id in value)


_PRICING: Dict[FieldType, Callable[[Field, AnswerValue], float]] = {
    FieldType.TEXT: _unpriced,
    FieldType.NUMBER: _unpriced,
    FieldType.DATE: _unpriced,
    FieldType.CHECKBOX: _checkbox_price,
    FieldType.PLATE_SCAN: _unpriced,
    FieldType.IMEI_SCAN: _unpriced,
    FieldType.SINGLE_SELECT: _single_select_price,
    FieldType.MULTI_SELECT: _multi_select_price,
    FieldType.VEHICLE_INFO_SCAN: _unpriced,
    FieldType.IMAGE: _unpriced,
    FieldType.PRICE_MANUAL: _manual_price,
}
require_all_types(_PRICING, "valuation")


def field_value(field: Field, answers: Mapping[str, AnswerValue]) -> float:
    """Contribution of a single field to the total."""

    value = answers.get(field.id)
    if not is_present(value):
        return 0.0
    return _PRICING[field.type](field, value)


def compute_total(fields: Iterable[Field], answers: Mapping[str, AnswerValue]) -> float:
    """Sum the price contributions of every answered field, in declaration order.

    Inputs are not clamped: a negative manual price lowers the total.
    """

    total = 0.0
    for field in fields:
        total += field_value(field, answers)
    return total
