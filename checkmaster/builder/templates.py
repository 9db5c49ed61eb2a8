"""Template builder operations and the template collection edits behind them.

Every helper returns new lists and objects; the inputs are never mutated, so a
builder screen can keep the previous state for cancel/undo.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional

from checkmaster.core.errors import TemplateError
from checkmaster.core.models import Field, FieldType, Option, Template
from checkmaster.core.utils import new_id, now_ms

FIELD_LABELS: Dict[FieldType, str] = {
    FieldType.TEXT: "Texto Simples",
    FieldType.NUMBER: "Número",
    FieldType.DATE: "Data",
    FieldType.CHECKBOX: "Caixa de Seleção",
    FieldType.PLATE_SCAN: "Placa (Scanner IA)",
    FieldType.IMEI_SCAN: "IMEI (Scanner IA)",
    FieldType.SINGLE_SELECT: "Seleção Única (+ Preço)",
    FieldType.MULTI_SELECT: "Seleção Múltipla (+ Preços)",
    FieldType.VEHICLE_INFO_SCAN: "Marca / Modelo (IA)",
    FieldType.IMAGE: "Captura de Imagem",
    FieldType.PRICE_MANUAL: "Preço Manual",
}

DEFAULT_OPTION_LABEL = "Nova Opção"


def new_field(field_type: FieldType, label: Optional[str] = None, required: bool = False) -> Field:
    """Create a field with a fresh id and the default label for its type."""

    field_type = FieldType(field_type)
    return Field(
        id=new_id(),
        type=field_type,
        label=label if label is not None else FIELD_LABELS[field_type],
        required=required,
    )


def _locate(fields: List[Field], field_id: str) -> int:
    for index, field in enumerate(fields):
        if field.id == field_id:
            return index
    raise TemplateError(f"Unknown field {field_id!r}")


def add_field(fields: Iterable[Field], field_type: FieldType) -> List[Field]:
    return [*fields, new_field(field_type)]


def update_field(fields: Iterable[Field], field_id: str, **changes: Any) -> List[Field]:
    """Return ``fields`` with ``changes`` applied to one field. Ids are fixed."""

    if "id" in changes:
        raise TemplateError("Field ids cannot be changed")
    updated = list(fields)
    index = _locate(updated, field_id)
    updated[index] = replace(updated[index], **changes)
    return updated


def remove_field(fields: Iterable[Field], field_id: str) -> List[Field]:
    remaining = list(fields)
    del remaining[_locate(remaining, field_id)]
    return remaining


def move_field(fields: Iterable[Field], field_id: str, offset: int) -> List[Field]:
    """Move a field ``offset`` positions, clamped to the ends of the list."""

    ordered = list(fields)
    index = _locate(ordered, field_id)
    field = ordered.pop(index)
    target = max(0, min(len(ordered), index + offset))
    ordered.insert(target, field)
    return ordered


def _with_options(fields: Iterable[Field], field_id: str, options_fn) -> List[Field]:
    updated = list(fields)
    index = _locate(updated, field_id)
    field = updated[index]
    if field.options is None:
        raise TemplateError(f"{field.label} does not take options")
    updated[index] = replace(field, options=options_fn(list(field.options)))
    return updated


def add_option(fields: Iterable[Field], field_id: str, label: str = DEFAULT_OPTION_LABEL, price: float = 0) -> List[Field]:
    return _with_options(fields, field_id, lambda options: [*options, Option(id=new_id(), label=label, price=price)])


def update_option(fields: Iterable[Field], field_id: str, option_id: str, **changes: Any) -> List[Field]:
    if "id" in changes:
        raise TemplateError("Option ids cannot be changed")

    def _apply(options: List[Option]) -> List[Option]:
        if not any(option.id == option_id for option in options):
            raise TemplateError(f"Unknown option {option_id!r}")
        return [replace(option, **changes) if option.id == option_id else option for option in options]

    return _with_options(fields, field_id, _apply)


def remove_option(fields: Iterable[Field], field_id: str, option_id: str) -> List[Field]:
    return _with_options(
        fields, field_id, lambda options: [option for option in options if option.id != option_id]
    )


def save_template(
    name: str,
    description: str,
    fields: Iterable[Field],
    existing: Optional[Template] = None,
) -> Template:
    """Build the template to store; editing keeps the existing id."""

    if not name or not name.strip():
        raise TemplateError("Template name is required")
    return Template(
        id=existing.id if existing else new_id(),
        name=name,
        description=description,
        fields=list(fields),
        created_at=now_ms(),
    )


def upsert_template(templates: Iterable[Template], template: Template) -> List[Template]:
    """Replace the template with the same id, or append it."""

    collection = list(templates)
    for index, current in enumerate(collection):
        if current.id == template.id:
            collection[index] = template
            return collection
    collection.append(template)
    return collection


def delete_template(templates: Iterable[Template], template_id: str) -> List[Template]:
    """Drop a template. Submissions made from it stay in the history."""

    return [template for template in templates if template.id != template_id]
