"""Data models for checklist templates, answers and priced submissions."""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class FieldType(str, Enum):
    """Closed vocabulary of field types.

    Values are the tags stored in the persisted JSON. The scan types use the
    legacy ``*_IA`` / ``VEHICLE_INFO`` tags so existing stores load unchanged.
    """

    TEXT = "TEXT"
    NUMBER = "NUMBER"
    DATE = "DATE"
    CHECKBOX = "CHECKBOX"
    PLATE_SCAN = "PLATE_IA"
    IMEI_SCAN = "IMEI_IA"
    SINGLE_SELECT = "SINGLE_SELECT"
    MULTI_SELECT = "MULTI_SELECT"
    VEHICLE_INFO_SCAN = "VEHICLE_INFO"
    IMAGE = "IMAGE"
    PRICE_MANUAL = "PRICE_MANUAL"

    @property
    def is_select(self) -> bool:
        return self in SELECT_TYPES


SELECT_TYPES = frozenset({FieldType.SINGLE_SELECT, FieldType.MULTI_SELECT})

# Reserved answer key holding the first image captured during a run.
THUMBNAIL_KEY = "thumbnail"

AnswerValue = Union[str, bool, List[str], None]
AnswerMap = Dict[str, AnswerValue]


@dataclass
class Option:
    """One priced choice of a select field."""

    id: str
    label: str
    price: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "label": self.label, "price": self.price}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Option":
        return cls(id=data["id"], label=data.get("label", ""), price=data.get("price") or 0)


@dataclass
class Field:
    """One question of a template.

    ``options`` is a list exactly when the type is a select type, so callers
    can treat "has options" as "is a select field". ``price`` only matters for
    checkboxes.
    """

    id: str
    type: FieldType
    label: str
    required: bool = False
    price: Optional[float] = None
    options: Optional[List[Option]] = None

    def __post_init__(self) -> None:
        self.type = FieldType(self.type)
        if self.type.is_select:
            if self.options is None:
                self.options = []
        else:
            self.options = None

    def option(self, option_id: str) -> Optional[Option]:
        """Return the option with ``option_id`` or ``None``."""
        for option in self.options or []:
            if option.id == option_id:
                return option
        return None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "type": self.type.value,
            "label": self.label,
            "required": self.required,
        }
        if self.price is not None:
            data["price"] = self.price
        if self.options is not None:
            data["options"] = [option.to_dict() for option in self.options]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Field":
        raw_options = data.get("options")
        return cls(
            id=data["id"],
            type=FieldType(data["type"]),
            label=data.get("label", ""),
            required=bool(data.get("required", False)),
            price=data.get("price"),
            options=[Option.from_dict(item) for item in raw_options] if raw_options is not None else None,
        )


@dataclass
class Template:
    """A named, reusable inspection form."""

    id: str
    name: str
    description: str = ""
    fields: List[Field] = field(default_factory=list)
    created_at: int = 0

    def field_by_id(self, field_id: str) -> Optional[Field]:
        for item in self.fields:
            if item.id == field_id:
                return item
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "fields": [item.to_dict() for item in self.fields],
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Template":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            description=data.get("description", ""),
            fields=[Field.from_dict(item) for item in data.get("fields", [])],
            created_at=int(data.get("createdAt", 0)),
        )


@dataclass(frozen=True)
class Submission:
    """A completed, priced checklist run. Never modified after creation."""

    id: str
    template_id: str
    template_name: str
    data: AnswerMap
    total_value: float
    date: int
    thumbnail: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "templateId": self.template_id,
            "templateName": self.template_name,
            "data": copy.deepcopy(self.data),
            "totalValue": self.total_value,
            "date": self.date,
        }
        if self.thumbnail is not None:
            payload["thumbnail"] = self.thumbnail
        return payload

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Submission":
        return cls(
            id=data["id"],
            template_id=data.get("templateId", ""),
            template_name=data.get("templateName", ""),
            data=dict(data.get("data") or {}),
            total_value=data.get("totalValue") or 0,
            date=int(data.get("date", 0)),
            thumbnail=data.get("thumbnail"),
        )


@dataclass
class AIResult:
    """Best-effort extraction returned by the image analysis service.

    Every attribute may be missing or empty; nothing here is trusted.
    """

    placa: Optional[str] = None
    marca: Optional[str] = None
    modelo: Optional[str] = None
    imei: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AIResult":
        """Build a result from decoded model output.

        Raises ``ValueError`` when ``imei`` is neither a list nor a string.
        """
        raw_imei = data.get("imei") or []
        if isinstance(raw_imei, str):
            raw_imei = [raw_imei]
        elif not isinstance(raw_imei, (list, tuple)):
            raise ValueError(f"imei must be a list of strings, got {type(raw_imei).__name__}")
        return cls(
            placa=_optional_text(data.get("placa")),
            marca=_optional_text(data.get("marca")),
            modelo=_optional_text(data.get("modelo")),
            imei=[str(item) for item in raw_imei if item is not None],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "placa": self.placa or "",
            "marca": self.marca or "",
            "modelo": self.modelo or "",
            "imei": list(self.imei),
        }


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)
