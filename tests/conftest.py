"""Pytest configuration to make the local package importable without installation."""
import sys
from pathlib import Path
from typing import List, Optional

import pytest

# Ensure repository root is on sys.path for module resolution
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from checkmaster.core.errors import ExtractionTransportFailure
from checkmaster.core.models import AIResult, Field, FieldType, Option, Template


@pytest.fixture(autouse=True)
def disable_ai(monkeypatch: pytest.MonkeyPatch) -> None:
    """Disable remote model calls during tests to avoid token usage."""

    monkeypatch.setenv("AI_SCAN_DISABLED", "1")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.setenv("AI_SECRET_FILE", str(ROOT / "tests" / "missing.env"))


class FakeAnalyzer:
    """Analyzer stand-in returning queued results or raising queued errors."""

    def __init__(self, *responses) -> None:
        self.responses: List = list(responses)
        self.calls: List[str] = []

    def analyze(self, data_uri: str) -> Optional[AIResult]:
        self.calls.append(data_uri)
        response = self.responses.pop(0) if self.responses else None
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_analyzer_cls():
    return FakeAnalyzer


@pytest.fixture
def inspection_template() -> Template:
    """A template exercising every priced and scanned field type."""

    return Template(
        id="tpl1",
        name="Vistoria Completa",
        description="Instalação de rastreador",
        created_at=1_700_000_000_000,
        fields=[
            Field(id="owner", type=FieldType.TEXT, label="Cliente", required=True),
            Field(id="plate", type=FieldType.PLATE_SCAN, label="Placa"),
            Field(id="vehicle", type=FieldType.VEHICLE_INFO_SCAN, label="Marca / Modelo"),
            Field(id="imei", type=FieldType.IMEI_SCAN, label="IMEI"),
            Field(id="washed", type=FieldType.CHECKBOX, label="Lavagem", price=50),
            Field(
                id="service",
                type=FieldType.SINGLE_SELECT,
                label="Serviço",
                options=[
                    Option(id="inst", label="Instalação", price=120),
                    Option(id="maint", label="Manutenção", price=80),
                ],
            ),
            Field(
                id="extras",
                type=FieldType.MULTI_SELECT,
                label="Adicionais",
                options=[
                    Option(id="relay", label="Relé", price=25),
                    Option(id="siren", label="Sirene", price=40),
                    Option(id="free", label="Brinde"),
                ],
            ),
            Field(id="manual", type=FieldType.PRICE_MANUAL, label="Ajuste"),
            Field(id="photo", type=FieldType.IMAGE, label="Foto"),
        ],
    )
