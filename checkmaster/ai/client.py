"""Vehicle image analysis backed by an OpenAI-compatible vision model.

One call per capture, no retries. ``analyze`` returns an :class:`AIResult`, or
``None`` when the model produced nothing usable, and raises
:class:`ExtractionTransportFailure` when the request itself fails.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import requests

from checkmaster.core.errors import ExtractionTransportFailure
from checkmaster.core.models import AIResult
from checkmaster.core.utils import get_config_value, load_env_file

logger = logging.getLogger(__name__)
DEFAULT_SECRET_FILE = Path("secrets") / "openai.env"
_AI_ENV_LOADED = False

EXTRACTION_INSTRUCTION = (
    "Atue como um perito veicular. Analise a imagem e extraia rigorosamente os dados "
    "solicitados em formato JSON. Extraia a placa (padrão Mercosul ou antigo), a marca do "
    "veículo, o modelo e qualquer número de IMEI visível em etiquetas de rastreadores. "
    "Se algum campo não for identificado, retorne como string vazia ou array vazio para IMEI. "
    "NÃO inclua nenhuma explicação adicional fora do JSON."
)

RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "placa": {"type": "string", "description": "License plate of the vehicle"},
        "marca": {"type": "string", "description": "Car brand/make"},
        "modelo": {"type": "string", "description": "Car model"},
        "imei": {
            "type": "array",
            "items": {"type": "string"},
            "description": "List of detected IMEIs",
        },
    },
    "required": ["placa", "marca", "modelo", "imei"],
    "additionalProperties": False,
}


def _ensure_ai_env() -> None:
    """Load AI credentials from a local secrets file once per process."""

    global _AI_ENV_LOADED
    if _AI_ENV_LOADED:
        return

    _AI_ENV_LOADED = True
    secret_location = os.getenv("AI_SECRET_FILE")
    path = Path(secret_location).expanduser() if secret_location else DEFAULT_SECRET_FILE
    load_env_file(path)


def image_payload(data_uri: str) -> str:
    """Return the base64 part of a data URI, or the input if it has no header."""

    if "," in data_uri:
        return data_uri.split(",", 1)[1]
    return data_uri


@dataclass(frozen=True)
class ScanOutcome:
    """Result of one capture: ``ok`` with a result, ``empty``, or ``failed``."""

    status: str
    result: Optional[AIResult] = None
    error: Optional[str] = None

    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"

    @classmethod
    def ok(cls, result: AIResult) -> "ScanOutcome":
        return cls(status=cls.OK, result=result)

    @classmethod
    def empty(cls) -> "ScanOutcome":
        return cls(status=cls.EMPTY)

    @classmethod
    def failed(cls, reason: str) -> "ScanOutcome":
        return cls(status=cls.FAILED, error=reason)


class VehicleImageAnalyzer:
    """Extract plate, brand, model and IMEIs from a vehicle photo."""

    def __init__(self) -> None:
        _ensure_ai_env()
        self.api_key = os.getenv("OPENAI_API_KEY")
        self.model = get_config_value("OPENAI_MODEL", "gpt-4o-mini")
        self.base_url = get_config_value("OPENAI_BASE_URL", "https://api.openai.com/v1")
        self.timeout = float(get_config_value("AI_SCAN_TIMEOUT", "30"))
        self.disabled = get_config_value("AI_SCAN_DISABLED", "0") == "1"
        self.session = requests.Session() if self.api_key else None

    def analyze(self, data_uri: str) -> Optional[AIResult]:
        """Send one image to the model and parse its JSON answer."""

        if self.disabled:
            logger.info("AI scanning is disabled; returning no extraction")
            return None
        if not self.session:
            raise ExtractionTransportFailure("OPENAI_API_KEY is not configured")

        try:
            response = self.session.post(
                f"{self.base_url}/chat/completions",
                headers={"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"},
                json=self._payload(data_uri),
                timeout=self.timeout,
            )
            response.raise_for_status()
            content = response.json()["choices"][0]["message"]["content"]
        except requests.RequestException as exc:
            raise ExtractionTransportFailure(f"Image analysis request failed: {exc}") from exc
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise ExtractionTransportFailure(f"Unexpected image analysis response: {exc}") from exc

        return self._parse(content)

    def _payload(self, data_uri: str) -> Dict[str, Any]:
        image_url = f"data:image/jpeg;base64,{image_payload(data_uri)}"
        return {
            "model": self.model,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "image_url", "image_url": {"url": image_url, "detail": "high"}},
                        {"type": "text", "text": EXTRACTION_INSTRUCTION},
                    ],
                }
            ],
            "response_format": {
                "type": "json_schema",
                "json_schema": {"name": "vehicle_extraction", "schema": RESPONSE_SCHEMA, "strict": True},
            },
            "temperature": 0,
        }

    def _parse(self, content: Any) -> Optional[AIResult]:
        if content is None:
            logger.info("Image analysis returned an empty response")
            return None
        if not isinstance(content, str):
            raise ExtractionTransportFailure(
                f"Image analysis content must be text, got {type(content).__name__}"
            )
        if not content.strip():
            logger.info("Image analysis returned an empty response")
            return None
        try:
            payload = json.loads(content)
        except json.JSONDecodeError as exc:
            raise ExtractionTransportFailure("Image analysis response is not valid JSON") from exc
        if not isinstance(payload, dict):
            raise ExtractionTransportFailure("Image analysis response is not a JSON object")
        try:
            return AIResult.from_dict(payload)
        except (ValueError, TypeError) as exc:
            raise ExtractionTransportFailure(f"Image analysis response has the wrong shape: {exc}") from exc
