"""HTTP behaviour of the vehicle image analyzer with a faked transport."""
import json

import pytest
import requests

from checkmaster.ai.client import RESPONSE_SCHEMA, ScanOutcome, VehicleImageAnalyzer, image_payload
from checkmaster.core.errors import ExtractionTransportFailure
from checkmaster.runner.session import ChecklistSession


class FakeResponse:
    def __init__(self, payload=None, status_error=None, body_error=None):
        self.payload = payload
        self.status_error = status_error
        self.body_error = body_error

    def raise_for_status(self):
        if self.status_error:
            raise self.status_error

    def json(self):
        if self.body_error:
            raise self.body_error
        return self.payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def post(self, url, **kwargs):
        self.requests.append((url, kwargs))
        if self.error:
            raise self.error
        return self.response


def _completion(content):
    return {"choices": [{"message": {"content": content}}]}


@pytest.fixture
def live_analyzer(monkeypatch: pytest.MonkeyPatch) -> VehicleImageAnalyzer:
    monkeypatch.setenv("AI_SCAN_DISABLED", "0")
    monkeypatch.setenv("OPENAI_API_KEY", "test-key")
    monkeypatch.setenv("OPENAI_BASE_URL", "https://llm.example.com/v1")
    monkeypatch.setenv("OPENAI_MODEL", "vision-test")
    return VehicleImageAnalyzer()


def test_image_payload_strips_data_uri_header():
    assert image_payload("data:image/png;base64,QUJD") == "QUJD"
    assert image_payload("QUJD") == "QUJD"


def test_disabled_analyzer_returns_none():
    analyzer = VehicleImageAnalyzer()
    assert analyzer.disabled is True
    assert analyzer.analyze("data:image/jpeg;base64,AA") is None


def test_missing_api_key_is_a_transport_failure(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("AI_SCAN_DISABLED", "0")
    with pytest.raises(ExtractionTransportFailure, match="OPENAI_API_KEY"):
        VehicleImageAnalyzer().analyze("AA")


def test_analyze_sends_one_request_and_parses_result(live_analyzer: VehicleImageAnalyzer):
    content = json.dumps({"placa": "ABC-1234", "marca": "Fiat", "modelo": "Uno", "imei": ["35"]})
    session = FakeSession(FakeResponse(_completion(content)))
    live_analyzer.session = session

    result = live_analyzer.analyze("data:image/png;base64,QUJD")

    assert result.placa == "ABC-1234"
    assert result.marca == "Fiat"
    assert result.imei == ["35"]
    assert len(session.requests) == 1
    url, kwargs = session.requests[0]
    assert url == "https://llm.example.com/v1/chat/completions"
    assert kwargs["headers"]["Authorization"] == "Bearer test-key"
    body = kwargs["json"]
    assert body["model"] == "vision-test"
    image_block = body["messages"][0]["content"][0]
    assert image_block["image_url"]["url"] == "data:image/jpeg;base64,QUJD"
    assert body["response_format"]["json_schema"]["schema"] == RESPONSE_SCHEMA
    assert RESPONSE_SCHEMA["required"] == ["placa", "marca", "modelo", "imei"]


def test_empty_content_is_no_extraction(live_analyzer: VehicleImageAnalyzer):
    live_analyzer.session = FakeSession(FakeResponse(_completion("")))
    assert live_analyzer.analyze("AA") is None


def test_network_error_is_wrapped(live_analyzer: VehicleImageAnalyzer):
    live_analyzer.session = FakeSession(error=requests.ConnectionError("down"))
    with pytest.raises(ExtractionTransportFailure, match="request failed"):
        live_analyzer.analyze("AA")


def test_http_error_is_wrapped(live_analyzer: VehicleImageAnalyzer):
    response = FakeResponse(status_error=requests.HTTPError("500 Server Error"))
    live_analyzer.session = FakeSession(response)
    with pytest.raises(ExtractionTransportFailure):
        live_analyzer.analyze("AA")


@pytest.mark.parametrize("content", ["not json", "[1, 2]"])
def test_malformed_content_is_a_failure(live_analyzer: VehicleImageAnalyzer, content):
    live_analyzer.session = FakeSession(FakeResponse(_completion(content)))
    with pytest.raises(ExtractionTransportFailure):
        live_analyzer.analyze("AA")


def test_unexpected_envelope_is_a_failure(live_analyzer: VehicleImageAnalyzer):
    live_analyzer.session = FakeSession(FakeResponse({"error": "nope"}))
    with pytest.raises(ExtractionTransportFailure, match="Unexpected"):
        live_analyzer.analyze("AA")


def test_non_text_content_is_a_failure(live_analyzer: VehicleImageAnalyzer):
    content = [{"type": "text", "text": "{}"}]
    live_analyzer.session = FakeSession(FakeResponse(_completion(content)))
    with pytest.raises(ExtractionTransportFailure, match="must be text"):
        live_analyzer.analyze("AA")


def test_wrongly_shaped_imei_is_a_failure(live_analyzer: VehicleImageAnalyzer):
    content = json.dumps({"placa": "ABC1234", "marca": "Fiat", "modelo": "Uno", "imei": 5})
    live_analyzer.session = FakeSession(FakeResponse(_completion(content)))
    with pytest.raises(ExtractionTransportFailure, match="wrong shape"):
        live_analyzer.analyze("AA")


def test_single_imei_string_is_accepted(live_analyzer: VehicleImageAnalyzer):
    content = json.dumps({"placa": "", "marca": "", "modelo": "", "imei": "3569"})
    live_analyzer.session = FakeSession(FakeResponse(_completion(content)))
    assert live_analyzer.analyze("AA").imei == ["3569"]


@pytest.mark.parametrize(
    "content",
    [
        [{"type": "text", "text": "{}"}],
        json.dumps({"placa": "ABC1234", "marca": "Fiat", "modelo": "Uno", "imei": 5}),
    ],
)
def test_malformed_reply_fails_only_the_capture(live_analyzer: VehicleImageAnalyzer, inspection_template, content):
    live_analyzer.session = FakeSession(FakeResponse(_completion(content)))
    session = ChecklistSession(inspection_template, live_analyzer)
    session.set_answer("owner", "Ana")

    outcome = session.capture("data:image/jpeg;base64,QUJD")

    assert outcome.status == ScanOutcome.FAILED
    assert session.scanning is False
    assert session.answers["owner"] == "Ana"
    assert "plate" not in session.answers
