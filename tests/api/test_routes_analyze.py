import io
import json

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from prescription_reader.analyzers.base import AnalyzerConfig
from prescription_reader.analyzers.hosted_analyzer import PrescriptionAnalyzer, TranscriptionAnalyzer
from prescription_reader.analyzers.transport_mock import MockTransport
from prescription_reader.api.routes_analyze import get_image_analyzer
from prescription_reader.main import app


def _make_png_bytes(w: int = 64, h: int = 32) -> bytes:
    img = Image.new("RGB", (w, h), color=(255, 255, 255))
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


class _FailingTransport:
    model_name = "failing-model"

    async def generate(self, request):
        raise ConnectionError("upstream said: secret internal detail")


@pytest.fixture
def use_analyzer():
    def _install(analyzer):
        app.dependency_overrides[get_image_analyzer] = lambda: analyzer
        return TestClient(app)

    yield _install
    app.dependency_overrides.clear()


def _post_png(client: TestClient, rid: str):
    files = {"file": ("rx.png", _make_png_bytes(), "image/png")}
    return client.post("/analyze/image", files=files, headers={"X-Request-Id": rid})


def test_structured_prescription_response(use_analyzer):
    reply = json.dumps(
        {
            "patientName": "Jane Doe",
            "medicines": [{"name": "Amoxicillin", "dosage": "500mg", "frequency": "twice daily",
                           "quantity": "20", "notes": None}],
            "otherInfo": None,
        }
    )
    client = use_analyzer(PrescriptionAnalyzer(AnalyzerConfig(api_key="k"), transport=MockTransport(reply=reply)))

    resp = _post_png(client, "rx-1")

    assert resp.status_code == 200, resp.text
    assert resp.headers.get("X-Request-Id") == "rx-1"
    body = resp.json()
    assert body["mode"] == "structured"
    assert body["result"] == json.loads(reply)
    assert body["view"]["kind"] == "prescription"
    assert body["view"]["medicines"][0]["title"] == "Amoxicillin"
    assert body["details"]["model"]["name"] == "mock-model"
    assert body["details"]["meta"]["media_type"] == "image/png"


def test_structured_non_prescription_response(use_analyzer):
    reply = '{"patientName":"","medicines":[],"otherInfo":"A landscape photo."}'
    client = use_analyzer(PrescriptionAnalyzer(AnalyzerConfig(api_key="k"), transport=MockTransport(reply=reply)))

    body = _post_png(client, "rx-2").json()

    assert body["result"]["medicines"] == []
    assert body["view"] == {"kind": "description", "title": "Image Description", "text": "A landscape photo."}


def test_text_response_is_raw_model_text(use_analyzer):
    raw = "  Amoxicillin 500mg\ntwice daily  \n"
    client = use_analyzer(TranscriptionAnalyzer(AnalyzerConfig(api_key="k"), transport=MockTransport(reply=raw)))

    body = _post_png(client, "rx-3").json()

    assert body["mode"] == "text"
    assert body["result"] == raw
    assert body["view"]["text"] == raw


def test_missing_key_maps_to_configuration_error(use_analyzer):
    transport = MockTransport()
    client = use_analyzer(TranscriptionAnalyzer(AnalyzerConfig(api_key=None), transport=transport))

    resp = _post_png(client, "rx-4")

    assert resp.status_code == 500
    assert resp.json()["error"] == {
        "code": "configuration_error",
        "message": "API key is not configured.",
        "request_id": "rx-4",
    }
    assert transport.call_count == 0


def test_model_failure_maps_to_502_without_detail(use_analyzer):
    client = use_analyzer(PrescriptionAnalyzer(AnalyzerConfig(api_key="k"), transport=_FailingTransport()))

    resp = _post_png(client, "rx-5")

    assert resp.status_code == 502
    err = resp.json()["error"]
    assert err["code"] == "model_call_failed"
    assert err["message"] == "Failed to get a response from the AI model."
    assert "secret" not in resp.text


def test_bad_json_maps_to_invalid_model_output(use_analyzer):
    client = use_analyzer(
        PrescriptionAnalyzer(AnalyzerConfig(api_key="k"), transport=MockTransport(reply='{"patientName":'))
    )

    resp = _post_png(client, "rx-6")

    assert resp.status_code == 502
    assert resp.json()["error"]["code"] == "invalid_model_output"


def test_unsupported_file_type_returns_400(use_analyzer):
    transport = MockTransport()
    client = use_analyzer(TranscriptionAnalyzer(AnalyzerConfig(api_key="k"), transport=transport))

    files = {"file": ("x.txt", b"hello", "text/plain")}
    resp = client.post("/analyze/image", files=files, headers={"X-Request-Id": "rx-7"})

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "unsupported_file_type"
    assert resp.json()["error"]["request_id"] == "rx-7"
    assert transport.call_count == 0


def test_missing_file_returns_validation_error(use_analyzer):
    client = use_analyzer(TranscriptionAnalyzer(AnalyzerConfig(api_key="k"), transport=MockTransport()))

    resp = client.post("/analyze/image", data={"other": "x"}, headers={"X-Request-Id": "rx-8"})

    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "validation_error"
    assert resp.headers.get("X-Request-Id") == "rx-8"
