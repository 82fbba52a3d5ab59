from __future__ import annotations

import logging

from product_copy.common.config import Settings
from product_copy.common.schema import GenerationRequest
from product_copy.serve.handler import GenerateHandler, friendly_message
from product_copy.serve.openai_client import ParameterUnsupported, ResponsesClient, UpstreamError

from conftest import FakeClient

REQ = GenerationRequest.from_payload({"template": "t", "productInfo": "p", "temperature": 1.1})


def test_root_temperature_shape() -> None:
    fake = FakeClient()
    handler = GenerateHandler(Settings(openai_api_key="k", temperature_param="root"), client=fake)
    resp = handler.generate(REQ)
    assert resp.temperature_sent
    assert fake.payloads[0]["temperature"] == 1.1
    assert "config" not in fake.payloads[0]


def test_fallback_marks_temperature_not_sent(settings) -> None:
    fake = FakeClient(ParameterUnsupported("unsupported", status=400), "done")
    resp = GenerateHandler(settings, client=fake).generate(REQ)
    assert resp.text == "done"
    assert resp.model == "gpt-5"
    assert not resp.temperature_sent


def test_fallback_failure_propagates(settings) -> None:
    fake = FakeClient(ParameterUnsupported("unsupported", status=400), UpstreamError("down", status=503))
    result = GenerateHandler(settings, client=fake).handle("POST", {"template": "t", "productInfo": "p"})
    assert result.status == 503
    assert fake.calls == 2


def test_configured_default_model() -> None:
    fake = FakeClient()
    handler = GenerateHandler(Settings(openai_api_key="k", default_model="gpt-5-mini"), client=fake)
    handler.handle("post", {"template": "t", "productInfo": "p"})
    assert fake.payloads[0]["model"] == "gpt-5-mini"


def test_default_client_built_from_settings() -> None:
    s = Settings(openai_api_key="k", openai_base_url="https://proxy.test/v1/", request_timeout=30)
    client = GenerateHandler(s).client
    assert isinstance(client, ResponsesClient)
    assert client.base_url == "https://proxy.test/v1"
    assert client.timeout == 30


def test_friendly_bad_request_without_param() -> None:
    msg = friendly_message(UpstreamError("bad", status=400))
    assert "model or temperature" in msg


def test_friendly_passthrough() -> None:
    assert friendly_message(UpstreamError("", status=502)) == "Server error"


def test_upstream_failure_is_logged_without_key(settings, caplog) -> None:
    caplog.set_level(logging.INFO)
    fake = FakeClient(UpstreamError("Incorrect API key provided", status=401, code="invalid_api_key"))
    result = GenerateHandler(settings, client=fake).handle("POST", {"template": "t", "productInfo": "p"})
    assert result.status == 401
    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert any("status=401 code=invalid_api_key" in r.getMessage() for r in errors)
    assert all("sk-test-secret" not in r.getMessage() for r in caplog.records)


def test_rejected_method_is_logged(settings, caplog) -> None:
    caplog.set_level(logging.INFO)
    fake = FakeClient()
    result = GenerateHandler(settings, client=fake).handle("GET", None)
    assert result.status == 405
    assert any("Rejected GET request" in r.getMessage() for r in caplog.records)
    assert fake.calls == 0


def test_success_log_reports_fallback(settings, caplog) -> None:
    caplog.set_level(logging.INFO)
    fake = FakeClient(ParameterUnsupported("unsupported", status=400), "done")
    GenerateHandler(settings, client=fake).handle("POST", {"template": "t", "productInfo": "p"})
    messages = [r.getMessage() for r in caplog.records]
    assert any("model=gpt-5 temperature_sent=False" in m for m in messages)
