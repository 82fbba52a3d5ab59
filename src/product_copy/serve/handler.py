"""Request handler for product copy generation.

Framework-agnostic: takes an HTTP method and a decoded JSON body and returns a
:class:`HandlerResult`. The FastAPI app and the local CLI both go through it.
"""
from __future__ import annotations
import logging
import time
from dataclasses import dataclass, field
from typing import Any

from product_copy.common.config import Settings
from product_copy.common.schema import GenerationRequest, GenResponse
from product_copy.common.templates import PromptDocument, build_prompt
from product_copy.serve.openai_client import ParameterUnsupported, ResponsesClient, UpstreamError

LOGGER = logging.getLogger("product_copy.serve.handler")

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"


@dataclass
class HandlerResult:
    status: int
    body: Any
    content_type: str = JSON_CONTENT_TYPE
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def is_json(self) -> bool:
        return self.content_type == JSON_CONTENT_TYPE


def friendly_message(err: UpstreamError) -> str:
    """Map an upstream error to a message for the caller; never includes the key."""
    if err.status == 401:
        return (
            "The generation service rejected the credentials (401). "
            "Check that OPENAI_API_KEY on the server is valid and active."
        )
    if err.status == 429:
        return (
            "Rate limit or quota exceeded (429). "
            "Check the billing and quota of the OpenAI account, or retry later."
        )
    if err.status == 400:
        field_hint = f"'{err.param}'" if err.param else "model or temperature"
        return f"The generation service rejected the request (400). Check the {field_hint} field: {err.message}"
    return err.message or "Server error"


class GenerateHandler:
    """
    Validate a request, build the prompt and call the generation service.

    Args:
        settings: Resolved runtime settings (API key, default model, language).
        client: Object with ``create(payload) -> str``; defaults to a
            :class:`ResponsesClient` built from ``settings``.
    """

    def __init__(self, settings: Settings, client: Any | None = None) -> None:
        self.settings = settings
        self.client = client or ResponsesClient(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            timeout=settings.request_timeout,
        )

    def handle(self, method: str, payload: Any) -> HandlerResult:
        if method.upper() != "POST":
            LOGGER.info("Rejected %s request; only POST is allowed", method.upper())
            return HandlerResult(405, "Method Not Allowed", TEXT_CONTENT_TYPE, {"Allow": "POST"})

        if not self.settings.has_api_key:
            LOGGER.error("OPENAI_API_KEY is not configured")
            return HandlerResult(500, "Missing API key on server", TEXT_CONTENT_TYPE)

        req = GenerationRequest.from_payload(payload, default_model=self.settings.default_model)
        missing = req.missing_fields()
        if missing:
            LOGGER.info("Rejected request, missing fields: %s", ", ".join(missing))
            return HandlerResult(400, {"error": f"Missing required field(s): {', '.join(missing)}"})

        try:
            resp = self.generate(req)
        except UpstreamError as e:
            LOGGER.error("Generation failed: status=%s code=%s message=%s", e.status, e.code, e.message)
            return HandlerResult(e.status or 500, {"error": friendly_message(e)})
        except Exception as e:
            LOGGER.exception("Unexpected error during generation")
            return HandlerResult(500, {"error": str(e) or "Server error"})

        LOGGER.info(
            "Generated %d chars with model=%s temperature_sent=%s in %sms",
            len(resp.text),
            resp.model,
            resp.temperature_sent,
            resp.latency_ms,
        )
        return HandlerResult(200, {"text": resp.text})

    def generate(self, req: GenerationRequest) -> GenResponse:
        """
        Call the generation service, retrying once without temperature when
        the service rejects the parameter.
        """
        prompt = build_prompt(req.template, req.product_info, req.extra_prompt, self.settings.language)
        start = time.time()
        try:
            text = self.client.create(self.build_payload(req, prompt, with_temperature=True))
            temperature_sent = True
        except ParameterUnsupported as e:
            LOGGER.warning(
                "Model %s rejected a parameter (status=%s param=%s); retrying without temperature",
                req.model,
                e.status,
                e.param,
            )
            text = self.client.create(self.build_payload(req, prompt, with_temperature=False))
            temperature_sent = False
        latency_ms = int((time.time() - start) * 1000)
        return GenResponse(
            text=text or "",
            model=req.model,
            temperature_sent=temperature_sent,
            latency_ms=latency_ms,
        )

    def build_payload(self, req: GenerationRequest, prompt: PromptDocument, with_temperature: bool) -> dict[str, Any]:
        payload: dict[str, Any] = {"model": req.model, "input": prompt.messages()}
        if with_temperature:
            if self.settings.temperature_param == "root":
                payload["temperature"] = req.temperature
            else:
                payload["config"] = {"temperature": req.temperature}
        return payload
