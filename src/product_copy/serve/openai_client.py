"""Thin httpx client for the OpenAI Responses API.

Upstream failures are raised as :class:`UpstreamError`; the ones that look
like a rejected sampling parameter are raised as :class:`ParameterUnsupported`
so callers can decide on a fallback without inspecting message text.
"""
from __future__ import annotations
import logging
from typing import Any

import httpx

LOGGER = logging.getLogger("product_copy.serve.openai")

PARAMETER_HINTS = ("unsupported", "parameter", "temperature")
# Statuses whose messages are never treated as parameter errors.
NON_PARAMETER_STATUSES = (401, 403, 429)


class UpstreamError(Exception):
    """Error returned by (or while reaching) the generation service."""

    def __init__(
        self,
        message: str,
        status: int | None = None,
        code: str | None = None,
        param: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.param = param


class ParameterUnsupported(UpstreamError):
    """The service rejected a request parameter (typically temperature)."""


def is_parameter_error(status: int | None, message: str) -> bool:
    if status == 400:
        return True
    if status in NON_PARAMETER_STATUSES or (status is not None and status >= 500):
        return False
    lowered = (message or "").lower()
    return any(hint in lowered for hint in PARAMETER_HINTS)


def classify_error(
    message: str,
    status: int | None = None,
    code: str | None = None,
    param: str | None = None,
) -> UpstreamError:
    cls = ParameterUnsupported if is_parameter_error(status, message) else UpstreamError
    return cls(message, status=status, code=code, param=param)


def _error_from_response(r: httpx.Response) -> UpstreamError:
    code = param = None
    message = ""
    try:
        err = r.json().get("error") or {}
        if isinstance(err, dict):
            message = err.get("message") or ""
            code = err.get("code") or err.get("type")
            param = err.get("param")
        elif isinstance(err, str):
            message = err
    except (ValueError, AttributeError):
        pass
    if not message:
        message = (r.text or "").strip()[:500] or f"HTTP {r.status_code}"
    return classify_error(message, status=r.status_code, code=code, param=param)


def extract_text(data: dict[str, Any]) -> str:
    """Pull the generated text out of a Responses API payload; missing -> ""."""
    text = data.get("output_text")
    if isinstance(text, str):
        return text
    parts: list[str] = []
    for item in data.get("output") or []:
        if not isinstance(item, dict):
            continue
        for content in item.get("content") or []:
            if isinstance(content, dict) and content.get("type") == "output_text":
                parts.append(content.get("text") or "")
    return "".join(parts)


class ResponsesClient:
    """Calls ``POST {base_url}/responses``."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 120.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def create(self, payload: dict[str, Any]) -> str:
        """
        Send one generation request.

        Args:
            payload: Request body (model, input, optional sampling settings).

        Returns:
            The generated text, or "" when the response carries none.

        Raises:
            ParameterUnsupported: The service rejected a parameter.
            UpstreamError: Any other upstream or transport failure.
        """
        url = f"{self.base_url}/responses"
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                r = client.post(url, headers=headers, json=payload)
        except httpx.HTTPError as e:
            LOGGER.error("Generation request failed: %s", e)
            raise UpstreamError(f"Upstream unreachable: {e}") from e

        if r.status_code >= 400:
            raise _error_from_response(r)

        try:
            data = r.json()
        except ValueError as e:
            raise UpstreamError("Malformed response from generation service") from e
        if not isinstance(data, dict):
            return ""
        return extract_text(data)
