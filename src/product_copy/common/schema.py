"""Pydantic models and dataclasses for request/response types."""
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_MODEL = "gpt-5"
DEFAULT_TEMPERATURE = 0.5
MIN_TEMPERATURE = 0.0
MAX_TEMPERATURE = 2.0


def normalize_temperature(value: Any) -> float:
    """
    Coerce a raw temperature into the accepted sampling range.

    Non-numeric and non-finite input yields the default; anything else is
    clamped to [0, 2].
    """
    if value is None or isinstance(value, bool):
        return DEFAULT_TEMPERATURE
    try:
        temp = float(value)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_TEMPERATURE
    if not math.isfinite(temp):
        return DEFAULT_TEMPERATURE
    return max(MIN_TEMPERATURE, min(MAX_TEMPERATURE, temp))


class GenerationRequest(BaseModel):
    """Normalized generation request. Construct with :meth:`from_payload`."""

    model_config = ConfigDict(populate_by_name=True)

    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    product_info: str = Field("", alias="productInfo")
    template: str = ""
    extra_prompt: str = Field("", alias="extraPrompt")

    @field_validator("temperature", mode="before")
    @classmethod
    def _clamp_temperature(cls, v: Any) -> float:
        return normalize_temperature(v)

    @field_validator("product_info", "template", "extra_prompt", mode="before")
    @classmethod
    def _as_text(cls, v: Any) -> str:
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)

    @classmethod
    def from_payload(cls, payload: Any, default_model: str = DEFAULT_MODEL) -> "GenerationRequest":
        """Build a request from a decoded JSON body; non-objects count as empty."""
        data = dict(payload) if isinstance(payload, dict) else {}
        model = data.get("model")
        data["model"] = model.strip() if isinstance(model, str) and model.strip() else default_model
        return cls.model_validate(data)

    def missing_fields(self) -> list[str]:
        """Required fields that are absent or blank, in wire-name form."""
        missing = []
        if not self.template.strip():
            missing.append("template")
        if not self.product_info.strip():
            missing.append("productInfo")
        return missing


@dataclass
class GenResponse:
    """Text generation result."""
    text: str
    model: str
    temperature_sent: bool
    latency_ms: int
