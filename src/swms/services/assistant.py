"""Lightweight assistant helpers: waste classification, trend forecast and chat."""

from __future__ import annotations

import logging
import math
from datetime import date, timedelta
from typing import Optional

import httpx

from ..config import settings
from ..errors import InvalidInputError

logger = logging.getLogger(__name__)

FALLBACK_REPLY = "Sort waste into wet, dry, and hazardous. Rinse recyclables before disposal."
SYSTEM_PROMPT = "You are an eco assistant helping with proper waste disposal and recycling."


def classify_waste(image_data: Optional[str]) -> dict:
    """Keyword heuristic until a real image model is wired in."""
    if not image_data or not str(image_data).strip():
        raise InvalidInputError("imageData required")
    label = "plastic" if "plastic" in str(image_data).lower() else "mixed_waste"
    return {"label": label, "confidence": 0.62}


def predict_waste_trend(ward: str = "A", today: Optional[date] = None) -> dict:
    """Deterministic seven-day tonnage forecast for a ward."""
    ward = (ward or "A").strip() or "A"
    today = today or date.today()
    offset = (ord(ward[0]) % 3) * 0.3
    forecast = [
        {
            "date": (today + timedelta(days=i + 1)).isoformat(),
            "predicted_tons": round(5 + math.sin(i / 2) * 0.8 + offset, 3),
        }
        for i in range(7)
    ]
    return {"ward": ward, "forecast": forecast}


def chat(message: Optional[str], client: httpx.Client | None = None) -> str:
    """Answer a disposal question via the configured chat-completions endpoint.

    Falls back to a canned tip when no API key is configured or the call fails.
    """
    if not message or not message.strip():
        raise InvalidInputError("message required")
    if not settings.openai_api_key:
        return FALLBACK_REPLY

    owns_client = client is None
    client = client or httpx.Client(timeout=httpx.Timeout(settings.openai_timeout_seconds, connect=10.0))
    try:
        response = client.post(
            f"{settings.openai_base_url.rstrip('/')}/chat/completions",
            headers={"Authorization": f"Bearer {settings.openai_api_key}"},
            json={
                "model": settings.openai_model,
                "messages": [
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": message},
                ],
            },
        )
        response.raise_for_status()
        data = response.json()
        reply = (data.get("choices") or [{}])[0].get("message", {}).get("content")
        return reply or "Sorry, I could not generate a response."
    except (httpx.HTTPError, ValueError, AttributeError, IndexError) as e:
        logger.warning(f"Chat completion failed, using fallback reply: {e}")
        return FALLBACK_REPLY
    finally:
        if owns_client:
            client.close()
