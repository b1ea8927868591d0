"""AI copy generation (OpenAI compatible SDK).

Responsibility:
- Ask an OpenAI compatible chat model for localized microsite copy.
- Extract and validate the JSON answer as headline/body/call-to-action.
- Assign the layout deterministically (the model never picks layouts).

No retries: a failed call surfaces as `GenerationProviderError` and the
generator records it as a failure for that locale.
"""

from __future__ import annotations

import json
import re
from typing import Any

from openai import AsyncOpenAI, OpenAIError
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from microsite_factory.core.config import AppSettings
from microsite_factory.core.domain.locales import layout_for_locale
from microsite_factory.core.domain.models import ContentVariant
from microsite_factory.core.errors import GenerationProviderError


def build_openai_client(*, api_key: str, base_url: str, timeout: float) -> AsyncOpenAI:
    return AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout)


_JSON_FENCE_RE = re.compile(r"```(?:json)?\s*(\{.*?\})\s*```", re.DOTALL | re.IGNORECASE)


def _extract_json_object(text: str) -> str:
    """Return the first JSON object present in the provider response."""
    match = _JSON_FENCE_RE.search(text)
    if match:
        return match.group(1).strip()

    stripped = text.strip()
    if stripped.startswith("{") and stripped.endswith("}"):
        return stripped

    start = stripped.find("{")
    end = stripped.rfind("}")
    if 0 <= start < end:
        candidate = stripped[start : end + 1]
        try:
            json.loads(candidate)
            return candidate
        except json.JSONDecodeError:
            pass

    raise ValueError("Could not locate a valid JSON object in the AI provider response.")


class _CopyPayload(BaseModel):
    # Whitespace-only copy must fail here, as a per-locale generation failure.
    model_config = ConfigDict(str_strip_whitespace=True)

    headline: str = Field(..., min_length=1, max_length=200)
    body: str = Field(..., min_length=1, max_length=4_000)
    call_to_action: str = Field(..., min_length=1, max_length=80)


def _build_system_prompt() -> str:
    return (
        "ROLE: Senior localization copywriter for campaign microsites.\n"
        "TASK: Write landing-page copy for ONE locale from the campaign core message.\n"
        "RULES:\n"
        "- Write natively in the language of the requested locale (not a literal translation).\n"
        "- Stay faithful to the core message; do not invent offers, prices or claims.\n"
        "- headline: short and punchy. call_to_action: 2-4 words.\n"
        "- body: 2-3 sentences that respect local culture and tone.\n\n"
        "OUTPUT FORMAT (STRICT JSON, no Markdown, no fences):\n"
        "{\n"
        '  "headline": "...",\n'
        '  "body": "...",\n'
        '  "call_to_action": "..."\n'
        "}"
    )


class OpenAIGenerationProvider:
    def __init__(
        self,
        settings: AppSettings,
        *,
        client: Any | None = None,
    ) -> None:
        if client is None:
            if not settings.ai_api_key:
                raise ValueError("OpenAIGenerationProvider needs ai_api_key (or an explicit client)")
            client = build_openai_client(
                api_key=settings.ai_api_key,
                base_url=settings.ai_base_url,
                timeout=settings.ai_timeout_seconds,
            )
        self._client = client
        self._model = settings.ai_model

    async def generate(self, core_message: str, locale: str) -> ContentVariant:
        request_messages = [
            {"role": "system", "content": _build_system_prompt()},
            {
                "role": "user",
                "content": json.dumps(
                    {"locale": locale, "core_message": core_message},
                    ensure_ascii=False,
                ),
            },
        ]

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=request_messages,
                temperature=0.4,
            )
        except OpenAIError as exc:
            raise GenerationProviderError(
                f"AI provider call failed for {locale}: {type(exc).__name__}"
            ) from exc

        content = (response.choices[0].message.content or "").strip()
        try:
            data: Any = json.loads(_extract_json_object(content))
            parsed = _CopyPayload.model_validate(data)
        except (ValueError, ValidationError) as exc:
            raise GenerationProviderError(f"AI provider returned unusable copy for {locale}") from exc

        return ContentVariant(
            locale=locale,
            headline=parsed.headline.strip(),
            body=parsed.body.strip(),
            call_to_action=parsed.call_to_action.strip(),
            layout_id=layout_for_locale(locale),
        )
