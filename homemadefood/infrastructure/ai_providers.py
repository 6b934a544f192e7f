import json
import logging
import re
from typing import List, Optional

import httpx
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from homemadefood.core.config import Settings
from homemadefood.core.exceptions import ExternalProviderError
from homemadefood.domain.meals import (
    MealCandidate,
    MealContext,
    MealPreferences,
    MealSuggestion,
    current_meal_context,
    to_suggestion,
)
from homemadefood.domain.prompts import (
    FREE_TEXT_PROMPT,
    SHORT_SUGGESTION_PROMPT,
    SUGGESTION_PROMPT,
    SYSTEM_PROMPT,
    format_options,
)
from homemadefood.interfaces.IMealSuggestionProvider import IMealSuggestionProvider

logger = logging.getLogger(__name__)

JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def clean_json_response(text: str) -> str:
    """Removes markdown code fences if the model adds them."""
    text = text.strip()
    if text.startswith("```"):
        text = re.sub(r"^```(json)?", "", text)
        text = re.sub(r"```$", "", text)
    return text.strip()


def parse_model_json(text: str) -> dict:
    """Pull the first {...} object out of free-text model output."""
    match = JSON_OBJECT.search(clean_json_response(text))
    if not match:
        raise ValueError("No JSON found in response")
    data = json.loads(match.group(0))
    if not isinstance(data, dict):
        raise ValueError("JSON response is not an object")
    return data


def select_by_name(candidates: List[MealCandidate], name: Optional[str]) -> MealCandidate:
    if name:
        wanted = name.strip().lower()
        for candidate in candidates:
            if candidate.name.lower() == wanted:
                return candidate
    return candidates[0]


def match_item_from_text(candidates: List[MealCandidate], text: str) -> MealCandidate:
    """First candidate mentioned in the text, else the best rated one."""
    lowered = text.lower()
    for candidate in candidates:
        if candidate.name.lower() in lowered:
            return candidate
    return sorted(candidates, key=lambda c: (-c.rating, c.name))[0]


def extract_reason(text: str) -> Optional[str]:
    for line in text.split("\n"):
        lowered = line.lower()
        if "reason" in lowered or "because" in lowered:
            return line.strip()
    sentences = [s.strip() for s in re.split(r"[.!?]", text) if len(s.strip()) > 20]
    return sentences[0] if sentences else None


def suggestion_from_json(candidates: List[MealCandidate], data: dict, context: MealContext,
                         provider: str) -> MealSuggestion:
    name = data.get("selectedMealName")
    reason = data.get("reason")
    if name is not None and not isinstance(name, str):
        raise ValueError(f"selectedMealName must be a string, got {type(name).__name__}")
    if reason is not None and not isinstance(reason, str):
        raise ValueError(f"reason must be a string, got {type(reason).__name__}")

    selected = select_by_name(candidates, name)
    return to_suggestion(selected, reason or f"Perfect {context.meal_time} choice for {context.day_of_week}!", provider)


class ChatModelProvider(IMealSuggestionProvider):
    """Any OpenAI-compatible chat completion API (OpenAI, OpenRouter)."""

    def __init__(self, name: str, api_key: str, model: str, timeout: float,
                 base_url: Optional[str] = None, default_headers: Optional[dict] = None, llm=None):
        self.name = name
        self.llm = llm or ChatOpenAI(
            model=model,
            api_key=api_key,
            base_url=base_url,
            temperature=0.7,
            max_tokens=300,
            timeout=timeout,
            max_retries=0,
            default_headers=default_headers,
        )
        self.timezone = "UTC"

    async def suggest(self, candidates: List[MealCandidate], preferences: Optional[MealPreferences]) -> MealSuggestion:
        context = current_meal_context(self.timezone)
        prompt = SUGGESTION_PROMPT.format(
            day=context.day_of_week,
            meal_time=context.meal_time,
            options=format_options(candidates),
        )
        messages = [
            SystemMessage(content=SYSTEM_PROMPT),
            HumanMessage(content=prompt),
        ]

        try:
            response = await self.llm.ainvoke(messages)
            data = parse_model_json(response.content)
            return suggestion_from_json(candidates, data, context, self.name)
        except Exception as e:
            raise ExternalProviderError(self.name, str(e)) from e


class RestProvider(IMealSuggestionProvider):
    """Provider talking plain JSON over HTTP. An injected client is reused and left open."""

    def __init__(self, timeout: float, client: Optional[httpx.AsyncClient] = None):
        self.timeout = timeout
        self.client = client
        self.timezone = "UTC"

    async def _post(self, url: str, payload: dict, headers: dict) -> httpx.Response:
        client = self.client or httpx.AsyncClient(timeout=self.timeout)
        try:
            r = await client.post(url, json=payload, headers=headers)
            r.raise_for_status()
            return r
        finally:
            if self.client is None:
                await client.aclose()


class AnthropicProvider(RestProvider):
    name = "anthropic"
    API_URL = "https://api.anthropic.com/v1/messages"

    def __init__(self, api_key: str, model: str, timeout: float, client: Optional[httpx.AsyncClient] = None):
        super().__init__(timeout, client)
        self.api_key = api_key
        self.model = model

    async def suggest(self, candidates: List[MealCandidate], preferences: Optional[MealPreferences]) -> MealSuggestion:
        context = current_meal_context(self.timezone)
        prompt = SHORT_SUGGESTION_PROMPT.format(
            day=context.day_of_week,
            meal_time=context.meal_time,
            options=format_options(candidates),
        )
        payload = {
            "model": self.model,
            "max_tokens": 300,
            "messages": [{"role": "user", "content": prompt}],
        }
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": "2023-06-01",
        }

        try:
            r = await self._post(self.API_URL, payload, headers)
            content = r.json().get("content") or [{}]
            data = parse_model_json(content[0].get("text", ""))
            return suggestion_from_json(candidates, data, context, self.name)
        except Exception as e:
            raise ExternalProviderError(self.name, str(e)) from e


class HuggingFaceProvider(RestProvider):
    """Free-tier text generation. The answer is free text, matched against item names."""

    name = "huggingface"

    def __init__(self, model_url: str, timeout: float, api_key: Optional[str] = None,
                 client: Optional[httpx.AsyncClient] = None):
        super().__init__(timeout, client)
        self.model_url = model_url
        self.api_key = api_key

    async def suggest(self, candidates: List[MealCandidate], preferences: Optional[MealPreferences]) -> MealSuggestion:
        context = current_meal_context(self.timezone)
        prompt = FREE_TEXT_PROMPT.format(
            meal_time=context.meal_time,
            day=context.day_of_week,
            names=", ".join(c.name for c in candidates[:10]),
        )
        payload = {
            "inputs": prompt,
            "parameters": {"max_new_tokens": 150, "temperature": 0.8, "return_full_text": False},
        }
        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}

        try:
            # 503 while the model is still loading
            r = await self._post(self.model_url, payload, headers)
            generated = self._generated_text(r.json())
            if not isinstance(generated, str) or not generated.strip():
                raise ValueError("Empty generation")

            selected = match_item_from_text(candidates, generated)
            reason = extract_reason(generated) or f"Perfect {context.meal_time} choice for {context.day_of_week}!"
            return to_suggestion(selected, reason, self.name)
        except Exception as e:
            raise ExternalProviderError(self.name, str(e)) from e

    @staticmethod
    def _generated_text(data) -> str:
        if isinstance(data, list) and data:
            return data[0].get("generated_text") or data[0].get("text") or ""
        if isinstance(data, dict):
            return data.get("generated_text", "")
        return ""


def build_providers(settings: Settings) -> List[IMealSuggestionProvider]:
    """Providers in preference order, each only when configured."""
    timeout = settings.AI_PROVIDER_TIMEOUT_SECONDS
    providers: List[IMealSuggestionProvider] = []

    if settings.OPENROUTER_API_KEY:
        providers.append(ChatModelProvider(
            name="openrouter",
            api_key=settings.OPENROUTER_API_KEY,
            model=settings.OPENROUTER_MODEL,
            base_url=settings.OPENROUTER_BASE_URL,
            timeout=timeout,
            default_headers={
                "HTTP-Referer": settings.APP_URL,
                "X-Title": f"{settings.PROJECT_NAME} AI Meal Suggestions",
            },
        ))
    if settings.OPENAI_API_KEY:
        providers.append(ChatModelProvider(
            name="openai",
            api_key=settings.OPENAI_API_KEY,
            model=settings.OPENAI_MODEL,
            timeout=timeout,
        ))
    if settings.ANTHROPIC_API_KEY:
        providers.append(AnthropicProvider(
            api_key=settings.ANTHROPIC_API_KEY,
            model=settings.ANTHROPIC_MODEL,
            timeout=timeout,
        ))
    if settings.HUGGING_FACE_ENABLED:
        providers.append(HuggingFaceProvider(
            model_url=settings.HUGGING_FACE_MODEL_URL,
            api_key=settings.HUGGING_FACE_API_KEY,
            timeout=timeout,
        ))

    for provider in providers:
        provider.timezone = settings.TIMEZONE

    logger.info(f"✅ Meal suggestion providers: {[p.name for p in providers] or 'none (local heuristic only)'}")
    return providers
