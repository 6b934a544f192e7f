import json
from types import SimpleNamespace

import httpx
import pytest

from homemadefood.core.config import Settings
from homemadefood.core.exceptions import ExternalProviderError
from homemadefood.domain.meals import MealCandidate, MealPreferences
from homemadefood.infrastructure.ai_providers import (
    AnthropicProvider,
    ChatModelProvider,
    HuggingFaceProvider,
    build_providers,
    parse_model_json,
)
from homemadefood.infrastructure.recipe_sources import EdamamSource, SpoonacularSource, build_recipe_sources

CANDIDATES = [
    MealCandidate(id="1", name="Chicken Biryani", category="Traditional", price=12.5, rating=4.8),
    MealCandidate(id="2", name="Daal Chawal", category="Traditional", price=7.0, rating=4.1, is_vegan=True),
]


class FakeLLM:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.messages = None

    async def ainvoke(self, messages):
        self.messages = messages
        if self.error:
            raise self.error
        return SimpleNamespace(content=self.content)


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_parse_model_json_strips_fences_and_chatter():
    text = 'Sure!\n```json\n{"selectedMealName": "Daal Chawal", "reason": "Light"}\n```'

    assert parse_model_json(text) == {"selectedMealName": "Daal Chawal", "reason": "Light"}


def test_parse_model_json_without_object():
    with pytest.raises(ValueError):
        parse_model_json("I would pick the biryani")


async def test_chat_provider_matches_selected_name():
    llm = FakeLLM(content='{"selectedMealName": "daal chawal", "reason": "Light and healthy"}')
    provider = ChatModelProvider(name="openrouter", api_key="k", model="m", timeout=5, llm=llm)

    suggestion = await provider.suggest(CANDIDATES, None)

    assert suggestion.meal.id == "2"
    assert suggestion.reason == "Light and healthy"
    assert suggestion.provider == "openrouter"
    assert "Daal Chawal" in llm.messages[1].content


async def test_chat_provider_unknown_name_uses_first_candidate():
    llm = FakeLLM(content='{"selectedMealName": "Pizza"}')
    provider = ChatModelProvider(name="openai", api_key="k", model="m", timeout=5, llm=llm)

    suggestion = await provider.suggest(CANDIDATES, None)

    assert suggestion.meal.id == "1"
    assert suggestion.reason.startswith("Perfect")


@pytest.mark.parametrize("llm", [
    FakeLLM(error=RuntimeError("429 Too Many Requests")),
    FakeLLM(content="no json here"),
])
async def test_chat_provider_failures_are_external_errors(llm):
    provider = ChatModelProvider(name="openai", api_key="k", model="m", timeout=5, llm=llm)

    with pytest.raises(ExternalProviderError) as exc:
        await provider.suggest(CANDIDATES, None)
    assert exc.value.provider == "openai"


async def test_anthropic_provider():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["key"] = request.headers["x-api-key"]
        seen["body"] = json.loads(request.content)
        text = 'Here you go: {"selectedMealName": "Chicken Biryani", "reason": "Monday treat"}'
        return httpx.Response(200, json={"content": [{"type": "text", "text": text}]})

    provider = AnthropicProvider(api_key="secret", model="claude-3-haiku-20240307", timeout=5,
                                 client=mock_client(handler))

    suggestion = await provider.suggest(CANDIDATES, None)

    assert suggestion.meal.name == "Chicken Biryani"
    assert suggestion.provider == "anthropic"
    assert seen["key"] == "secret"
    assert seen["body"]["model"] == "claude-3-haiku-20240307"


async def test_anthropic_http_error():
    provider = AnthropicProvider(api_key="secret", model="m", timeout=5,
                                 client=mock_client(lambda request: httpx.Response(401, json={})))

    with pytest.raises(ExternalProviderError):
        await provider.suggest(CANDIDATES, None)


async def test_huggingface_matches_item_in_text():
    def handler(request):
        return httpx.Response(200, json=[{
            "generated_text": "Go for Daal Chawal.\nReason: it is light enough for a warm afternoon.",
        }])

    provider = HuggingFaceProvider(model_url="https://hf.test/model", timeout=5, client=mock_client(handler))

    suggestion = await provider.suggest(CANDIDATES, None)

    assert suggestion.meal.id == "2"
    assert suggestion.reason == "Reason: it is light enough for a warm afternoon."


async def test_huggingface_without_match_uses_best_rated():
    def handler(request):
        return httpx.Response(200, json={"generated_text": "Honestly anything warm and filling works today"})

    provider = HuggingFaceProvider(model_url="https://hf.test/model", timeout=5, client=mock_client(handler))

    suggestion = await provider.suggest(CANDIDATES, None)

    assert suggestion.meal.id == "1"
    assert suggestion.reason == "Honestly anything warm and filling works today"


async def test_huggingface_model_loading():
    provider = HuggingFaceProvider(model_url="https://hf.test/model", timeout=5,
                                   client=mock_client(lambda request: httpx.Response(503, json={})))

    with pytest.raises(ExternalProviderError):
        await provider.suggest(CANDIDATES, None)


def test_build_providers_order_and_opt_in():
    settings = Settings(
        OPENROUTER_API_KEY="or", OPENAI_API_KEY="oa", ANTHROPIC_API_KEY="an", HUGGING_FACE_ENABLED=True,
        _env_file=None,
    )

    assert [p.name for p in build_providers(settings)] == ["openrouter", "openai", "anthropic", "huggingface"]


def test_build_providers_nothing_configured():
    settings = Settings(
        OPENROUTER_API_KEY=None, OPENAI_API_KEY=None, ANTHROPIC_API_KEY=None, HUGGING_FACE_ENABLED=False,
        _env_file=None,
    )

    assert build_providers(settings) == []


async def test_spoonacular_maps_recipes():
    def handler(request):
        assert request.url.params["diet"] == "vegan"
        assert request.url.params["type"] == "lunch"
        return httpx.Response(200, json={"results": [{
            "id": 42, "title": "Chana Masala", "summary": "<b>Hearty</b> chickpeas",
            "pricePerServing": 250, "spoonacularScore": 90, "vegan": True, "vegetarian": True,
        }]})

    source = SpoonacularSource(api_key="k", timeout=5, client=mock_client(handler))

    [recipe] = await source.search(MealPreferences(dietary_restrictions=["vegan"]), "lunch")

    assert recipe.id == "spoonacular-42"
    assert recipe.description == "Hearty chickpeas"
    assert recipe.price == 2.5
    assert recipe.rating == 4.5
    assert recipe.is_vegan is True
    assert recipe.category == "Lunch"
    assert recipe.source == "spoonacular"


async def test_edamam_maps_hits():
    def handler(request):
        return httpx.Response(200, json={"hits": [{"recipe": {
            "uri": "http://www.edamam.com/ontologies/edamam.owl#recipe_abc123",
            "label": "Vegetable Pulao", "calories": 512.6, "healthLabels": ["Vegetarian"],
        }}]})

    source = EdamamSource(app_id="id", app_key="key", timeout=5, client=mock_client(handler))

    [recipe] = await source.search(None, "dinner")

    assert recipe.id == "edamam-abc123"
    assert recipe.calories == 513
    assert recipe.is_vegetarian is True
    assert recipe.price == 12.0


async def test_recipe_source_errors_are_external_errors():
    source = EdamamSource(app_id="id", app_key="key", timeout=5,
                          client=mock_client(lambda request: httpx.Response(500)))

    with pytest.raises(ExternalProviderError):
        await source.search(None, "dinner")


def test_build_recipe_sources_needs_both_edamam_keys():
    settings = Settings(SPOONACULAR_API_KEY=None, EDAMAM_APP_ID="id", EDAMAM_APP_KEY=None, _env_file=None)

    assert build_recipe_sources(settings) == []


@pytest.mark.parametrize("content", [
    '{"selectedMealName": 42, "reason": "x"}',
    '{"selectedMealName": "Daal Chawal", "reason": ["light", "cheap"]}',
])
async def test_chat_provider_wrong_field_types_are_external_errors(content):
    provider = ChatModelProvider(name="openrouter", api_key="k", model="m", timeout=5, llm=FakeLLM(content=content))

    with pytest.raises(ExternalProviderError):
        await provider.suggest(CANDIDATES, None)


async def test_anthropic_wrong_field_types_are_external_errors():
    def handler(request):
        return httpx.Response(200, json={"content": [{"type": "text", "text": '{"selectedMealName": ["Daal Chawal"]}'}]})

    provider = AnthropicProvider(api_key="secret", model="m", timeout=5, client=mock_client(handler))

    with pytest.raises(ExternalProviderError):
        await provider.suggest(CANDIDATES, None)


async def test_huggingface_non_text_generation_is_external_error():
    provider = HuggingFaceProvider(model_url="https://hf.test/model", timeout=5,
                                   client=mock_client(lambda request: httpx.Response(200, json=[{"generated_text": 7}])))

    with pytest.raises(ExternalProviderError):
        await provider.suggest(CANDIDATES, None)
