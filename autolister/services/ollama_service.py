import json
import logging
import os
import re
from dataclasses import dataclass, field
from typing import Any, Callable

from openai import APIError, AsyncOpenAI
from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from autolister.config import settings
from autolister.schemas.vision import VisionAnalysisResult

logger = logging.getLogger(__name__)

PROMPT_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), "prompts", "vehicle_analysis.txt")

STRUCTURED_CONFIDENCE = 85
TEXT_PATTERN_CONFIDENCE = 60
DEFAULT_CONFIDENCE = 50

_JSON_SPAN = re.compile(r"\{.*\}", re.DOTALL)
_LICENSE_PLATE = re.compile(r"license plate[:\s]+([A-Z0-9\-\s]+)", re.IGNORECASE)
_DAMAGE = re.compile(r"damage[:\s]+([^.\n]+)", re.IGNORECASE)
_INTERIOR = re.compile(r"interior[:\s]+(excellent|good|fair|poor)", re.IGNORECASE)
_EXTERIOR = re.compile(r"exterior[:\s]+(excellent|good|fair|poor)", re.IGNORECASE)

_TEXT_FIELDS = ("license_plate", "damage", "interior", "exterior")
_RESERVED_KEYS = {"confidence", "extractedText", "extracted_text", "rawResponse", "raw_response"}


class OllamaError(Exception):
    """The inference endpoint was unreachable or answered with an error."""


@dataclass
class Extraction:
    confidence: int
    fields: dict[str, Any] = field(default_factory=dict)


ExtractionStrategy = Callable[[str], Extraction | None]


def _load_prompt() -> str:
    with open(PROMPT_PATH) as f:
        return f.read()


def extract_from_json_span(text: str) -> Extraction | None:
    """Parse the widest ``{...}`` span. Returns None when it is not valid JSON."""
    match = _JSON_SPAN.search(text)
    if not match:
        return Extraction(confidence=DEFAULT_CONFIDENCE)
    try:
        parsed = json.loads(match.group(0))
    except ValueError:
        logger.warning("Could not parse JSON from Ollama response, using text analysis")
        return None
    if not isinstance(parsed, dict):
        return None
    return Extraction(confidence=STRUCTURED_CONFIDENCE, fields=parsed)


def extract_from_text_patterns(text: str) -> Extraction:
    fields: dict[str, Any] = {}

    plate = _LICENSE_PLATE.search(text)
    if plate:
        fields["licensePlate"] = plate.group(1).strip()

    damage = _DAMAGE.search(text)
    if damage:
        fields["damage"] = damage.group(1).strip()

    interior = _INTERIOR.search(text)
    if interior:
        fields["interior"] = interior.group(1).lower()

    exterior = _EXTERIOR.search(text)
    if exterior:
        fields["exterior"] = exterior.group(1).lower()

    return Extraction(confidence=TEXT_PATTERN_CONFIDENCE, fields=fields)


EXTRACTION_STRATEGIES: tuple[ExtractionStrategy, ...] = (
    extract_from_json_span,
    extract_from_text_patterns,
)


def extract_vehicle_attributes(text: str) -> Extraction:
    for strategy in EXTRACTION_STRATEGIES:
        result = strategy(text)
        if result is not None:
            return result
    return Extraction(confidence=DEFAULT_CONFIDENCE)


def _normalize_text_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Fold snake_case spellings onto the camelCase keys and stringify their values."""
    fields = dict(fields)
    for name in _TEXT_FIELDS:
        alias = to_camel(name)
        if name != alias and name in fields:
            value = fields.pop(name)
            fields.setdefault(alias, value)
        value = fields.get(alias)
        # Models sometimes answer with lists or numbers where a phrase is expected
        if value is not None and not isinstance(value, str):
            fields[alias] = json.dumps(value) if isinstance(value, (list, dict)) else str(value)
    return fields


def _to_result(extraction: Extraction, text: str) -> VisionAnalysisResult:
    fields = {k: v for k, v in extraction.fields.items() if k not in _RESERVED_KEYS}
    return VisionAnalysisResult(
        **_normalize_text_fields(fields),
        confidence=extraction.confidence,
        extracted_text=text,
        raw_response=text,
    )


def build_analysis_result(text: str) -> VisionAnalysisResult:
    extraction = extract_vehicle_attributes(text)
    try:
        return _to_result(extraction, text)
    except ValidationError as e:
        logger.warning("Structured Ollama reply did not validate, using text analysis: %s", e)
        return _to_result(extract_from_text_patterns(text), text)


class OllamaService:
    """Vision calls against a local Ollama through its OpenAI-compatible API."""

    def __init__(self, client: AsyncOpenAI | None = None, model: str | None = None):
        self.model = model or settings.ollama_model
        self._client = client or AsyncOpenAI(
            base_url=f"{settings.ollama_base_url.rstrip('/')}/v1",
            api_key="ollama",  # required by the SDK, ignored by Ollama
            timeout=settings.ollama_timeout_seconds,
            max_retries=0,
        )

    async def analyze_vehicle_image(self, image_base64: str) -> VisionAnalysisResult:
        content: list[dict] = [
            {"type": "text", "text": _load_prompt()},
            {
                "type": "image_url",
                "image_url": {"url": f"data:image/jpeg;base64,{image_base64}"},
            },
        ]

        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": content}],
                stream=False,
            )
        except APIError as e:
            logger.error("Ollama analysis error: %s", e)
            raise OllamaError(f"Failed to analyze image with Ollama: {e}") from e

        if not response.choices:
            raise OllamaError("Failed to analyze image with Ollama: response had no choices")

        raw_text = response.choices[0].message.content or ""
        logger.info("Ollama raw response (%d chars): %s", len(raw_text), raw_text[:500])
        return build_analysis_result(raw_text)

    async def list_models(self) -> list[str]:
        try:
            page = await self._client.models.list()
        except APIError as e:
            logger.warning("Could not list Ollama models: %s", e)
            return []
        return [m.id for m in page.data]

    async def check_health(self) -> bool:
        try:
            await self._client.models.list()
        except APIError:
            return False
        return True


_ollama_service: OllamaService | None = None


def get_ollama_service() -> OllamaService:
    global _ollama_service
    if _ollama_service is None:
        _ollama_service = OllamaService()
    return _ollama_service
