"""
Vibe classification over the content digest.

Backends are tried in priority order and the first one with credentials is
used: Gemini first, then OpenAI, else a demo-mode placeholder. Whatever the
selected backend raises becomes an "Error" VibeAnalysis; classify_vibe never
raises, so a page with a working renderer always gets a full payload.
"""

import json
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from pydantic import ValidationError

from agents.ai.clients import get_client
from agents.brand.exceptions import VibeBackendError, VibeResponseError
from agents.config import VIBE_PRIMARY_MODEL, VIBE_SECONDARY_MODEL, VIBE_SYSTEM_PROMPT, VIBE_TEMPERATURE
from models.brand import VibeAnalysis
from setup_logging_optimized import get_logger

logger = get_logger(__name__)

DEMO_MODE_VIBE = VibeAnalysis(
    tone="Demo Mode",
    audience="No API Key",
    summary="Key missing. Check .env file and restart server.",
)

FAILED_TONE = "Error"
FAILED_AUDIENCE = "Analysis Failed"

VIBE_FIELD_INSTRUCTIONS = """1. "tone" (2 words max, e.g. "Minimalist Tech", "Playful Modern"),
2. "audience" (2 words max, e.g. "Designers", "Developers"),
3. "summary" (1 short sentence describing the visual style, UI aesthetics, and design vibe, e.g. "Corporate Memphis with glassmorphism"). Do NOT describe what the company sells or offers; focus ONLY on the look and feel."""


def build_vibe_prompt(raw_text: str) -> str:
    return (
        "Analyze this website content and return a JSON object with:\n"
        f"{VIBE_FIELD_INSTRUCTIONS}\n\n"
        f"Content: {raw_text}"
    )


@dataclass(frozen=True)
class VibeCredentials:
    """API keys for the classification backends, passed explicitly per request."""
    google_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None

    @classmethod
    def from_env(cls) -> "VibeCredentials":
        # Read at call time so a restarted/reloaded environment is picked up
        return cls(
            google_api_key=os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY") or None,
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        )

    def describe(self) -> Dict[str, bool]:
        return {"google": bool(self.google_api_key), "openai": bool(self.openai_api_key)}


def strip_code_fences(text: str) -> str:
    """Remove ```json / ``` markers anywhere in the text and trim."""
    return (text or "").replace("```json", "").replace("```", "").strip()


def parse_vibe_response(text: Optional[str]) -> VibeAnalysis:
    cleaned = strip_code_fences(text or "")
    try:
        data = json.loads(cleaned)
    except ValueError as e:
        raise VibeResponseError("Response is not valid JSON", cause=e)
    if not isinstance(data, dict):
        raise VibeResponseError(f"Expected a JSON object, got {type(data).__name__}")
    try:
        return VibeAnalysis.model_validate(data)
    except ValidationError as e:
        raise VibeResponseError("Response is missing vibe fields", cause=e, context={"keys": sorted(data)})


class VibeBackend(ABC):
    """A text classifier that turns the content digest into a VibeAnalysis."""

    name: str = ""

    @abstractmethod
    def is_configured(self, credentials: VibeCredentials) -> bool:
        pass

    @abstractmethod
    async def classify(self, raw_text: str, credentials: VibeCredentials) -> VibeAnalysis:
        pass


class GeminiVibeBackend(VibeBackend):
    name = "gemini"

    def __init__(self, model: str = VIBE_PRIMARY_MODEL):
        self.model = model

    def is_configured(self, credentials: VibeCredentials) -> bool:
        return bool(credentials.google_api_key)

    async def classify(self, raw_text: str, credentials: VibeCredentials) -> VibeAnalysis:
        client, model_name = get_client(self.model, credentials.google_api_key)
        response = await client.aio.models.generate_content(
            model=model_name,
            contents=build_vibe_prompt(raw_text),
            config={"temperature": VIBE_TEMPERATURE},
        )
        text = getattr(response, "text", None)
        logger.debug(f"Raw LLM response ({model_name}): {text}")
        if not text:
            raise VibeBackendError("Gemini returned an empty response", context={"model": model_name})
        analysis = parse_vibe_response(text)
        logger.info("Gemini analysis complete")
        return analysis


class OpenAIVibeBackend(VibeBackend):
    name = "openai"

    def __init__(self, model: str = VIBE_SECONDARY_MODEL):
        self.model = model

    def is_configured(self, credentials: VibeCredentials) -> bool:
        return bool(credentials.openai_api_key)

    async def classify(self, raw_text: str, credentials: VibeCredentials) -> VibeAnalysis:
        client, model_name = get_client(self.model, credentials.openai_api_key)
        completion = await client.chat.completions.create(
            model=model_name,
            messages=[
                {"role": "system", "content": VIBE_SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": (
                        "Analyze the vibe of this text. Return JSON with:\n"
                        f"{VIBE_FIELD_INSTRUCTIONS}\n\n"
                        f"Text: {raw_text}"
                    ),
                },
            ],
            temperature=VIBE_TEMPERATURE,
            response_format={"type": "json_object"},
        )
        if not completion.choices:
            raise VibeBackendError("OpenAI returned no choices", context={"model": model_name})
        content = completion.choices[0].message.content
        logger.debug(f"Raw LLM response ({model_name}): {content}")
        analysis = parse_vibe_response(content)
        logger.info("OpenAI analysis complete")
        return analysis


DEFAULT_VIBE_BACKENDS: Sequence[VibeBackend] = (GeminiVibeBackend(), OpenAIVibeBackend())


def select_backend(
    credentials: VibeCredentials,
    backends: Sequence[VibeBackend] = DEFAULT_VIBE_BACKENDS,
) -> Optional[VibeBackend]:
    for backend in backends:
        if backend.is_configured(credentials):
            return backend
    return None


def failed_vibe(error: Exception) -> VibeAnalysis:
    message = str(error) or type(error).__name__
    return VibeAnalysis(tone=FAILED_TONE, audience=FAILED_AUDIENCE, summary=f"Error: {message}")


async def classify_vibe(
    raw_text: str,
    credentials: VibeCredentials,
    backends: Sequence[VibeBackend] = DEFAULT_VIBE_BACKENDS,
) -> VibeAnalysis:
    """Classify with the first configured backend; sentinel values instead of exceptions."""
    logger.info(f"Environment keys check: {credentials.describe()}")

    backend = select_backend(credentials, backends)
    if backend is None:
        logger.info("No API keys found. Using Demo Mode.")
        return DEMO_MODE_VIBE.model_copy()

    logger.info(f"Using {backend.name} backend ({getattr(backend, 'model', 'custom')})...")
    try:
        return await backend.classify(raw_text, credentials)
    except Exception as e:
        logger.error(f"LLM analysis failed ({backend.name}): {e}")
        return failed_vibe(e)
