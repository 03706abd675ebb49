from typing import Any, Tuple

from google.genai import Client as Gemini
from openai import AsyncOpenAI

from setup_logging_optimized import get_logger

logger = get_logger(__name__)

# Clients and their configuration. Both are async-capable:
# Gemini exposes coroutines under client.aio, AsyncOpenAI is async throughout.
CLIENTS = {
    "gemini": {
        "client_class": Gemini,
    },
    "openai": {
        "client_class": AsyncOpenAI,
    },
}

# Models, their client type, and their model_name
MODELS = {
    "gemini-3-flash-preview": ("gemini", "gemini-3-flash-preview"),
    "gemini-2.5-flash": ("gemini", "gemini-2.5-flash"),
    "gemini-2.5-flash-lite": ("gemini", "gemini-2.5-flash-lite"),
    "gpt-3.5-turbo": ("openai", "gpt-3.5-turbo"),
    "gpt-4o-mini": ("openai", "gpt-4o-mini"),
    "gpt-4.1-mini": ("openai", "gpt-4.1-mini-2025-04-14"),
}


def resolve_model(model_name: str) -> Tuple[str, str]:
    """Return (client_type, provider_model_name) for an alias or a provider model name."""
    if model_name in MODELS:
        return MODELS[model_name]
    for client_type, actual_name in MODELS.values():
        if actual_name == model_name:
            return client_type, actual_name
    raise ValueError(f"Model {model_name} not supported")


def get_client(model_name: str, api_key: str) -> Tuple[Any, str]:
    """
    Get a client for a given model. Accepts either a model alias (key in MODELS)
    or the provider's actual model name (value in MODELS mapping).

    The API key is always passed explicitly; clients never fall back to
    ambient environment variables here.
    """
    if not api_key:
        raise ValueError(f"No API key supplied for model {model_name}")
    client_type, actual_model_name = resolve_model(model_name)
    client_config = CLIENTS[client_type]
    logger.debug(f"Creating {client_type} client for {actual_model_name}")
    return client_config["client_class"](api_key=api_key), actual_model_name
