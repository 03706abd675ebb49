"""
Environment-specific logging configuration
"""
import os
from typing import Dict, Any

# Per-element extraction chatter (palette observations, logo strategy hits)
EXTRACTION_LOGGERS = [
    "services.page_tree",
    "agents.tools.theme",
]

# HTTP/LLM client libraries that log every request at INFO
CLIENT_LOGGERS = [
    "httpx",
    "httpcore",
    "openai",
    "google_genai",
    "aiohttp.access",
    "urllib3",
]

PROFILES: Dict[str, Dict[str, Any]] = {
    "production": {
        "default_level": "WARNING",
        "console_format": "%(levelname)s - %(message)s",
        "suppress_modules": CLIENT_LOGGERS + EXTRACTION_LOGGERS + ["asyncio"],
    },
    "development": {
        "default_level": "INFO",
        "console_format": "%(asctime)s - %(levelname)s - %(message)s",
        "suppress_modules": ["httpcore", "asyncio"],
    },
    "debug": {
        # Raw LLM responses and per-snapshot details are logged at DEBUG
        "default_level": "DEBUG",
        "console_format": "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
        "suppress_modules": [],
    },
}


def detect_environment() -> str:
    if os.getenv("DEBUG", "false").lower() == "true":
        return "debug"
    if os.getenv("RENDER") is not None or os.getenv("ENV") == "production":
        return "production"
    return "development"


def get_logging_config() -> Dict[str, Any]:
    """Get logging configuration based on environment"""
    environment = detect_environment()
    selected_config = dict(PROFILES[environment])
    selected_config["suppress_modules"] = list(selected_config["suppress_modules"])

    # Explicit LOG_LEVEL wins over the profile default
    level_override = os.getenv("LOG_LEVEL")
    if level_override:
        selected_config["default_level"] = level_override.upper()

    selected_config["environment"] = environment
    return selected_config


def apply_logging_config(config: Dict[str, Any] = None):
    """Install one console handler on the root logger and quiet the configured modules"""
    import logging

    if config is None:
        config = get_logging_config()

    level = getattr(logging, str(config["default_level"]), None)
    if not isinstance(level, int):
        level = logging.INFO

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(config["console_format"]))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [console_handler]

    for module in config.get("suppress_modules", []):
        logging.getLogger(module).setLevel(logging.WARNING)

    return config
