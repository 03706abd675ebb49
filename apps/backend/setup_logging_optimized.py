import logging
from typing import Optional

# Set once apply_logging_config has installed our own handler
_configured = False


def setup_logging(level: Optional[str] = None) -> None:
    """Logging setup shared by the server and the extraction modules.

    - Applies the environment profile from config.logging_config
    - An explicit level overrides the profile level
    - Ensures a StreamHandler is attached once
    """
    global _configured
    from config.logging_config import apply_logging_config, get_logging_config

    config = get_logging_config()
    if level:
        config["default_level"] = level.upper()
    root = logging.getLogger()
    if root.handlers and not _configured:
        # Somebody else (uvicorn, pytest) owns the handlers; only adjust the level
        try:
            root.setLevel(getattr(logging, config["default_level"]))
        except Exception:
            root.setLevel(logging.INFO)
        return
    apply_logging_config(config)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a module logger after ensuring logging is initialized."""
    if not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)
