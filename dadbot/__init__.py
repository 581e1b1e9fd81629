"""dadbot — Slack Socket Mode bot for dad jokes and OpenAI answers."""

__version__ = "1.0.0"

from dadbot.config import AppConfig, ConfigError

__all__ = [
    "__version__",
    "AppConfig",
    "ConfigError",
]
