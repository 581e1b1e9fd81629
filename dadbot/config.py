"""Configuration loaded from the environment."""

import os
import sys
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from dotenv import load_dotenv

load_dotenv()

_stderr_print = lambda *a, **kw: print(*a, **kw, file=sys.stderr)

APP_TOKEN_PREFIX = "xapp-"
BOT_TOKEN_PREFIX = "xoxb-"
OPENAI_KEY_PREFIX = "sk-"

DEFAULT_OPENAI_MODEL = "gpt-3.5-turbo"
DEFAULT_JOKE_API_URL = "https://icanhazdadjoke.com/"
DEFAULT_JOKE_TIMEOUT_SECONDS = 5.0


class ConfigError(Exception):
    """Raised when required settings are missing or malformed."""


def _env_flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, value: Optional[str], default: int) -> int:
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        _stderr_print(f"Invalid {name}={value!r}, falling back to {default}")
        return default


def _env_float(name: str, value: Optional[str], default: float) -> float:
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        _stderr_print(f"Invalid {name}={value!r}, falling back to {default}")
        return default


@dataclass
class SlackConfig:
    app_token: str = ""
    bot_token: str = ""


@dataclass
class OpenAIConfig:
    api_key: str = ""
    model: str = DEFAULT_OPENAI_MODEL


@dataclass
class JokeConfig:
    url: str = DEFAULT_JOKE_API_URL
    timeout_seconds: float = DEFAULT_JOKE_TIMEOUT_SECONDS


@dataclass
class AppConfig:
    """Typed bot configuration."""

    slack: SlackConfig = field(default_factory=SlackConfig)
    openai: OpenAIConfig = field(default_factory=OpenAIConfig)
    joke: JokeConfig = field(default_factory=JokeConfig)
    dedup_max_entries: int = 0
    debug: bool = False

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Create AppConfig from environment variables (or a given mapping)."""
        env = os.environ if env is None else env
        return cls(
            slack=SlackConfig(
                app_token=env.get("SLACK_APP_TOKEN", "").strip(),
                bot_token=env.get("SLACK_BOT_TOKEN", "").strip(),
            ),
            openai=OpenAIConfig(
                api_key=env.get("OPENAI_API_KEY", "").strip(),
                model=env.get("OPENAI_MODEL", "").strip() or DEFAULT_OPENAI_MODEL,
            ),
            joke=JokeConfig(
                url=env.get("JOKE_API_URL", "").strip() or DEFAULT_JOKE_API_URL,
                timeout_seconds=_env_float(
                    "JOKE_TIMEOUT_SECONDS",
                    env.get("JOKE_TIMEOUT_SECONDS"),
                    DEFAULT_JOKE_TIMEOUT_SECONDS,
                ),
            ),
            dedup_max_entries=max(
                0, _env_int("DEDUP_MAX_ENTRIES", env.get("DEDUP_MAX_ENTRIES"), 0)
            ),
            debug=_env_flag(env.get("DADBOT_DEBUG")),
        )

    def problems(self) -> List[str]:
        """Return a description of every required setting that is wrong."""
        checks = [
            ("SLACK_APP_TOKEN", self.slack.app_token, APP_TOKEN_PREFIX),
            ("SLACK_BOT_TOKEN", self.slack.bot_token, BOT_TOKEN_PREFIX),
            ("OPENAI_API_KEY", self.openai.api_key, OPENAI_KEY_PREFIX),
        ]
        found = []
        for name, value, prefix in checks:
            if not value:
                found.append(f"{name} must be set.")
            elif not value.startswith(prefix):
                found.append(f'{name} must have the prefix "{prefix}".')
        return found

    def validate(self) -> "AppConfig":
        problems = self.problems()
        if problems:
            raise ConfigError(" ".join(problems))
        return self
