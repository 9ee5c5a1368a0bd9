"""Application configuration loaded from config.yaml."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

API_KEY_ENV = "ANTHROPIC_API_KEY"


class MissingCredentialError(RuntimeError):
    """Raised at startup when the API credential is not configured."""


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-haiku-4-5-20251001"
    temperature: float = 0.8
    top_p: float | None = 0.9  # null omits top_p from requests
    max_tokens: int = 2048
    timeout: int = 60
    max_attempts: int = 1

    def __post_init__(self) -> None:
        if not 0.0 <= self.temperature <= 1.0:
            raise ValueError(f"temperature must be between 0 and 1, got {self.temperature}")
        if self.top_p is not None and not 0.0 < self.top_p <= 1.0:
            raise ValueError(f"top_p must be in (0, 1], got {self.top_p}")
        if self.max_tokens < 1:
            raise ValueError(f"max_tokens must be positive, got {self.max_tokens}")
        if not 1 <= self.timeout <= 600:
            raise ValueError(f"timeout must be between 1 and 600 seconds, got {self.timeout}")
        if not 1 <= self.max_attempts <= 10:
            raise ValueError(f"max_attempts must be between 1 and 10, got {self.max_attempts}")


@dataclass(frozen=True)
class StorageConfig:
    db_path: str = "~/.text-refiner/storage.db"
    custom_tones_key: str = "ai-text-refiner-custom-tones"

    def __post_init__(self) -> None:
        if not self.custom_tones_key.strip():
            raise ValueError("custom_tones_key must not be empty")

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class UsageConfig:
    enabled: bool = True
    db_path: str = "~/.text-refiner/usage.db"

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class UIConfig:
    copy_feedback_seconds: float = 2.0

    def __post_init__(self) -> None:
        if self.copy_feedback_seconds <= 0:
            raise ValueError(
                f"copy_feedback_seconds must be positive, got {self.copy_feedback_seconds}"
            )


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"

    def __post_init__(self) -> None:
        if not isinstance(logging.getLevelName(self.level.upper()), int):
            raise ValueError(f"level must be a logging level name, got {self.level!r}")


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    usage: UsageConfig = field(default_factory=UsageConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        # Look for config.yaml relative to the project root
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        storage=StorageConfig(**raw.get("storage", {})),
        usage=UsageConfig(**raw.get("usage", {})),
        ui=UIConfig(**raw.get("ui", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
    )


def require_api_key(env: dict[str, str] | None = None) -> str:
    """Return the API credential or raise if it is missing.

    The app cannot do anything useful without it, so callers treat the
    error as fatal.
    """
    source = os.environ if env is None else env
    value = source.get(API_KEY_ENV, "").strip()
    if not value:
        raise MissingCredentialError(f"{API_KEY_ENV} environment variable not set")
    return value
