"""Configuration loading for the prompt-builder CLI.

Settings come from three levels, highest precedence first:

- **Flags**: ``--model`` on the command line
- **Environment**: ``PROMPT_BUILDER_MODEL``, ``PROMPT_BUILDER_HOST``, ...
- **File**: ``~/.config/prompt-builder/config.yaml`` (or ``--config``)

The system prompt is read from the file named by ``system_prompt_file``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from prompt_builder.config import PromptBuilderSettings
from prompt_builder.exceptions import (
    ConfigError,
    ConfigNotFoundError,
    MissingModelError,
    SystemPromptNotFoundError,
)

logger = logging.getLogger(__name__)

GLOBAL_DIR = Path.home() / ".config" / "prompt-builder"
GLOBAL_CONFIG_PATH = GLOBAL_DIR / "config.yaml"

EXAMPLE_CONFIG = """\
model: llama3.2
host: http://localhost:11434
system_prompt_file: ~/.config/prompt-builder/prompt-architect.md
"""


def expand_path(path: str | Path) -> Path:
    """Expand a leading ``~`` to the user's home directory."""
    return Path(path).expanduser()


def _upgrade_legacy_keys(data: dict[str, Any]) -> dict[str, Any]:
    """Map the pre-SSE ``ollama_host`` key onto ``host`` + ``protocol: ollama``."""
    if "ollama_host" not in data:
        return data
    data = dict(data)
    legacy_host = data.pop("ollama_host")
    data.setdefault("host", legacy_host)
    data.setdefault("protocol", "ollama")
    logger.debug("Upgraded legacy ollama_host=%s", legacy_host)
    return data


@dataclass(frozen=True)
class ResolvedConfig:
    settings: PromptBuilderSettings
    system_prompt: str
    config_path: Path


class ConfigManager:
    """Loads the YAML config file and the system prompt it points to.

    Usage::

        mgr = ConfigManager(config_path)
        resolved = mgr.load(model_override="llama3.2")
    """

    def __init__(self, config_path: str | Path | None = None) -> None:
        self._config_path = expand_path(config_path) if config_path else GLOBAL_CONFIG_PATH

    @property
    def config_path(self) -> Path:
        return self._config_path

    # -- Public API -----------------------------------------------------------

    def load_settings(self, *, model_override: str | None = None) -> PromptBuilderSettings:
        """Read the config file and apply env and flag overrides."""
        data = _upgrade_legacy_keys(self._read_file())
        try:
            settings = PromptBuilderSettings(**data)
        except ValidationError as exc:
            raise ConfigError(f"invalid config: {exc.errors()[0]['msg']}") from exc

        if model_override:
            settings = settings.model_copy(update={"model": model_override})
        if not settings.model:
            raise MissingModelError()
        logger.info(
            "Loaded config from %s (model=%s, host=%s, protocol=%s)",
            self._config_path,
            settings.model,
            settings.host,
            settings.protocol,
        )
        return settings

    def load(self, *, model_override: str | None = None) -> ResolvedConfig:
        """Load settings and the system prompt text."""
        settings = self.load_settings(model_override=model_override)
        return ResolvedConfig(
            settings=settings,
            system_prompt=self._read_system_prompt(settings.system_prompt_file),
            config_path=self._config_path,
        )

    # -- Internals ------------------------------------------------------------

    def _read_file(self) -> dict[str, Any]:
        path = self._config_path
        if not path.exists():
            raise ConfigNotFoundError(str(path))
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"invalid config: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"invalid config: expected a mapping in {path}")
        return data

    @staticmethod
    def _read_system_prompt(value: str) -> str:
        if not value:
            raise SystemPromptNotFoundError("(system_prompt_file not set)")
        path = expand_path(value)
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SystemPromptNotFoundError(str(path)) from exc
