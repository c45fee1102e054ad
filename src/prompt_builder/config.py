from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from prompt_builder.types import WireProtocol

DEFAULT_HOST = "http://localhost:11434"


class PromptBuilderSettings(BaseSettings):
    """Runtime settings, read from the YAML config file and ``PROMPT_BUILDER_*`` env vars.

    Environment variables take precedence over values passed to the
    constructor (which come from the config file).
    """

    model_config = SettingsConfigDict(env_prefix="PROMPT_BUILDER_", extra="ignore")

    model: str = ""
    host: str = DEFAULT_HOST
    system_prompt_file: str = ""
    clipboard_cmd: str = ""
    protocol: WireProtocol = WireProtocol.OPENAI
    api_key: str = ""

    @field_validator("host")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/") or DEFAULT_HOST

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, init_settings, file_secret_settings
