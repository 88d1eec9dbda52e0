from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from phraseforge.domain.constants import STATS_CACHE_TTL


class AppConfig(BaseSettings):
    """
    Configuration model for phraseforge.
    Supports loading from:
    1. Environment variables (PHRASEFORGE_*)
    2. Config file (~/.config/phraseforge/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="PHRASEFORGE_",
        extra="ignore",
    )

    # Storage
    backend: Literal["yaml", "memory"] = "yaml"
    data_path: Path = Field(
        default_factory=lambda: Path.home() / ".config/phraseforge/phrases.yaml"
    )

    # Statistics
    stats_cache_ttl: float = Field(default=STATS_CACHE_TTL, ge=0)

    # Behaviour
    seed_defaults: bool = True

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # First existing config file wins
        toml_file = next((f for f in _config_files() if f.exists()), None)

        # Priority: CLI overrides > environment > config file
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (
            init_settings,
            env_settings,
        )

    @field_validator("data_path", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path:
        return Path(v).expanduser()


def _config_files() -> list[Path]:
    # Resolved lazily so a patched HOME is honoured.
    home = Path.home()
    return [home / ".config/phraseforge/config.toml", home / ".phraseforge.toml"]


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/phraseforge/config.toml (if exists)
    3. Environment variables (PHRASEFORGE_*)
    4. cli_overrides (passed from Typer); None values are ignored
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
