"""Configuration for rodbot using pydantic-settings."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GitHubSettings(BaseSettings):
    """Event location as provided by the GitHub Actions runner."""

    model_config = SettingsConfigDict(
        env_prefix="GITHUB_",
    )

    event_name: Optional[str] = Field(
        default=None,
        description="Name of the event that triggered the run (e.g. issue_comment)",
    )
    event_path: Optional[Path] = Field(
        default=None,
        description="Path to the JSON file holding the full event payload",
    )


class RunnerSettings(BaseSettings):
    """Settings for running steps."""

    model_config = SettingsConfigDict(
        env_prefix="RODBOT_",
    )

    shell: str = Field(
        default="bash",
        description="Shell executable used to run step commands",
    )


class BotSettings(BaseSettings):
    """Global settings for a bot run."""

    model_config = SettingsConfigDict(
        env_prefix="RODBOT_",
    )

    config: Path = Field(
        default=Path("rodbot.yaml"),
        description="Path to the YAML rule file",
    )
    log_level: str = Field(
        default="DEBUG",
        description="Logging level",
    )
    github: GitHubSettings = Field(default_factory=GitHubSettings)
    runner: RunnerSettings = Field(default_factory=RunnerSettings)


# Global settings instance that can be accessed throughout the application
_settings: BotSettings | None = None


def get_settings() -> BotSettings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = BotSettings()
    return _settings


def set_settings(settings: BotSettings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings
