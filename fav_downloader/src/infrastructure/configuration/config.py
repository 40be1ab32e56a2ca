"""Configuration for the whole application"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

CONFIG_LOCATION: Path = Path('config.yaml')

CREDENTIAL_ENV_VARS = (
    'APP_CLIENT_KEY',
    'APP_CLIENT_SECRET',
    'RESOURCE_OWNER_KEY',
    'RESOURCE_OWNER_SECRET',
)


class ConfigError(Exception):
    """Raised when credentials are missing or the config file can't be parsed."""


class Credentials(BaseModel):
    """
    OAuth 1.0a key pairs used to sign every request.

    The client pair identifies the application, the resource owner pair identifies
    the account whose favorites are downloaded.
    """

    model_config = ConfigDict(frozen=True)

    client_key: str
    client_secret: str
    resource_owner_key: str
    resource_owner_secret: str


class DownloadSettings(BaseModel):
    """Settings for the downloading process"""

    target_directory: Path = Path('media')
    max_concurrent_downloads: int = Field(default=50, gt=0)
    # 75 requests per 15 minutes window for the favorites endpoint
    rate_limit_cooldown_seconds: float = Field(default=900, ge=0)
    favorites_per_page: int = Field(default=200, gt=0, le=200)


class Config(BaseSettings):
    """
    General app configuration.

    Credentials come from environment variables (or `.env`),
    downloading settings may be tuned with an optional `config.yaml`.
    """

    model_config = SettingsConfigDict(
        yaml_file=CONFIG_LOCATION,
        yaml_file_encoding='utf-8',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
    )

    app_client_key: str
    app_client_secret: str
    resource_owner_key: str
    resource_owner_secret: str

    downloading_settings: DownloadSettings = DownloadSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @property
    def credentials(self) -> Credentials:
        return Credentials(
            client_key=self.app_client_key,
            client_secret=self.app_client_secret,
            resource_owner_key=self.resource_owner_key,
            resource_owner_secret=self.resource_owner_secret,
        )


def init_config() -> Config:
    """
    Load the configuration, failing fast if any credential is absent.

    Missing credentials are reported by their environment variable names.
    """
    try:
        return Config()  # pyright: ignore[reportCallIssue] : loaded by pydantic_settings
    except ValidationError as e:
        missing = [
            str(err['loc'][0]).upper()
            for err in e.errors()
            if err['type'] == 'missing' and str(err['loc'][0]).upper() in CREDENTIAL_ENV_VARS
        ]
        if missing:
            raise ConfigError(
                f'No {", ".join(missing)} in environment variables',
            ) from e
        raise ConfigError(f'Config is invalid (could not be parsed): {e}') from e
