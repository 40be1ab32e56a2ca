"""Tests for credentials and settings loading"""

from pathlib import Path

import pytest

from fav_downloader.src.infrastructure.configuration.config import (
    ConfigError,
    Credentials,
    DownloadSettings,
    init_config,
)

CREDENTIAL_ENV = {
    'APP_CLIENT_KEY': 'ck',
    'APP_CLIENT_SECRET': 'cs',
    'RESOURCE_OWNER_KEY': 'rk',
    'RESOURCE_OWNER_SECRET': 'rs',
}


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Run every test in an empty directory (no .env, no config.yaml)"""
    monkeypatch.chdir(tmp_path)
    for name in CREDENTIAL_ENV:
        monkeypatch.delenv(name, raising=False)


def set_credentials(monkeypatch, **overrides):
    for name, value in {**CREDENTIAL_ENV, **overrides}.items():
        if value is None:
            monkeypatch.delenv(name, raising=False)
        else:
            monkeypatch.setenv(name, value)


def test_credentials_from_environment(monkeypatch):
    set_credentials(monkeypatch)

    config = init_config()

    assert config.credentials == Credentials(
        client_key='ck',
        client_secret='cs',
        resource_owner_key='rk',
        resource_owner_secret='rs',
    )


def test_default_download_settings(monkeypatch):
    set_credentials(monkeypatch)

    settings = init_config().downloading_settings

    assert settings.target_directory == Path('media')
    assert settings.max_concurrent_downloads == 50
    assert settings.rate_limit_cooldown_seconds == 900
    assert settings.favorites_per_page == 200


def test_missing_credential_is_reported_by_env_name(monkeypatch):
    set_credentials(monkeypatch, RESOURCE_OWNER_SECRET=None)

    with pytest.raises(ConfigError, match='RESOURCE_OWNER_SECRET'):
        init_config()


def test_no_credentials_at_all(monkeypatch):
    with pytest.raises(ConfigError) as exc_info:
        init_config()

    for name in CREDENTIAL_ENV:
        assert name in str(exc_info.value)


def test_dotenv_file_is_used(tmp_path, monkeypatch):
    (tmp_path / '.env').write_text(
        '\n'.join(f'{name}={value}' for name, value in CREDENTIAL_ENV.items()),
        encoding='utf-8',
    )

    assert init_config().credentials.client_key == 'ck'


def test_yaml_overrides_download_settings(tmp_path, monkeypatch):
    set_credentials(monkeypatch)
    (tmp_path / 'config.yaml').write_text(
        'downloading_settings:\n'
        '  target_directory: ./liked\n'
        '  max_concurrent_downloads: 8\n',
        encoding='utf-8',
    )

    settings = init_config().downloading_settings

    assert settings.target_directory == Path('./liked')
    assert settings.max_concurrent_downloads == 8
    assert settings.rate_limit_cooldown_seconds == 900


def test_invalid_yaml_values_raise_config_error(tmp_path, monkeypatch):
    set_credentials(monkeypatch)
    (tmp_path / 'config.yaml').write_text(
        'downloading_settings:\n  max_concurrent_downloads: 0\n',
        encoding='utf-8',
    )

    with pytest.raises(ConfigError, match='could not be parsed'):
        init_config()


def test_page_size_is_bounded_by_endpoint_limit():
    with pytest.raises(ValueError):
        DownloadSettings(favorites_per_page=500)


def test_credentials_are_immutable():
    credentials = Credentials(
        client_key='ck',
        client_secret='cs',
        resource_owner_key='rk',
        resource_owner_secret='rs',
    )

    with pytest.raises(ValueError):
        credentials.client_key = 'other'  # type: ignore[misc]
