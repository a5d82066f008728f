from pathlib import Path

import pytest

from chatlogger.config import ConfigError
from chatlogger.settings import (
    ChatLoggerSettings,
    load_settings,
    load_settings_if_exists,
    validate_settings_data,
)


def test_defaults_match_stock_plugin() -> None:
    settings = ChatLoggerSettings()

    assert settings.webhook_url is None
    assert settings.webhook == ""
    assert settings.command_prefixes == ["!", "@", "/", "."]
    assert settings.request_timeout_s == 15.0


def test_settings_strip_values() -> None:
    settings = ChatLoggerSettings.model_validate(
        {
            "webhook_url": "  https://discord.example/api/webhooks/1/t  ",
            "command_prefixes": [" ! ", "#", "!"],
        }
    )

    assert settings.webhook == "https://discord.example/api/webhooks/1/t"
    assert settings.command_prefixes == ["!", "#"]


def test_blank_webhook_disables_delivery() -> None:
    settings = ChatLoggerSettings.model_validate({"webhook_url": "   "})
    assert settings.webhook_url is None


def test_webhook_url_is_secret_in_repr() -> None:
    settings = ChatLoggerSettings.model_validate(
        {"webhook_url": "https://discord.example/api/webhooks/1/secret"}
    )
    assert "secret" not in repr(settings)
    assert settings.model_dump()["webhook_url"].endswith("/secret")


@pytest.mark.parametrize(
    ("data", "match"),
    [
        ({"command_prefixes": ["!", ""]}, "command_prefixes"),
        ({"command_prefixes": "!"}, "command_prefixes"),
        ({"command_prefixes": [1]}, "command_prefixes"),
        ({"webhook_url": 42}, "webhook_url"),
        ({"request_timeout_s": 0}, "request_timeout_s"),
        ({"request_timeout_s": True}, "request_timeout_s"),
        ({"discord_webhook": "x"}, "discord_webhook"),
    ],
)
def test_invalid_settings_raise_config_error(
    tmp_path: Path, data: dict, match: str
) -> None:
    with pytest.raises(ConfigError, match=match):
        validate_settings_data(data, config_path=tmp_path / "chatlogger.toml")


def test_load_settings_from_toml(tmp_path: Path) -> None:
    config_path = tmp_path / "chatlogger.toml"
    config_path.write_text(
        'webhook_url = "https://discord.example/api/webhooks/1/t"\n'
        'command_prefixes = ["!", "/"]\n'
        "request_timeout_s = 5\n",
        encoding="utf-8",
    )

    settings, path = load_settings(config_path)

    assert path == config_path
    assert settings.webhook == "https://discord.example/api/webhooks/1/t"
    assert settings.command_prefixes == ["!", "/"]
    assert settings.request_timeout_s == 5.0


def test_load_settings_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Missing config file"):
        load_settings(tmp_path / "nope.toml")


def test_load_settings_rejects_directory(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not a file"):
        load_settings(tmp_path)


def test_load_settings_malformed_toml(tmp_path: Path) -> None:
    config_path = tmp_path / "chatlogger.toml"
    config_path.write_text("webhook_url = \n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Malformed TOML"):
        load_settings(config_path)


def test_load_settings_invalid_values(tmp_path: Path) -> None:
    config_path = tmp_path / "chatlogger.toml"
    config_path.write_text('command_prefixes = [""]\n', encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid config"):
        load_settings(config_path)


def test_load_settings_if_exists(tmp_path: Path) -> None:
    assert load_settings_if_exists(tmp_path / "nope.toml") is None

    config_path = tmp_path / "chatlogger.toml"
    config_path.write_text("", encoding="utf-8")
    loaded = load_settings_if_exists(config_path)

    assert loaded is not None
    settings, _ = loaded
    assert settings.webhook_url is None
