import pytest

from chatlogger.logging import get_logger, redact_webhook_tokens, setup_logging


def test_redacts_tokens_in_nested_values() -> None:
    event = {
        "event": "webhook.http_error",
        "url": "https://discord.com/api/webhooks/123/abc.DEF-ghi",
        "extra": {"urls": ["https://discord.com/api/webhooks/9/zz"]},
        "status": 500,
    }

    redacted = redact_webhook_tokens(None, "error", event)

    assert redacted["url"] == "https://discord.com/api/webhooks/123/[REDACTED]"
    assert redacted["extra"] == {
        "urls": ["https://discord.com/api/webhooks/9/[REDACTED]"]
    }
    assert redacted["status"] == 500


def test_debug_messages_filtered_by_default(
    capsys: pytest.CaptureFixture[str],
) -> None:
    setup_logging()
    logger = get_logger("chatlogger.test")

    logger.debug("hidden.event")
    logger.info("shown.event", player_id=1)

    out = capsys.readouterr().out
    assert "hidden.event" not in out
    assert "shown.event" in out
    assert "player_id=1" in out


def test_debug_messages_when_enabled(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging(debug=True)
    get_logger().debug("visible.event")

    assert "visible.event" in capsys.readouterr().out
