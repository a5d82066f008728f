"""Decide which chat lines get relayed and extract their records."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime

from .host import CommandInfo, ConnectionState, Player
from .model import MAX_STEAM_ID, UNKNOWN_SERVER, ChatChannel, ChatMessageRecord

RTV_ALIAS = "rtv"


def is_command(text: str, prefixes: Iterable[str]) -> bool:
    cleaned = text.strip()
    if any(cleaned.startswith(prefix) for prefix in prefixes):
        return True
    return cleaned.casefold() == RTV_ALIAS


def is_eligible_player(player: Player | None) -> bool:
    return (
        player is not None
        and player.is_valid
        and not player.is_bot
        and not player.is_hltv
        and player.connected == ConnectionState.CONNECTED
    )


def should_process(
    player: Player | None, info: CommandInfo, prefixes: Iterable[str]
) -> bool:
    return is_eligible_player(player) and not is_command(info.get_arg(1), prefixes)


def prepare_record(
    player: Player,
    info: CommandInfo,
    *,
    server_label: str | None = None,
    now: datetime | None = None,
) -> ChatMessageRecord | None:
    try:
        steam_id = player.steam_id64
        message = info.get_arg(1)
        if steam_id is None or not 0 <= steam_id <= MAX_STEAM_ID:
            return None
        if not message or not message.strip():
            return None
        timestamp = now if now is not None else datetime.now(UTC)
        return ChatMessageRecord(
            player_name=player.player_name,
            message=message,
            player_id=int(steam_id),
            is_team_chat=info.get_arg(0) == ChatChannel.TEAM,
            timestamp=timestamp.astimezone(UTC),
            server_label=server_label or UNKNOWN_SERVER,
        )
    except Exception:  # noqa: BLE001
        return None


def filter_chat(
    player: Player | None,
    info: CommandInfo,
    prefixes: Iterable[str],
    *,
    server_label: str | None = None,
    now: datetime | None = None,
) -> ChatMessageRecord | None:
    if player is None or not should_process(player, info, prefixes):
        return None
    return prepare_record(player, info, server_label=server_label, now=now)
