from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

UNKNOWN_SERVER = "Unknown"
MAX_STEAM_ID = 2**64 - 1


class ChatChannel(StrEnum):
    GENERAL = "say"
    TEAM = "say_team"


@dataclass(frozen=True, slots=True)
class ChatMessageRecord:
    player_name: str
    message: str
    player_id: int
    is_team_chat: bool
    timestamp: datetime
    server_label: str = UNKNOWN_SERVER

    def __post_init__(self) -> None:
        if not self.message or not self.message.strip():
            raise ValueError("message must be non-blank")
        if not 0 <= self.player_id <= MAX_STEAM_ID:
            raise ValueError(f"player_id out of range: {self.player_id}")
        if self.timestamp.tzinfo is None:
            raise ValueError("timestamp must be timezone-aware")

    @property
    def channel(self) -> ChatChannel:
        return ChatChannel.TEAM if self.is_team_chat else ChatChannel.GENERAL
