"""Interfaces the game server runtime provides to the plugin."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum, IntEnum
from typing import Protocol, TypeAlias


class ConnectionState(IntEnum):
    NOT_CONNECTED = 0
    CONNECTING = 1
    CONNECTED = 2
    DISCONNECTING = 3
    DISCONNECTED = 4
    RESERVED = 5


class HookResult(Enum):
    CONTINUE = "continue"
    HANDLED = "handled"
    STOP = "stop"


class Player(Protocol):
    @property
    def player_name(self) -> str: ...

    @property
    def is_valid(self) -> bool: ...

    @property
    def is_bot(self) -> bool: ...

    @property
    def is_hltv(self) -> bool: ...

    @property
    def connected(self) -> ConnectionState: ...

    @property
    def steam_id64(self) -> int | None:
        """Authorized SteamID64, or ``None`` before authorization."""
        ...


class CommandInfo(Protocol):
    def get_arg(self, index: int) -> str:
        """Argument ``0`` is the command name, ``1`` the full text."""
        ...


CommandListener: TypeAlias = Callable[[Player | None, CommandInfo], HookResult]


class HostRuntime(Protocol):
    def add_command_listener(self, name: str, listener: CommandListener) -> None: ...

    def remove_command_listener(
        self, name: str, listener: CommandListener
    ) -> None: ...

    def find_convar(self, name: str) -> str | None: ...


class Localizer(Protocol):
    def __getitem__(self, key: str) -> str: ...


DEFAULT_LABELS: Mapping[str, str] = {
    "cl.Title": "Message from",
    "cl.Message": "Message",
    "cl.SteamID": "SteamID",
    "cl.Date": "Date",
}
