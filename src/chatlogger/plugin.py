"""Host-facing plugin: wires chat listeners to the webhook notifier."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

import anyio
import httpx

from . import __version__
from .chat_filter import filter_chat
from .host import CommandInfo, HookResult, HostRuntime, Localizer, Player
from .logging import get_logger
from .model import ChatChannel, ChatMessageRecord
from .notifier import WebhookNotifier
from .settings import ChatLoggerSettings, load_settings

if TYPE_CHECKING:
    from anyio.abc import TaskGroup

logger = get_logger(__name__)

HOSTNAME_CONVAR = "hostname"
CHAT_COMMANDS = (ChatChannel.GENERAL, ChatChannel.TEAM)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class ChatLoggerPlugin:
    module_name = "Chat Logger"
    module_version = __version__

    def __init__(
        self,
        host: HostRuntime,
        settings: ChatLoggerSettings | None = None,
        *,
        localizer: Localizer | None = None,
        http_client: httpx.AsyncClient | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._host = host
        self.settings = settings or ChatLoggerSettings()
        self._localizer = localizer
        self._http_client = http_client
        self._clock = clock
        self._notifier: WebhookNotifier | None = None
        self._tg: TaskGroup | None = None

    @property
    def loaded(self) -> bool:
        return self._tg is not None

    def on_config_parsed(self, settings: ChatLoggerSettings) -> None:
        self.settings = settings

    async def load(self, hot_reload: bool = False) -> None:
        if self._tg is not None:
            return
        self._notifier = WebhookNotifier(
            self.settings.webhook,
            localizer=self._localizer,
            timeout_s=self.settings.request_timeout_s,
            client=self._http_client,
        )
        self._tg = await anyio.create_task_group().__aenter__()
        for command in CHAT_COMMANDS:
            self._host.add_command_listener(command, self.on_player_chat)
        logger.info(
            "plugin.loaded",
            hot_reload=hot_reload,
            delivery_enabled=self._notifier.enabled,
            prefixes=list(self.settings.command_prefixes),
        )

    async def unload(self, hot_reload: bool = False) -> None:
        tg = self._tg
        if tg is None:
            return
        self._tg = None
        tg.cancel_scope.cancel()
        await tg.__aexit__(None, None, None)
        for command in CHAT_COMMANDS:
            self._host.remove_command_listener(command, self.on_player_chat)
        if self._notifier is not None:
            await self._notifier.close()
            self._notifier = None
        logger.info("plugin.unloaded", hot_reload=hot_reload)

    @asynccontextmanager
    async def running(self) -> AsyncIterator[ChatLoggerPlugin]:
        await self.load()
        try:
            yield self
        finally:
            await self.unload()

    def on_player_chat(self, player: Player | None, info: CommandInfo) -> HookResult:
        try:
            record = filter_chat(
                player,
                info,
                self.settings.command_prefixes,
                server_label=self._host.find_convar(HOSTNAME_CONVAR),
                now=self._clock(),
            )
            if record is None:
                return HookResult.CONTINUE
            self.submit(record)
            return HookResult.CONTINUE
        except Exception:  # noqa: BLE001
            logger.exception("chat.hook_failed")
            return HookResult.CONTINUE

    def submit(self, record: ChatMessageRecord) -> bool:
        if self._tg is None or self._notifier is None:
            logger.debug("chat.dropped_not_loaded", player_id=record.player_id)
            return False
        self._tg.start_soon(self._deliver, self._notifier, record)
        return True

    async def _deliver(
        self, notifier: WebhookNotifier, record: ChatMessageRecord
    ) -> None:
        try:
            await notifier.notify(record)
        except anyio.get_cancelled_exc_class():
            raise
        except Exception:  # noqa: BLE001
            logger.exception("chat.delivery_failed", player_id=record.player_id)


def create_plugin(
    host: HostRuntime,
    config_path: str | Path | None = None,
    *,
    localizer: Localizer | None = None,
) -> ChatLoggerPlugin:
    settings, _ = load_settings(config_path)
    return ChatLoggerPlugin(host, settings, localizer=localizer)
