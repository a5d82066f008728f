from __future__ import annotations

from datetime import UTC

import msgspec

from .host import Localizer
from .model import ChatMessageRecord

EMBED_COLOR = 2826045
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
PROFILE_URL = "https://steamcommunity.com/id/{player_id}/"
TEAM_CHAT_LABEL = "Team chat"
GENERAL_CHAT_LABEL = "General chat"


class EmbedField(msgspec.Struct, kw_only=True):
    name: str
    value: str
    inline: bool = False


class Embed(msgspec.Struct, kw_only=True):
    title: str
    color: int
    description: str
    fields: list[EmbedField]


class WebhookPayload(msgspec.Struct, kw_only=True):
    embeds: list[Embed]


_ENCODER = msgspec.json.Encoder()


def profile_url(player_id: int) -> str:
    return PROFILE_URL.format(player_id=player_id)


def build_payload(record: ChatMessageRecord, localizer: Localizer) -> WebhookPayload:
    scope = TEAM_CHAT_LABEL if record.is_team_chat else GENERAL_CHAT_LABEL
    fields = [
        EmbedField(
            name=f"{localizer['cl.Message']} ({scope})",
            value=record.message,
        ),
        EmbedField(
            name=localizer["cl.SteamID"],
            value=profile_url(record.player_id),
        ),
        EmbedField(
            name=localizer["cl.Date"],
            value=record.timestamp.astimezone(UTC).strftime(TIMESTAMP_FORMAT),
        ),
    ]
    embed = Embed(
        title=f"{localizer['cl.Title']} {record.player_name}",
        color=EMBED_COLOR,
        description=f"Server: {record.server_label}",
        fields=fields,
    )
    return WebhookPayload(embeds=[embed])


def encode_payload(payload: WebhookPayload) -> bytes:
    return _ENCODER.encode(payload)
