from __future__ import annotations

from collections.abc import Mapping

import anyio
import httpx

from .config import DEFAULT_TIMEOUT_S
from .host import DEFAULT_LABELS, Localizer
from .logging import get_logger
from .model import ChatMessageRecord
from .payload import build_payload, encode_payload

logger = get_logger(__name__)

JSON_HEADERS: Mapping[str, str] = {"Content-Type": "application/json"}


class WebhookNotifier:
    def __init__(
        self,
        webhook_url: str | None,
        *,
        localizer: Localizer | None = None,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = (webhook_url or "").strip()
        self._localizer = localizer if localizer is not None else DEFAULT_LABELS
        self._client = client or httpx.AsyncClient(timeout=timeout_s)
        self._owns_client = client is None
        self._timeout_s = timeout_s

    @property
    def enabled(self) -> bool:
        return bool(self._url)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def notify(self, record: ChatMessageRecord) -> bool:
        if not self._url:
            return False
        content = encode_payload(build_payload(record, self._localizer))
        return await self._post(content, player_id=record.player_id)

    async def _post(self, content: bytes, *, player_id: int) -> bool:
        try:
            resp = await self._client.post(
                self._url,
                content=content,
                headers=JSON_HEADERS,
                timeout=self._timeout_s,
            )
        except anyio.get_cancelled_exc_class():
            logger.debug("webhook.cancelled", player_id=player_id)
            raise
        except httpx.HTTPError as e:
            logger.error(
                "webhook.network_error",
                url=self._url,
                player_id=player_id,
                error=str(e),
                error_type=e.__class__.__name__,
            )
            return False

        if not resp.is_success:
            logger.error(
                "webhook.http_error",
                url=self._url,
                player_id=player_id,
                status=resp.status_code,
                body=resp.text,
            )
            return False

        logger.debug("webhook.delivered", player_id=player_id, status=resp.status_code)
        return True
