"""Content resolution: static list, remote endpoint or generated text."""

from __future__ import annotations

import logging
import random
from typing import Any, Final

from pydantic import ValidationError

from socialproof.content.generator import MessageGenerator
from socialproof.content.models import NotificationPayload
from socialproof.content.remote import HttpTransport, RemotePayload, Transport
from socialproof.errors import ParseError
from socialproof.policy import FETCH_CONTENT, recover
from socialproof.settings.user import NotificationSettings

logger: Final = logging.getLogger(__name__)


class ContentResolver:
    """Produces the payload for one notification.

    Resolution order:
    - ``api`` source with an ``api_url``: one fetch; any transport or
      parse failure falls back to generated content
    - non-empty ``local_data``: uniform random pick
    - otherwise: generated content from ``message_format``

    Never raises for content problems; the worst case is generated text.
    """

    def __init__(
        self,
        transport: Transport | None = None,
        rng: random.Random | None = None,
        generator: MessageGenerator | None = None,
    ) -> None:
        self.rng = rng or random.Random()
        self.transport = transport or HttpTransport()
        self.generator = generator or MessageGenerator(self.rng)

    def resolve(self, settings: NotificationSettings) -> NotificationPayload:
        """Resolve a fresh payload for the given settings."""
        if settings.uses_remote_source:
            assert settings.api_url is not None
            url = settings.api_url
            return recover(
                FETCH_CONTENT,
                lambda: self._fetch(url),
                lambda: self.generate(settings),
            )

        if settings.data_source == "local" and settings.local_data:
            return self.rng.choice(settings.local_data)

        return self.generate(settings)

    def generate(self, settings: NotificationSettings) -> NotificationPayload:
        """Build a synthetic payload from the configured message format."""
        return self.generator.generate(settings.message_format)

    def _fetch(self, url: str) -> NotificationPayload:
        body: RemotePayload | Any = self.transport.fetch(url)
        try:
            payload = NotificationPayload.model_validate(body)
        except ValidationError as exc:
            raise ParseError(f"Response from {url} is not a notification payload", exc) from exc
        logger.debug("Fetched notification content from %s", url)
        return payload
