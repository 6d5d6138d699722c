"""Synthetic notification content built from fixed word lists."""

from __future__ import annotations

import random
from collections.abc import Sequence

from socialproof.constants import (
    JUST_NOW,
    NUMBER_PLACEHOLDER,
    NUMBER_RANGE,
    SAMPLE_ACTIONS,
    SAMPLE_COUNTS,
    SAMPLE_TIMEFRAMES,
)
from socialproof.content.models import NotificationPayload


class MessageGenerator:
    """Builds messages such as "Six people signed up recently!".

    One count, one action and one timeframe phrase are picked independently
    and uniformly. Timeframes containing ``X`` get a random number in
    ``NUMBER_RANGE`` (inclusive). Pass a seeded ``random.Random`` to make
    the output reproducible.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        actions: Sequence[str] = SAMPLE_ACTIONS,
        timeframes: Sequence[str] = SAMPLE_TIMEFRAMES,
        counts: Sequence[str] = SAMPLE_COUNTS,
    ) -> None:
        self.rng = rng or random.Random()
        self.actions = actions
        self.timeframes = timeframes
        self.counts = counts

    def generate(self, message_format: str) -> NotificationPayload:
        """Generate a payload by filling ``message_format``.

        Args:
            message_format: Template with ``{count}``, ``{action}`` and
                ``{timeframe}`` placeholders

        Returns:
            Payload stamped with the "Just now" marker
        """
        action = self.rng.choice(self.actions)
        timeframe = self.rng.choice(self.timeframes)
        count = self.rng.choice(self.counts)

        if NUMBER_PLACEHOLDER in timeframe:
            number = self.rng.randint(*NUMBER_RANGE)
            timeframe = timeframe.replace(NUMBER_PLACEHOLDER, str(number), 1)

        return NotificationPayload(
            message=fill_template(message_format, count=count, action=action, timeframe=timeframe),
            timestamp=JUST_NOW,
        )


def fill_template(message_format: str, **values: str) -> str:
    """Replace the first ``{name}`` occurrence of each placeholder.

    Unlike ``str.format`` this tolerates stray braces and unknown
    placeholders in user-supplied templates.
    """
    message = message_format
    for name, value in values.items():
        message = message.replace(f"{{{name}}}", value, 1)
    return message
