"""Best-effort policy for notification side effects.

Every recoverable failure is mapped to a fallback here and nowhere else:

- reading throttle state fails or is malformed: fail open (may show)
- writing throttle state fails: keep the display, skip the write
- fetching remote content fails: use generated content

Errors outside a policy's list propagate unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Final, TypeVar

from socialproof.errors import (
    MalformedPersistedRecord,
    PersistenceUnavailable,
    TransportFailure,
)

logger: Final = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Degradation:
    """One recoverable failure mode and how loudly it is reported."""

    name: str
    errors: tuple[type[Exception], ...]
    level: int
    outcome: str


READ_THROTTLE_STATE: Final = Degradation(
    name="read throttle state",
    errors=(PersistenceUnavailable, MalformedPersistedRecord),
    level=logging.DEBUG,
    outcome="treating as never shown",
)

WRITE_THROTTLE_STATE: Final = Degradation(
    name="save last-shown time",
    errors=(PersistenceUnavailable,),
    level=logging.WARNING,
    outcome="notification may reappear early",
)

FETCH_CONTENT: Final = Degradation(
    name="fetch notification content",
    errors=(TransportFailure,),
    level=logging.ERROR,
    outcome="using generated content",
)


def recover(policy: Degradation, action: Callable[[], T], fallback: Callable[[], T]) -> T:
    """Run ``action``; on an error covered by ``policy`` return ``fallback()``.

    Args:
        policy: The degradation rule that applies to this side effect
        action: Callable performing the fallible operation
        fallback: Callable producing the degraded result

    Returns:
        The action's result, or the fallback's when a covered error occurred
    """
    try:
        return action()
    except policy.errors as exc:
        logger.log(policy.level, "Failed to %s (%s); %s", policy.name, exc, policy.outcome)
        return fallback()
