"""Data models for notification content."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class NotificationPayload(BaseModel):
    """Text shown in one notification plus an optional display timestamp.

    Remote bodies may carry additional keys; they are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    message: str
    timestamp: str | None = None
