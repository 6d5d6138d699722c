"""Social proof notifications.

Shows a transient "N people did X recently" popup, throttled by a persisted
last-shown timestamp, with pluggable content sources and theme renderers.
"""

from socialproof.controller import NotificationController
from socialproof.settings import NotificationSettings

__all__ = ["NotificationController", "NotificationSettings", "create"]

__version__ = "1.0.0"


def create(**options: object) -> NotificationController:
    """Build a controller from keyword options using the public option names."""
    return NotificationController(NotificationSettings.model_validate(options))
