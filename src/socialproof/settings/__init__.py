"""Notification settings management.

This package provides:
- NotificationSettings: User-configurable settings loaded from YAML
- ApplicationSettings: Internal paths and defaults for the CLI
"""

from socialproof.settings.application import AppPaths, ApplicationSettings
from socialproof.settings.user import NotificationSettings

__all__ = ["AppPaths", "ApplicationSettings", "NotificationSettings"]
