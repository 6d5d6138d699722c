"""Internal application settings derived from user settings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from socialproof.constants import PREVIEW_DIR, PREVIEW_HTML_NAME
from socialproof.settings.user import NotificationSettings


@dataclass
class AppPaths:
    """Application file and directory paths.

    Centralizes the template location shipped with the package, the
    preview output directory and the default throttle state file.
    """

    templates_dir: Path
    preview_dir: Path
    state_file: Path
    preview_html: str = PREVIEW_HTML_NAME

    @classmethod
    def default(cls) -> AppPaths:
        """Create paths from the package and user directories."""
        return cls(
            templates_dir=Path(__file__).resolve().parents[1] / "templates",
            preview_dir=Path(PREVIEW_DIR),
            state_file=Path("~/.config/socialproof/state.json").expanduser(),
        )

    @property
    def preview_file(self) -> Path:
        return self.preview_dir / self.preview_html


class ApplicationSettings:
    """Application settings container.

    Combines the user's notification settings with filesystem locations
    used by the command-line tools.

    Examples:
        user_settings = NotificationSettings.load()
        app_settings = ApplicationSettings(user_settings)
        state_path = app_settings.paths.state_file
    """

    def __init__(
        self,
        user_settings: NotificationSettings,
        paths: AppPaths | None = None,
    ) -> None:
        self.user = user_settings
        self.paths = paths or AppPaths.default()
