"""HTML rendering backend for notifications."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, Final, Optional, cast

from jinja2 import Environment, FileSystemLoader, select_autoescape

from socialproof.content.models import NotificationPayload
from socialproof.rendering.protocols import InteractiveBackend, RenderHandle
from socialproof.rendering.themes import CLOSE_ICON, Theme, create_theme, icon_svg
from socialproof.settings.application import AppPaths
from socialproof.settings.user import NotificationSettings

logger: Final = logging.getLogger(__name__)


def create_environment(templates_dir: Optional[Path] = None) -> Environment:
    """Create the Jinja environment holding notification and page templates.

    Args:
        templates_dir: Directory containing templates (default: packaged templates)
    """
    return Environment(
        loader=FileSystemLoader(templates_dir or AppPaths.default().templates_dir),
        autoescape=select_autoescape(["html", "html.j2"]),
    )


class HtmlPage:
    """In-memory stand-in for the host document.

    Holds the markup of every attached notification in attach order and
    can render a complete HTML document for previews. ``on_change`` is
    called after every attach, update and removal.
    """

    def __init__(
        self,
        env: Optional[Environment] = None,
        title: str = "Social proof preview",
        on_change: Optional[Callable[[HtmlPage], None]] = None,
    ) -> None:
        self.env = env or create_environment()
        self.title = title
        self.on_change = on_change
        self.theme_styles = False
        self.animation_seconds = 0.3
        self._elements: dict[int, str] = {}

    def attach(self, handle: RenderHandle, markup: str) -> None:
        self._elements[handle.handle_id] = markup
        self._changed()

    def update(self, handle: RenderHandle, markup: str) -> None:
        if handle.handle_id in self._elements:
            self._elements[handle.handle_id] = markup
            self._changed()

    def remove(self, handle: RenderHandle) -> None:
        if self._elements.pop(handle.handle_id, None) is not None:
            self._changed()

    def markup_for(self, handle: RenderHandle) -> str | None:
        return self._elements.get(handle.handle_id)

    @property
    def elements(self) -> list[str]:
        return list(self._elements.values())

    def to_html(self) -> str:
        """Render the full document with styles and attached notifications."""
        template = self.env.get_template("page.html.j2")
        return cast(
            str,
            template.render(
                title=self.title,
                elements=self.elements,
                theme_styles=self.theme_styles,
                animation_seconds=self.animation_seconds,
            ),
        )

    def write(self, output_path: Path) -> Path:
        """Write the document to ``output_path``, creating parent directories."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.to_html(), "utf-8")
        return output_path

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change(self)


class HtmlRenderer(InteractiveBackend):
    """Renders notifications as HTML markup under one theme variant.

    The theme is chosen once at construction; ``materialize`` attaches
    the markup to an ``HtmlPage``, ``play_exit`` re-renders it in its exit
    state and ``detach`` removes it.
    """

    def __init__(
        self,
        theme: Theme,
        page: Optional[HtmlPage] = None,
        env: Optional[Environment] = None,
    ) -> None:
        super().__init__()
        self.theme = theme
        self.env = env or (page.env if page is not None else create_environment())
        self.page = page or HtmlPage(self.env)
        self._settings: dict[int, NotificationSettings] = {}

    def materialize(
        self, payload: NotificationPayload, settings: NotificationSettings
    ) -> RenderHandle:
        handle = RenderHandle(payload=payload)
        self._settings[handle.handle_id] = settings
        if self.theme.ships_styles:
            self.page.theme_styles = True
            self.page.animation_seconds = settings.animation_seconds
        self.page.attach(handle, self.render_markup(handle, settings))
        logger.debug("Attached %s notification #%d", self.theme.name, handle.handle_id)
        return handle

    def play_exit(self, handle: RenderHandle) -> None:
        handle.exiting = True
        settings = self._settings.get(handle.handle_id)
        if settings is not None and self.theme.exit_class:
            self.page.update(handle, self.render_markup(handle, settings))

    def detach(self, handle: RenderHandle) -> None:
        handle.attached = False
        self.page.remove(handle)
        self._settings.pop(handle.handle_id, None)
        self._drop_hooks(handle)
        logger.debug("Detached notification #%d", handle.handle_id)

    def render_markup(self, handle: RenderHandle, settings: NotificationSettings) -> str:
        """Render the markup for one notification in its current state."""
        context: dict[str, Any] = {
            "handle_id": handle.handle_id,
            "payload": handle.payload,
            "settings": settings,
            "classes": self.theme.classes,
            "container_class": self.theme.container_classes(settings.animation, handle.exiting),
            "icon": icon_svg(settings.icon_type),
            "close_icon": CLOSE_ICON,
        }
        template = self.env.get_template(self.theme.template)
        return cast(str, template.render(**context))


def create_renderer(
    settings: NotificationSettings, page: Optional[HtmlPage] = None
) -> HtmlRenderer:
    """Create an HTML renderer for the configured theme."""
    return HtmlRenderer(create_theme(settings.theme), page)
