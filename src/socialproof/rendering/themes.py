"""Theme variants for rendered notifications.

Each theme supplies the CSS class set and template used to build the
markup. ``create_theme`` is the only place a configured theme name is
mapped to a variant.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import ClassVar, Final

logger: Final = logging.getLogger(__name__)

ICONS: Final = {
    "checkmark": (
        '<svg fill="none" stroke="currentColor" viewBox="0 0 24 24"><path stroke-linecap="round" '
        'stroke-linejoin="round" stroke-width="2" d="M5 13l4 4L19 7"></path></svg>'
    ),
    "fire": (
        '<svg fill="currentColor" viewBox="0 0 24 24"><path d="M12 23a7.5 7.5 0 0 1-5.138-12.963'
        "C8.204 8.774 11.5 6.5 11 1.5c6 4 9 8 3 14 1 0 2.5 0 5-2.47.27.773.5 1.604.5 2.47A7.5 7.5 "
        '0 0 1 12 23z"></path></svg>'
    ),
    "star": (
        '<svg fill="currentColor" viewBox="0 0 24 24"><path d="M12 2l3.09 6.26L22 9.27l-5 4.87 '
        '1.18 6.88L12 17.77l-6.18 3.25L7 14.14 2 9.27l6.91-1.01L12 2z"></path></svg>'
    ),
}

CLOSE_ICON: Final = (
    '<svg fill="none" stroke="currentColor" viewBox="0 0 24 24"><path stroke-linecap="round" '
    'stroke-linejoin="round" stroke-width="2" d="M6 18L18 6M6 6l12 12"></path></svg>'
)


def icon_svg(icon_type: str) -> str:
    """Return the SVG glyph for an icon kind, defaulting to the checkmark."""
    return ICONS.get(icon_type, ICONS["checkmark"])


@dataclass(frozen=True)
class ThemeClasses:
    """CSS classes applied to each part of a notification."""

    container: str
    wrapper: str
    icon_wrapper: str
    icon: str
    content: str
    message: str
    timestamp: str
    close_button: str


class Theme:
    """Base theme variant.

    Subclasses set ``name``, ``classes`` and ``template``. Only themes that
    ship their own stylesheet animate or mark the exit transition.
    """

    name: ClassVar[str]
    classes: ClassVar[ThemeClasses]
    template: ClassVar[str]
    animated: ClassVar[bool] = False
    exit_class: ClassVar[str | None] = None
    ships_styles: ClassVar[bool] = False

    def container_classes(self, animation: str, exiting: bool = False) -> str:
        """Class attribute of the notification element."""
        parts = [self.classes.container]
        if self.animated and animation != "none":
            parts.append(f"animate-{animation}")
        if exiting and self.exit_class:
            parts.append(self.exit_class)
        return " ".join(parts)


class DefaultTheme(Theme):
    """Vanilla CSS theme with its own stylesheet."""

    name = "default"
    classes = ThemeClasses(
        container="spn-notification",
        wrapper="spn-wrapper",
        icon_wrapper="spn-icon-wrapper",
        icon="spn-icon",
        content="spn-content",
        message="spn-message",
        timestamp="spn-timestamp",
        close_button="spn-close",
    )
    template = "default.html.j2"
    animated = True
    exit_class = "hiding"
    ships_styles = True


class BootstrapTheme(Theme):
    """Bootstrap 5 toast markup."""

    name = "bootstrap"
    classes = ThemeClasses(
        container="toast show",
        wrapper="d-flex align-items-start gap-3 px-3 py-2",
        icon_wrapper="flex-shrink-0",
        icon="bi bi-check-circle-fill text-success fs-4",
        content="flex-grow-1",
        message="mb-1 fw-semibold",
        timestamp="text-muted small",
        close_button="btn-close ms-auto",
    )
    template = "bootstrap.html.j2"


class TailwindTheme(Theme):
    """Tailwind CSS utility classes."""

    name = "tailwind"
    classes = ThemeClasses(
        container="bg-white border border-gray-200 rounded-lg shadow-lg p-4",
        wrapper="flex items-start justify-between",
        icon_wrapper="flex-shrink-0",
        icon="w-5 h-5 text-green-600",
        content="flex-1 min-w-0 ml-3",
        message="text-sm text-gray-600",
        timestamp="text-xs text-gray-400 mt-1",
        close_button="flex-shrink-0 ml-2 text-gray-400 hover:text-gray-600 transition-colors",
    )
    template = "tailwind.html.j2"


class CustomTheme(DefaultTheme):
    """Default class set under a caller-supplied stylesheet.

    Used for theme names that are not built in. The host page styles the
    markup, so no stylesheet, animation class or icon glyph is emitted.
    """

    name = "custom"
    template = "custom.html.j2"
    animated = False
    exit_class = None
    ships_styles = False


THEMES: Final[dict[str, type[Theme]]] = {
    theme.name: theme for theme in (DefaultTheme, BootstrapTheme, TailwindTheme)
}


def create_theme(name: str) -> Theme:
    """Create the theme variant for a configured name.

    Unknown names (for example a custom CSS class) keep the default class
    set but leave styling and animation to the host page.
    """
    theme_cls = THEMES.get(name)
    if theme_cls is None:
        logger.warning("Unknown theme %r → using default classes without built-in styles", name)
        return CustomTheme()
    return theme_cls()
