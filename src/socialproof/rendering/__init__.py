"""Rendering package - backends that put notifications on the page."""

from socialproof.rendering.html import HtmlPage, HtmlRenderer, create_renderer
from socialproof.rendering.protocols import (
    InteractionEvent,
    RecordingRenderer,
    RenderHandle,
    RenderingBackend,
)
from socialproof.rendering.themes import Theme, create_theme

__all__ = [
    "HtmlPage",
    "HtmlRenderer",
    "InteractionEvent",
    "RecordingRenderer",
    "RenderHandle",
    "RenderingBackend",
    "Theme",
    "create_renderer",
    "create_theme",
]
