"""
Icon and action-link components.

Icons are addressed like ``t/move`` or ``i/hide`` within a component
("moodle" for the shared set, "format_flexsections" for the format's own
icons) and resolved against the configured pix base URL.
"""
from __future__ import annotations

from typing import Optional

from .base import Component

CORE_COMPONENT = "moodle"
FORMAT_COMPONENT = "format_flexsections"


class PixIcon(Component):
    """An ``<img>`` for a named icon.

    Args:
        name: Icon path within the component, e.g. ``t/add``.
        alt: Alternative text; empty for decorative icons.
        pix_url: Base URL icons are served from.
        component: Icon set the name belongs to.
        css_class: Class of the image (``iconsmall``, ``movetarget``...).
        title: Tooltip, usually the same as ``alt``.
    """

    def __init__(
        self,
        name: str,
        alt: str = "",
        *,
        pix_url: str,
        component: str = CORE_COMPONENT,
        css_class: str = "icon",
        title: Optional[str] = None,
    ) -> None:
        self.name = name
        self.alt = alt
        self.pix_url = pix_url.rstrip("/")
        self.component = component
        self.css_class = css_class
        self.title = title

    @property
    def src(self) -> str:
        return f"{self.pix_url}/{self.component}/{self.name}.svg"

    def render(self) -> str:
        attrs = self.attributes(
            class_=self.css_class,
            alt=self.alt,
            title=self.title,
            src=self.src,
        )
        return f"<img {attrs}>"


class ActionLink(Component):
    """A link whose content is pre-rendered HTML (an icon, icon plus label)."""

    def __init__(self, url: str, content_html: str, *, css_class: Optional[str] = None) -> None:
        self.url = url
        self.content_html = content_html
        self.css_class = css_class

    def render(self) -> str:
        return self.tag("a", self.content_html, class_=self.css_class, href=self.url)


def link(url: str, text: str, css_class: Optional[str] = None) -> str:
    """Plain text link; the text is escaped."""
    return ActionLink(url, Component.escape(text), css_class=css_class).render()


__all__ = ["PixIcon", "ActionLink", "link", "CORE_COMPONENT", "FORMAT_COMPONENT"]
