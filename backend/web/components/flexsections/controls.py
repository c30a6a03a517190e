"""
Markup for flexsections edit controls.

Every ``ControlKind`` maps to exactly one renderer in ``_RENDERERS``; the
table is checked against the enum at import time so a new kind cannot be
added without deciding how it looks.
"""
from __future__ import annotations

from typing import Callable, Dict, Optional

from backend.flexsections.controls import ControlKind, EditControl

from ..base import Component
from ..icons import ActionLink, CORE_COMPONENT, FORMAT_COMPONENT, PixIcon, link


class EditControlView(Component):
    """Renders one edit control.

    Args:
        control: The control to draw; ``None`` renders nothing.
        pix_url: Base URL for control icons.
    """

    def __init__(self, control: Optional[EditControl], *, pix_url: str) -> None:
        self.control = control
        self.pix_url = pix_url

    def render(self) -> str:
        if not self.control:
            return ""
        return _RENDERERS[self.control.kind](self)

    # --- Helpers ------------------------------------------------------------

    def _icon(self, name: str, *, component: str = CORE_COMPONENT, css_class: str = "iconsmall", labelled: bool = True) -> str:
        text = self.control.text if labelled else ""
        return PixIcon(
            name,
            text,
            pix_url=self.pix_url,
            component=component,
            css_class=css_class,
            title=self.control.text if labelled else None,
        ).render()

    def _icon_link(self, icon_html: str) -> str:
        return ActionLink(self.control.url, icon_html, css_class=self.control.class_name).render()

    def _labelled(self, icon_html: str) -> str:
        label = self.tag("span", self.escape(self.control.text), class_=f"{self.control.class_name}-text")
        return icon_html + label

    # --- Renderers by kind --------------------------------------------------

    def _render_movehere(self) -> str:
        icon = self._icon("movehere", css_class="movetarget")
        return self.tag("li", self._icon_link(icon), class_="movehere")

    def _render_cancel_moving(self) -> str:
        return self.tag(
            "div",
            link(self.control.url, self.control.text),
            class_=f"cancelmoving {self.control.class_name}",
        )

    def _render_add_section(self) -> str:
        content = self._labelled(self._icon("t/add", labelled=False))
        return self.tag("div", self._icon_link(content), class_="mdl-right")

    def _render_back_to(self) -> str:
        content = self._labelled(self._icon("t/up", css_class="icon", labelled=False))
        return self.tag(
            "div",
            ActionLink(self.control.url, content).render(),
            class_=f"header {self.control.class_name}",
        )

    def _render_info_icon(self) -> str:
        return self._icon_link(self._icon(f"i/{self.control.class_name}"))

    def _render_tool_icon(self) -> str:
        return self._icon_link(self._icon(f"t/{self.control.class_name}"))

    def _render_mergeup(self) -> str:
        return self._icon_link(self._icon("mergeup", component=FORMAT_COMPONENT))

    def _render_unknown(self) -> str:
        return " " + link(self.control.url, self.control.text, self.control.class_name)


_RENDERERS: Dict[ControlKind, Callable[[EditControlView], str]] = {
    ControlKind.MOVEHERE: EditControlView._render_movehere,
    ControlKind.CANCEL_MOVING_SECTION: EditControlView._render_cancel_moving,
    ControlKind.CANCEL_MOVING_ACTIVITY: EditControlView._render_cancel_moving,
    ControlKind.ADD_SECTION: EditControlView._render_add_section,
    ControlKind.BACK_TO: EditControlView._render_back_to,
    ControlKind.SETTINGS: EditControlView._render_info_icon,
    ControlKind.MARKER: EditControlView._render_info_icon,
    ControlKind.MARKED: EditControlView._render_info_icon,
    ControlKind.HIDE: EditControlView._render_info_icon,
    ControlKind.SHOW: EditControlView._render_info_icon,
    ControlKind.MOVE: EditControlView._render_tool_icon,
    ControlKind.EXPANDED: EditControlView._render_tool_icon,
    ControlKind.COLLAPSED: EditControlView._render_tool_icon,
    ControlKind.MERGEUP: EditControlView._render_mergeup,
    ControlKind.UNKNOWN: EditControlView._render_unknown,
}

_missing = set(ControlKind) - set(_RENDERERS)
if _missing:  # pragma: no cover - guards future enum additions
    raise RuntimeError(f"No renderer for control kinds: {sorted(k.value for k in _missing)}")


def render_control(control: Optional[EditControl], *, pix_url: str) -> str:
    return EditControlView(control, pix_url=pix_url).render()


__all__ = ["EditControlView", "render_control"]
