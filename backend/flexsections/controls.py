"""
Edit controls produced by the course format for each section.

A control is a tagged value: the kind decides how the renderer draws it,
the URL is where a click leads and the text is the label/tooltip.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ControlKind(str, Enum):
    MOVEHERE = "movehere"
    CANCEL_MOVING_SECTION = "cancelmovingsection"
    CANCEL_MOVING_ACTIVITY = "cancelmovingactivity"
    ADD_SECTION = "addsection"
    BACK_TO = "backto"
    SETTINGS = "settings"
    MARKER = "marker"
    MARKED = "marked"
    MOVE = "move"
    EXPANDED = "expanded"
    COLLAPSED = "collapsed"
    HIDE = "hide"
    SHOW = "show"
    MERGEUP = "mergeup"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> "ControlKind":
        """Map a class string to a kind; anything unrecognised is UNKNOWN."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_toggle(self) -> bool:
        return self in (ControlKind.EXPANDED, ControlKind.COLLAPSED)


@dataclass(frozen=True)
class EditControl:
    kind: ControlKind
    url: str
    text: str = ""
    # CSS class used when the kind is UNKNOWN (keeps the host's class string).
    css_class: str = ""

    @property
    def class_name(self) -> str:
        if self.kind is ControlKind.UNKNOWN and self.css_class:
            return self.css_class
        return self.kind.value


__all__ = ["ControlKind", "EditControl"]
