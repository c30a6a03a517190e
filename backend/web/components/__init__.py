# Flexsections component system
# Pure Python components for HTML generation

from .base import Component
from .layout import CoursePage
from .icons import PixIcon, ActionLink
from .activities import ActivityList, AddActivityMenu
from .flexsections import EditControlView, SectionTreeRenderer, render_control

__all__ = [
    "Component",
    "CoursePage",
    "PixIcon",
    "ActionLink",
    "ActivityList",
    "AddActivityMenu",
    "EditControlView",
    "SectionTreeRenderer",
    "render_control",
]
