"""Flexsections course outline components."""

from .controls import EditControlView, render_control
from .section_tree import SectionTreeRenderer

__all__ = ["EditControlView", "render_control", "SectionTreeRenderer"]
