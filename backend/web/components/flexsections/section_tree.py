"""
Recursive outline of a flexsections course.

Each section renders as an ``<li class="section main">`` holding its
controls, title, summary and (when expanded, or at the top of the page) its
activities and a nested ``<ul class="flexsections flexsections-level-N">``
of subsections. The class names are the contract with the format's
stylesheet and drag-and-drop script.

All state comes from the course format; the renderer only reads it. Every
method returns a string and callers concatenate.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Union

from backend.flexsections.controls import EditControl
from backend.flexsections.domain import CollapsedState, Course, Section
from backend.flexsections.ports import CourseFormatProtocol, SectionRef

from ..base import Component
from ..markdown import format_summary_text
from .controls import render_control

logger = logging.getLogger("flexsections.render")

HIDDEN_FROM_STUDENTS = "Hidden from students"
EMPTY_ACTIVITY_DROPZONE = '<ul class="section img-text">\n</ul>\n'


class SectionTreeRenderer(Component):
    """Renders the section tree of one course.

    Args:
        course_format: Host collaborator for sections, controls and flags.
        pix_url: Base URL for control icons.
        wwwroot: Public base URL (file links inside summaries).
    """

    def __init__(self, course_format: CourseFormatProtocol, *, pix_url: str, wwwroot: str) -> None:
        self.format = course_format
        self.pix_url = pix_url
        self.wwwroot = wwwroot

    def render(self) -> str:
        return self.render_page(self.format.get_course(), 0, None)

    def render_page(self, course: Union[str, Course], section: SectionRef, sr: Optional[int]) -> str:
        """Full page body: "back to" header for subsections, then the tree."""
        course = self._resolve_course(course)
        back_to = self.format.get_back_to_control(section)
        return self.render_control(back_to) + self.render_section(course, section, sr, 0)

    def render_section(
        self, course: Union[str, Course], section: SectionRef, sr: Optional[int], level: int = 0
    ) -> str:
        """Render one section and, if it is expanded or at level 0, its subtree.

        Parameters:
            course: Course (or its id) the section belongs to.
            section: Section number or record.
            sr: Section number links should return to.
            level: Nesting depth on the page; 0 adds the outer list and the
                "cancel moving" banners.
        Returns:
            HTML, or an empty string for sections the viewer may not see.
        """
        if level < 0:
            raise ValueError("level must be >= 0")
        course = self._resolve_course(course)
        section = self.format.get_section(section)
        if not section.uservisible and not section.showavailability:
            logger.debug("Skipping section %s of course %s: not visible", section.number, course.id)
            return ""

        number = section.number
        moving = self.format.is_moving_section()
        parts: List[str] = []

        if level == 0:
            parts.extend(self.render_control(c) for c in self.format.get_edit_controls_cancelmoving())
            parts.append('<ul class="flexsections flexsections-level-0">')
            if not section.is_root:
                parts.append(self._insert_section_here(section.parent, number))

        li_class = self.classes(
            "section",
            "main",
            ismoving=moving is not None and moving == number,
            current=self.format.is_section_current(section),
            hidden=not section.visible,
        )
        if section.css_class:
            li_class = f"{li_class} {section.css_class}"
        parts.append(f"<li {self.attributes(class_=li_class, id=f'section-{number}')}>")

        controls_html, toggle = self._render_controls(section, sr)
        if controls_html:
            parts.append(self.tag("div", controls_html, class_="controls"))

        parts.append('<div class="content">')
        parts.append(self._render_title(section, toggle, suppress_link=level == 0 or moving is not None))
        parts.append(self._render_summary(course, section))
        parts.append(self._render_availability(section))

        if section.uservisible and (section.collapsed == CollapsedState.EXPANDED or level == 0):
            parts.append(self._render_content(course, section, sr, level, moving))

        parts.append("</div>")  # .content
        parts.append("</li>")  # .section

        if level == 0:
            if not section.is_root:
                parts.append(self._insert_section_here(section.parent))
            parts.append("</ul>")  # .flexsections
        return "".join(parts)

    def render_control(self, control: Optional[EditControl]) -> str:
        return render_control(control, pix_url=self.pix_url)

    # --------------------------------------------------------------------- #
    # Helpers
    # --------------------------------------------------------------------- #

    def _resolve_course(self, course: Union[str, Course]) -> Course:
        bound = self.format.get_course()
        course_id = course.id if isinstance(course, Course) else str(course)
        if course_id != bound.id:
            raise ValueError("course_mismatch")
        return bound

    def _render_controls(self, section: Section, sr: Optional[int]):
        """Edit controls except the collapse toggle, which goes into the title."""
        toggle = None
        rendered: List[str] = []
        for control in self.format.get_section_edit_controls(section, sr):
            if control.kind.is_toggle:
                toggle = control
            else:
                rendered.append(self.render_control(control))
        return "".join(rendered), toggle

    def _render_title(self, section: Section, toggle: Optional[EditControl], *, suppress_link: bool) -> str:
        if section.is_root:
            return ""
        title = self.escape(self.format.get_section_name(section))
        if not title:
            return ""
        url = None if suppress_link or not section.uservisible else self.format.get_view_url(section)
        if url:
            title = self.tag("a", title, href=url)
        if toggle:
            title = self.render_control(toggle) + title
        return self.tag("h3", title, class_="sectionname")

    def _render_summary(self, course: Course, section: Section) -> str:
        if not section.uservisible:
            # Hidden or restricted text stays on the server.
            return '<div class="summary nosummary"></div>'
        summary = format_summary_text(section, context_id=course.context_id, wwwroot=self.wwwroot)
        if summary:
            return self.tag("div", summary, class_="summary")
        return '<div class="summary nosummary"></div>'

    def _render_availability(self, section: Section) -> str:
        if not section.uservisible:
            if section.showavailability and section.available_info:
                return self.tag("div", self.escape(section.available_info), class_="availabilityinfo")
            return ""
        if not section.visible and self.format.can_view_hidden_sections():
            return self.tag("div", self.escape(HIDDEN_FROM_STUDENTS), class_="availabilityinfo ishidden")
        return ""

    def _render_content(
        self, course: Course, section: Section, sr: Optional[int], level: int, moving: Optional[int]
    ) -> str:
        parts: List[str] = [self.format.render_activity_list(section, sr)]
        if self.format.user_is_editing():
            # Empty list keeps the section a drop target for activities.
            if not self.format.get_section_activities(section):
                parts.append(EMPTY_ACTIVITY_DROPZONE)
            parts.append(self.format.render_add_activity_control(section, sr))

        children = self.format.get_subsections(section)
        if children or moving is not None:
            parts.append(f'<ul class="flexsections flexsections-level-{level + 1}">')
            for child in children:
                parts.append(self._insert_section_here(section, child))
                parts.append(self.render_section(course, child, sr, level + 1))
            parts.append(self._insert_section_here(section))
            parts.append("</ul>")  # .flexsections

        parts.append(self.render_control(self.format.get_add_section_control(section)))
        return "".join(parts)

    def _insert_section_here(self, parent: SectionRef, before: Optional[SectionRef] = None) -> str:
        """Drop target for the section being moved; empty outside moving mode."""
        return self.render_control(self.format.get_edit_control_movehere(parent, before))


__all__ = ["SectionTreeRenderer"]
