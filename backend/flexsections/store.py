"""
In-memory persistence for flexsections courses.

Why:
    The renderer needs a host that owns sections, their tree order and the
    transient "moving" state. This store plays that role for tests and local
    work; the mutations mirror the actions behind the rendered edit controls.

Errors:
    - Unknown courses/sections raise ``LookupError`` with a short code.
    - Structurally invalid requests raise ``ValueError`` with a short code.
"""
from __future__ import annotations

import itertools
import logging
from typing import Dict, List, Optional

from .domain import (
    Activity,
    CollapsedState,
    Course,
    CourseData,
    HiddenSections,
    Section,
    SUMMARY_FORMATS,
)

logger = logging.getLogger("flexsections.store")


class CourseStore:
    def __init__(self) -> None:
        self._courses: Dict[str, CourseData] = {}
        self._section_ids = itertools.count(1)
        self._activity_ids = itertools.count(1)
        self._context_ids = itertools.count(100)

    # --- Courses ------------------------------------------------------------

    def create_course(
        self,
        course_id: str,
        fullname: str,
        *,
        hiddensections: HiddenSections = HiddenSections.SHOWN_COLLAPSED,
        summary: str = "",
        summary_format: str = "html",
    ) -> Course:
        if course_id in self._courses:
            raise ValueError("course_exists")
        course = Course(
            id=course_id,
            fullname=fullname,
            context_id=next(self._context_ids),
            hiddensections=hiddensections,
        )
        data = CourseData(course=course)
        root = Section(
            id=next(self._section_ids),
            course_id=course_id,
            number=0,
            parent=None,
            summary=summary,
            summary_format=_check_format(summary_format),
        )
        data.sections[0] = root
        data.children[0] = []
        data.activities[0] = []
        self._courses[course_id] = data
        return course

    def get(self, course_id: str) -> CourseData:
        data = self._courses.get(course_id)
        if data is None:
            raise LookupError("course_not_found")
        return data

    def has_course(self, course_id: str) -> bool:
        return course_id in self._courses

    # --- Sections -----------------------------------------------------------

    def section(self, course_id: str, number: int) -> Section:
        section = self.get(course_id).sections.get(number)
        if section is None:
            raise LookupError("section_not_found")
        return section

    def children(self, course_id: str, number: int) -> List[int]:
        self.section(course_id, number)
        return list(self.get(course_id).children.get(number, []))

    def add_section(
        self,
        course_id: str,
        parent: int = 0,
        *,
        name: str = "",
        summary: str = "",
        summary_format: str = "html",
        visible: bool = True,
        collapsed: CollapsedState = CollapsedState.EXPANDED,
        css_class: str = "",
        before: Optional[int] = None,
    ) -> Section:
        """Create a section as the last child of ``parent`` (or before ``before``)."""
        data = self.get(course_id)
        self.section(course_id, parent)
        data.last_number += 1
        number = data.last_number
        section = Section(
            id=next(self._section_ids),
            course_id=course_id,
            number=number,
            parent=parent,
            name=name,
            summary=summary,
            summary_format=_check_format(summary_format),
            visible=visible,
            collapsed=collapsed,
            css_class=css_class,
        )
        data.sections[number] = section
        data.children[number] = []
        data.activities[number] = []
        self._insert_child(data, parent, number, before)
        logger.debug("Created section %s in course %s under %s", number, course_id, parent)
        return section

    def is_descendant(self, course_id: str, number: int, ancestor: int) -> bool:
        """True when ``number`` lies strictly below ``ancestor``."""
        data = self.get(course_id)
        current = data.sections[number].parent if number in data.sections else None
        seen = set()
        while current is not None and current not in seen:
            if current == ancestor:
                return True
            seen.add(current)
            current = data.sections[current].parent
        return False

    def move_section(self, course_id: str, number: int, parent: int, before: Optional[int] = None) -> Section:
        data = self.get(course_id)
        section = self.section(course_id, number)
        self.section(course_id, parent)
        if section.is_root or parent == number or self.is_descendant(course_id, parent, number):
            raise ValueError("invalid_move")
        if before == number and parent == section.parent:
            # Dropped right in front of itself: position unchanged.
            data.moving_section = None
            return section
        if before is not None and (before == number or before not in data.children.get(parent, [])):
            raise ValueError("invalid_move")
        data.children[section.parent].remove(number)
        self._insert_child(data, parent, number, before)
        section.parent = parent
        data.moving_section = None
        logger.debug("Moved section %s of course %s to parent %s before %s", number, course_id, parent, before)
        return section

    def merge_up(self, course_id: str, number: int) -> Section:
        """Fold a section into its parent: activities and subsections move up.

        Returns the parent section.
        """
        data = self.get(course_id)
        section = self.section(course_id, number)
        if section.is_root or section.parent is None:
            raise ValueError("cannot_merge_root")
        parent = section.parent
        siblings = data.children[parent]
        position = siblings.index(number)
        orphans = data.children.pop(number, [])
        for child in orphans:
            data.sections[child].parent = parent
        siblings[position:position + 1] = orphans
        for activity in data.activities.pop(number, []):
            activity.section = parent
            data.activities[parent].append(activity)
        del data.sections[number]
        if data.course.marker == number:
            data.course.marker = 0
        if data.moving_section == number:
            data.moving_section = None
        logger.debug("Merged section %s of course %s into %s", number, course_id, parent)
        return data.sections[parent]

    def switch_collapsed(self, course_id: str, number: int) -> CollapsedState:
        section = self.section(course_id, number)
        if section.collapsed == CollapsedState.EXPANDED:
            section.collapsed = CollapsedState.COLLAPSED
        else:
            section.collapsed = CollapsedState.EXPANDED
        return section.collapsed

    def set_visibility(self, course_id: str, number: int, visible: bool) -> None:
        section = self.section(course_id, number)
        if section.is_root:
            raise ValueError("cannot_hide_root")
        section.visible = visible

    def set_marker(self, course_id: str, number: int) -> None:
        """Highlight ``number`` as the current section (0 clears the marker)."""
        data = self.get(course_id)
        if number:
            self.section(course_id, number)
        data.course.marker = number

    def start_moving(self, course_id: str, number: int) -> None:
        section = self.section(course_id, number)
        if section.is_root:
            raise ValueError("invalid_move")
        self.get(course_id).moving_section = number

    def cancel_moving(self, course_id: str) -> None:
        self.get(course_id).moving_section = None

    # --- Activities ---------------------------------------------------------

    def add_activity(
        self, course_id: str, section: int, name: str, modname: str, *, url: str = "", visible: bool = True
    ) -> Activity:
        data = self.get(course_id)
        self.section(course_id, section)
        activity = Activity(
            id=next(self._activity_ids),
            section=section,
            name=name,
            modname=modname,
            url=url,
            visible=visible,
        )
        data.activities[section].append(activity)
        return activity

    def activities(self, course_id: str, section: int) -> List[Activity]:
        self.section(course_id, section)
        return list(self.get(course_id).activities.get(section, []))

    # --- Internals ----------------------------------------------------------

    @staticmethod
    def _insert_child(data: CourseData, parent: int, number: int, before: Optional[int]) -> None:
        siblings = data.children.setdefault(parent, [])
        if before is not None and before in siblings:
            siblings.insert(siblings.index(before), number)
        else:
            siblings.append(number)


def _check_format(summary_format: str) -> str:
    if summary_format not in SUMMARY_FORMATS:
        raise ValueError("invalid_summary_format")
    return summary_format


__all__ = ["CourseStore"]
