"""
Course, section and activity records for the flexsections course format.

These are plain read models: the renderer only reads them, the in-memory
course format (``format_memory``) owns and mutates them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional


class CollapsedState(IntEnum):
    """Persisted per section; decides whether the outline shows its content."""

    EXPANDED = 0
    COLLAPSED = 1


class HiddenSections(IntEnum):
    """Course setting: how hidden sections appear to viewers without access."""

    SHOWN_COLLAPSED = 0
    INVISIBLE = 1


SUMMARY_FORMATS = ("html", "markdown", "plain")


@dataclass
class Course:
    id: str
    fullname: str
    context_id: int
    marker: int = 0
    hiddensections: HiddenSections = HiddenSections.SHOWN_COLLAPSED


@dataclass
class Section:
    """A node of the course outline.

    ``number`` is unique within the course; 0 is the root ("general") section
    and has no parent. ``uservisible``/``showavailability``/``available_info``
    describe availability for the current viewer and are filled in by the
    course format when the section is handed out.
    """

    id: int
    course_id: str
    number: int
    parent: Optional[int]
    name: str = ""
    summary: str = ""
    summary_format: str = "html"
    visible: bool = True
    collapsed: CollapsedState = CollapsedState.EXPANDED
    css_class: str = ""
    uservisible: bool = True
    showavailability: bool = False
    available_info: str = ""

    @property
    def is_root(self) -> bool:
        return self.number == 0


@dataclass
class Activity:
    id: int
    section: int
    name: str
    modname: str
    url: str = ""
    visible: bool = True


@dataclass
class CourseData:
    """Everything the store keeps for one course."""

    course: Course
    sections: dict[int, Section] = field(default_factory=dict)
    children: dict[int, list[int]] = field(default_factory=dict)
    activities: dict[int, list[Activity]] = field(default_factory=dict)
    moving_section: Optional[int] = None
    # Highest section number ever issued; numbers of merged sections are not reused.
    last_number: int = 0


def default_section_name(number: int) -> str:
    """Name shown for sections without an explicit name."""
    if number == 0:
        return "General"
    return f"Topic {number}"
