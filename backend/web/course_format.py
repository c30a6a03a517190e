"""
In-memory flexsections course format.

Why:
    The section tree renderer depends on a host for sections, capability
    flags and the URLs behind each edit control. This adapter answers those
    questions from a ``CourseStore`` for one course and one viewer, so the
    outline can be served and tested without an LMS behind it.

Notes:
    - Built per request: ``editing`` and ``can_view_hidden`` describe the
      viewer, ``sr`` is the section links return to.
    - Control URLs point at ``/courses/{course_id}/view`` with action query
      parameters that ``routes.course_format`` applies.
    - The settings link (``/courses/{id}/sections/{n}/edit``) and the
      add-activity link (``/courses/{id}/modedit``) target host-owned pages
      (section settings form, activity chooser); this app does not serve them.
"""
from __future__ import annotations

from dataclasses import replace
from typing import List, Optional
from urllib.parse import urlencode

from backend.flexsections.controls import ControlKind, EditControl
from backend.flexsections.domain import (
    Activity,
    CollapsedState,
    Course,
    HiddenSections,
    Section,
    default_section_name,
)
from backend.flexsections.ports import SectionRef
from backend.flexsections.store import CourseStore

from .components.activities import ActivityList, AddActivityMenu

NOT_AVAILABLE = "Not available"


class InMemoryCourseFormat:
    def __init__(
        self,
        store: CourseStore,
        course_id: str,
        *,
        wwwroot: str,
        editing: bool = False,
        can_view_hidden: bool = False,
        sr: Optional[int] = None,
    ) -> None:
        self.store = store
        self.course_id = course_id
        self.wwwroot = wwwroot.rstrip("/")
        self.editing = editing
        self.can_view_hidden = can_view_hidden
        self.sr = sr
        # Fail early for unknown courses.
        self.store.get(course_id)

    # --- Course and sections -------------------------------------------------

    def get_course(self) -> Course:
        return self.store.get(self.course_id).course

    def get_section(self, section: SectionRef) -> Section:
        """Return a viewer-specific copy with availability fields filled in."""
        record = self.store.section(self.course_id, self._number(section))
        if self._visible_with_ancestors(record) or self.can_view_hidden:
            return replace(record, uservisible=True, showavailability=False, available_info="")
        shown = self.get_course().hiddensections == HiddenSections.SHOWN_COLLAPSED
        return replace(
            record,
            uservisible=False,
            showavailability=shown,
            available_info=NOT_AVAILABLE if shown else "",
        )

    def get_subsections(self, section: SectionRef) -> List[int]:
        return self.store.children(self.course_id, self._number(section))

    def is_moving_section(self) -> Optional[int]:
        return self.store.get(self.course_id).moving_section

    def is_section_current(self, section: SectionRef) -> bool:
        number = self._number(section)
        return bool(number) and self.get_course().marker == number

    def get_section_name(self, section: SectionRef) -> str:
        record = self.store.section(self.course_id, self._number(section))
        return record.name or default_section_name(record.number)

    def get_view_url(self, section: SectionRef) -> Optional[str]:
        number = self._number(section)
        return self._url({"section": number} if number else {})

    def user_is_editing(self) -> bool:
        return self.editing

    def can_view_hidden_sections(self) -> bool:
        return self.can_view_hidden

    # --- Controls -----------------------------------------------------------

    def get_section_edit_controls(self, section: SectionRef, sr: Optional[int]) -> List[EditControl]:
        if not self.editing:
            return []
        record = self.store.section(self.course_id, self._number(section))
        number = record.number
        controls: List[EditControl] = []
        if not record.is_root:
            if self.is_moving_section() is None:
                controls.append(EditControl(ControlKind.MOVE, self._action_url(sr, moving=number), "Move"))
            if record.parent:
                controls.append(
                    EditControl(ControlKind.MERGEUP, self._action_url(sr, mergeup=number), "Merge with parent")
                )
            if self.is_section_current(number):
                controls.append(EditControl(ControlKind.MARKED, self._action_url(sr, marker=0), "Current section"))
            else:
                controls.append(EditControl(ControlKind.MARKER, self._action_url(sr, marker=number), "Highlight"))
            if record.visible:
                controls.append(EditControl(ControlKind.HIDE, self._action_url(sr, hide=number), "Hide"))
            else:
                controls.append(EditControl(ControlKind.SHOW, self._action_url(sr, show=number), "Show"))
            if record.collapsed == CollapsedState.EXPANDED:
                controls.append(
                    EditControl(ControlKind.EXPANDED, self._action_url(sr, switchcollapsed=number), "Collapse")
                )
            else:
                controls.append(
                    EditControl(ControlKind.COLLAPSED, self._action_url(sr, switchcollapsed=number), "Expand")
                )
        settings_url = f"{self.wwwroot}/courses/{self.course_id}/sections/{number}/edit"
        if sr is not None:
            settings_url += "?" + urlencode({"sr": sr})
        controls.append(EditControl(ControlKind.SETTINGS, settings_url, "Edit section"))
        return controls

    def get_edit_controls_cancelmoving(self) -> List[EditControl]:
        moving = self.is_moving_section()
        if moving is None:
            return []
        name = self.get_section_name(moving)
        return [
            EditControl(
                ControlKind.CANCEL_MOVING_SECTION,
                self._action_url(self.sr, cancel=1),
                f"Cancel moving '{name}'",
            )
        ]

    def get_add_section_control(self, section: SectionRef) -> Optional[EditControl]:
        if not self.editing:
            return None
        number = self._number(section)
        text = "Add section" if number == 0 else "Add subsection"
        return EditControl(ControlKind.ADD_SECTION, self._action_url(self.sr, addchildsection=number), text)

    def get_edit_control_movehere(
        self, parent: SectionRef, before: Optional[SectionRef] = None
    ) -> Optional[EditControl]:
        moving = self.is_moving_section()
        if moving is None:
            return None
        parent_number = self._number(parent)
        if parent_number == moving or self.store.is_descendant(self.course_id, parent_number, moving):
            return None
        params = {"moveto": moving, "parent": parent_number}
        if before is not None:
            params["before"] = self._number(before)
        return EditControl(ControlKind.MOVEHERE, self._action_url(self.sr, **params), "Move here")

    def get_back_to_control(self, section: SectionRef) -> Optional[EditControl]:
        record = self.store.section(self.course_id, self._number(section))
        if record.is_root or record.parent is None:
            return None
        parent_name = self.get_section_name(record.parent)
        return EditControl(ControlKind.BACK_TO, self.get_view_url(record.parent), f"Back to {parent_name}")

    # --- Activities ---------------------------------------------------------

    def get_section_activities(self, section: SectionRef) -> List[Activity]:
        return self.store.activities(self.course_id, self._number(section))

    def render_activity_list(self, section: SectionRef, sr: Optional[int]) -> str:
        return ActivityList(
            self.get_section_activities(section),
            show_hidden=self.editing or self.can_view_hidden,
        ).render()

    def render_add_activity_control(self, section: SectionRef, sr: Optional[int]) -> str:
        if not self.editing:
            return ""
        number = self._number(section)
        params = {"section": number}
        if sr is not None:
            params["sr"] = sr
        url = f"{self.wwwroot}/courses/{self.course_id}/modedit?" + urlencode(params)
        return AddActivityMenu(number, url).render()

    # --- Internals ----------------------------------------------------------

    @staticmethod
    def _number(section: SectionRef) -> int:
        return section.number if isinstance(section, Section) else int(section)

    def _visible_with_ancestors(self, record: Section) -> bool:
        current: Optional[Section] = record
        while current is not None:
            if not current.visible:
                return False
            current = self.store.section(self.course_id, current.parent) if current.parent is not None else None
        return True

    def _url(self, params: dict) -> str:
        base = f"{self.wwwroot}/courses/{self.course_id}/view"
        return f"{base}?{urlencode(params)}" if params else base

    def _action_url(self, sr: Optional[int], **action: int) -> str:
        params: dict = {}
        if sr is not None:
            params["section"] = sr
        params["edit"] = "on"
        params.update(action)
        return self._url(params)


__all__ = ["InMemoryCourseFormat", "NOT_AVAILABLE"]
