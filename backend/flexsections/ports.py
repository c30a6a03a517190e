"""
Collaborator contract consumed by the section tree renderer.

Keep this small and framework-agnostic so tests can supply simple fakes.
The course format owns persistence, permissions and URLs; the renderer
only asks questions through this interface.
"""
from __future__ import annotations

from typing import Optional, Protocol, Sequence, Union

from .controls import EditControl
from .domain import Activity, Course, Section

SectionRef = Union[int, Section]


class CourseFormatProtocol(Protocol):
    def get_course(self) -> Course: ...

    def get_section(self, section: SectionRef) -> Section:
        """Resolve a section number (or record) to the viewer's section record.

        Raises:
            LookupError: when the course has no such section.
        """
        ...

    def get_subsections(self, section: SectionRef) -> list[int]:
        """Child section numbers in display order."""
        ...

    def is_moving_section(self) -> Optional[int]: ...

    def is_section_current(self, section: SectionRef) -> bool: ...

    def get_section_name(self, section: SectionRef) -> str: ...

    def get_view_url(self, section: SectionRef) -> Optional[str]: ...

    def get_section_edit_controls(self, section: SectionRef, sr: Optional[int]) -> Sequence[EditControl]: ...

    def get_edit_controls_cancelmoving(self) -> Sequence[EditControl]: ...

    def get_add_section_control(self, section: SectionRef) -> Optional[EditControl]: ...

    def get_edit_control_movehere(
        self, parent: SectionRef, before: Optional[SectionRef] = None
    ) -> Optional[EditControl]: ...

    def get_back_to_control(self, section: SectionRef) -> Optional[EditControl]: ...

    def get_section_activities(self, section: SectionRef) -> list[Activity]: ...

    def render_activity_list(self, section: SectionRef, sr: Optional[int]) -> str: ...

    def render_add_activity_control(self, section: SectionRef, sr: Optional[int]) -> str: ...

    def user_is_editing(self) -> bool: ...

    def can_view_hidden_sections(self) -> bool: ...


__all__ = ["CourseFormatProtocol", "SectionRef"]
