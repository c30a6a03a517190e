"""
Activity list and add-activity menu shown inside a section.
"""

from typing import Iterable, List

from backend.flexsections.domain import Activity

from .base import Component


class ActivityList(Component):
    """Renders a section's activities as ``<ul class="section img-text">``.

    Hidden activities are shown dimmed when ``show_hidden`` is set and left
    out otherwise. Nothing is rendered for an empty list.
    """

    def __init__(self, activities: Iterable[Activity], *, show_hidden: bool = False) -> None:
        self.activities = list(activities)
        self.show_hidden = show_hidden

    def render(self) -> str:
        items: List[str] = []
        for activity in self.activities:
            if not activity.visible and not self.show_hidden:
                continue
            items.append(self._render_item(activity))
        if not items:
            return ""
        return '<ul class="section img-text">' + "".join(items) + "</ul>"

    def _render_item(self, activity: Activity) -> str:
        modname = self.escape(activity.modname)
        li_class = self.classes("activity", modname, f"modtype_{modname}", dimmed=not activity.visible)
        name = self.escape(activity.name)
        label = self.tag("a", name, href=activity.url) if activity.url else self.tag("span", name, class_="instancename")
        return (
            f"<li {self.attributes(class_=li_class, id=f'module-{activity.id}')}>"
            f'<div class="activityinstance">{label}</div>'
            "</li>"
        )


class AddActivityMenu(Component):
    def __init__(self, section_number: int, url: str, text: str = "Add an activity or resource") -> None:
        self.section_number = section_number
        self.url = url
        self.text = text

    def render(self) -> str:
        link = self.tag("a", self.escape(self.text), class_="addactivity", href=self.url)
        return self.tag("div", link, class_="section_add_menus", id=f"add_menus-section-{self.section_number}")
