"""
Page layout for the flexsections course view.

Wraps the pre-rendered outline into a complete HTML document. The body gets
an ``editing`` class in editing mode so the format stylesheet and
drag-and-drop script only activate there.
"""

from .base import Component


class CoursePage(Component):
    """Complete HTML document around the course outline"""

    def __init__(self, title: str, content: str, *, editing: bool = False):
        """
        Args:
            title: Course name (will be escaped)
            content: Outline HTML (pre-rendered components)
            editing: Whether the page is in editing mode
        """
        self.title = title
        self.content = content
        self.editing = editing

    def render(self) -> str:
        body_class = self.classes("format-flexsections", editing=self.editing)
        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    {self._render_head()}
</head>
<body class="{body_class}">
    <main id="main-content" class="course-content" role="main">
        <h2 class="coursename">{self.escape(self.title)}</h2>
        {self.content}
    </main>
</body>
</html>"""

    def _render_head(self) -> str:
        return f"""
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">

    <!-- Security headers -->
    <meta http-equiv="X-Content-Type-Options" content="nosniff">
    <meta http-equiv="X-Frame-Options" content="SAMEORIGIN">

    <title>{self.escape(self.title)}</title>
    """
