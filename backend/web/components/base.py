"""
Base Component class for flexsections markup.

Pure Python HTML generation: every component returns a string from
``render()`` and escapes untrusted text through the helpers below.
"""

from typing import Optional, Any
import html


class Component:
    """Base class for all markup components.

    Subclasses keep their inputs as attributes and build the HTML in
    ``render()``; no output buffering, callers concatenate the results.
    """

    def render(self) -> str:
        raise NotImplementedError("Subclasses must implement render()")

    @staticmethod
    def escape(text: Optional[Any]) -> str:
        """Escape HTML entities; None becomes an empty string."""
        return html.escape(str(text)) if text is not None else ""

    @staticmethod
    def classes(*args: str, **conditionals: bool) -> str:
        """Build a CSS class string, skipping empty and false entries.

        Example:
            >>> Component.classes("section", "main", ismoving=False, current=True)
            "section main current"
        """
        classes = [arg for arg in args if arg]
        classes.extend(key for key, value in conditionals.items() if value)
        return " ".join(classes)

    @staticmethod
    def attributes(**attrs: Any) -> str:
        """Build HTML attributes from keyword arguments.

        Trailing underscores map reserved names (``class_`` -> ``class``),
        inner underscores become hyphens, True renders a bare attribute and
        False/None drop the attribute.

        Example:
            >>> Component.attributes(class_="movehere", href="/x", data_section=3)
            'class="movehere" href="/x" data-section="3"'
        """
        result = []
        for key, value in attrs.items():
            if key.endswith("_"):
                key = key[:-1]
            else:
                key = key.replace("_", "-")

            if value is True:
                result.append(key)
            elif value is not False and value is not None:
                result.append(f'{key}="{html.escape(str(value))}"')

        return " ".join(result)

    def tag(self, name: str, content: str = "", **attrs: Any) -> str:
        """Wrap already-rendered ``content`` in an element."""
        attr_str = self.attributes(**attrs)
        open_tag = f"<{name} {attr_str}>" if attr_str else f"<{name}>"
        return f"{open_tag}{content}</{name}>"
