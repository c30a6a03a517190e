"""
Section summary formatting.

Why:
- Summaries are authored by course editors as HTML, markdown or plain text and may
  embed files through the ``@@PLUGINFILE@@`` placeholder.
- The outline shows them to every course participant, so the output is
  sanitised against a whitelist whatever the input format.

Security model:
- Markdown is parsed with raw HTML disabled.
- HTML summaries are kept as authored but passed through ``bleach``.
"""
from __future__ import annotations

from markdown_it import MarkdownIt
import bleach

from backend.flexsections.domain import Section

from .base import Component

PLUGINFILE_PLACEHOLDER = "@@PLUGINFILE@@"

_ALLOWED_TAGS = [
    "p",
    "br",
    "div",
    "span",
    "strong",
    "b",
    "em",
    "i",
    "u",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "table",
    "thead",
    "tbody",
    "tr",
    "th",
    "td",
    "ul",
    "ol",
    "li",
    "code",
    "pre",
    "blockquote",
    "a",
    "img",
]

_ALLOWED_ATTRIBUTES = {
    "a": ["href", "title", "target"],
    "img": ["src", "alt", "title", "width", "height"],
    "div": ["class"],
    "span": ["class"],
}

_ALLOWED_PROTOCOLS = ["http", "https", "mailto"]

# Parser configuration:
# - html=False: do not render raw HTML from input.
# - linkify=False: avoid auto-linking plain URLs.
# - typographer=False: keep output deterministic (no auto smart quotes).
# - breaks=True: keep single newlines as <br>.
_MD = MarkdownIt(
    "commonmark",
    {
        "html": False,
        "linkify": False,
        "typographer": False,
        "breaks": True,
    },
).enable("table")


def sanitize_html(html: str) -> str:
    return bleach.clean(
        html,
        tags=_ALLOWED_TAGS,
        attributes=_ALLOWED_ATTRIBUTES,
        protocols=_ALLOWED_PROTOCOLS,
        strip=False,
    ).strip()


def render_markdown_safe(src: str) -> str:
    """Render markdown to sanitised HTML; raw HTML in the source stays text."""
    if not src:
        return ""
    return sanitize_html(_MD.render(str(src)))


def rewrite_pluginfile_urls(text: str, *, wwwroot: str, context_id: int, section_id: int) -> str:
    """Point embedded-file placeholders at the section's file area."""
    base = f"{wwwroot.rstrip('/')}/pluginfile.php/{context_id}/course/section/{section_id}"
    return text.replace(PLUGINFILE_PLACEHOLDER, base)


def format_summary_text(section: Section, *, context_id: int, wwwroot: str) -> str:
    """Format a section summary for display in the outline.

    Parameters:
        section: Section whose ``summary``/``summary_format`` are rendered.
        context_id: Course context the section's files belong to.
        wwwroot: Public base URL used for file links.
    Returns:
        Sanitised HTML, or an empty string when there is nothing to show.
    """
    if not section.summary or not section.summary.strip():
        return ""
    text = rewrite_pluginfile_urls(
        section.summary, wwwroot=wwwroot, context_id=context_id, section_id=section.id
    )
    if section.summary_format == "markdown":
        return render_markdown_safe(text)
    if section.summary_format == "plain":
        return Component.escape(text.strip()).replace("\n", "<br>")
    return sanitize_html(text)
