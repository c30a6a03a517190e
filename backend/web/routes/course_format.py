"""
Flexsections course page routes.

Why:
    Serve the course outline as server-rendered HTML and apply the actions
    behind its edit controls (collapse, highlight, hide/show, move, add,
    merge). The links rendered by the outline point back at this endpoint.

Notes:
    - Persistence is an injected ``CourseStore``; tests call `set_store`.
    - Actions only run in editing mode (`edit=on`) and answer with a 303
      redirect to the clean page URL, so reloading never repeats an action.
    - Actions are refused with 403 when Origin/Referer name a foreign site.
    - Editing viewers may also see hidden sections.
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response

from backend.flexsections.store import CourseStore

from ..components.flexsections import SectionTreeRenderer
from ..components.layout import CoursePage
from ..config import FlexsectionsConfig, load_config
from ..course_format import InMemoryCourseFormat
from .security import _has_origin_indicator, _is_same_origin

course_format_router = APIRouter(tags=["Course format"])
logger = logging.getLogger("flexsections.web.course_format")

_STORE: CourseStore = CourseStore()
_CONFIG: Optional[FlexsectionsConfig] = None

# Action parameters in the order they are checked; one action per request.
_ACTIONS = ("switchcollapsed", "marker", "hide", "show", "moving", "cancel", "moveto", "addchildsection", "mergeup")


def set_store(store: CourseStore) -> None:
    """Allow tests to swap the course store implementation."""
    global _STORE
    _STORE = store


def get_store() -> CourseStore:
    return _STORE


def set_config(config: Optional[FlexsectionsConfig]) -> None:
    """Override configuration for tests, or reset with None."""
    global _CONFIG
    _CONFIG = config


def _get_config() -> FlexsectionsConfig:
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = load_config()
    return _CONFIG


def _private_response(body: dict, *, status_code: int) -> JSONResponse:
    return JSONResponse(body, status_code=status_code, headers={"Cache-Control": "private, no-store"})


def _csrf_guard(request: Request, config: FlexsectionsConfig) -> Optional[JSONResponse]:
    """Enforce same-origin for edit actions.

    Behavior:
        - In prod-like environments or with `strict_csrf`, require that either
          Origin or Referer is present AND same-origin.
        - Otherwise fall back to best-effort `_is_same_origin`, which permits
          requests without these headers.
    """
    strict = config.is_prod_like or config.strict_csrf
    if strict and not _has_origin_indicator(request):
        return _private_response({"error": "forbidden", "detail": "csrf_violation"}, status_code=403)
    if not _is_same_origin(request, trust_proxy=config.trust_proxy):
        return _private_response({"error": "forbidden", "detail": "csrf_violation"}, status_code=403)
    return None


def _int_param(request: Request, name: str) -> Optional[int]:
    raw = request.query_params.get(name)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"invalid_{name}")


def _apply_action(store: CourseStore, course_id: str, action: str, value: int, request: Request) -> None:
    if action == "switchcollapsed":
        store.switch_collapsed(course_id, value)
    elif action == "marker":
        store.set_marker(course_id, value)
    elif action == "hide":
        store.set_visibility(course_id, value, False)
    elif action == "show":
        store.set_visibility(course_id, value, True)
    elif action == "moving":
        store.start_moving(course_id, value)
    elif action == "cancel":
        store.cancel_moving(course_id)
    elif action == "moveto":
        parent = _int_param(request, "parent")
        if parent is None:
            raise ValueError("invalid_parent")
        store.move_section(course_id, value, parent, _int_param(request, "before"))
    elif action == "addchildsection":
        store.add_section(course_id, value, summary_format=_get_config().summary_format)
    elif action == "mergeup":
        store.merge_up(course_id, value)
    logger.debug("Applied %s=%s to course %s", action, value, course_id)


@course_format_router.get("/courses/{course_id}/view")
async def course_view(request: Request, course_id: str) -> Response:
    """
    Render the course outline, or apply one edit action and redirect back.

    Query:
        section: section number the page shows (default 0, the whole course).
        edit: "on" enables editing controls and actions.
        switchcollapsed|marker|hide|show|moving|cancel|moveto|addchildsection|mergeup:
            action with the section number it applies to.
    """
    store = get_store()
    config = _get_config()
    if not store.has_course(course_id):
        return _private_response({"error": "not_found"}, status_code=404)

    editing = request.query_params.get("edit") == "on"
    try:
        section = _int_param(request, "section") or 0
        if editing:
            for action in _ACTIONS:
                value = _int_param(request, action)
                if value is None:
                    continue
                csrf_error = _csrf_guard(request, config)
                if csrf_error is not None:
                    logger.warning("Course %s: refused cross-origin %s action", course_id, action)
                    return csrf_error
                _apply_action(store, course_id, action, value, request)
                params = {"section": section, "edit": "on"} if section else {"edit": "on"}
                target = f"/courses/{course_id}/view?{urlencode(params)}"
                return RedirectResponse(url=target, status_code=303, headers={"Cache-Control": "private, no-store"})

        course_format = InMemoryCourseFormat(
            store,
            course_id,
            wwwroot=config.wwwroot,
            editing=editing,
            can_view_hidden=editing,
            sr=section or None,
        )
        renderer = SectionTreeRenderer(course_format, pix_url=config.pix_url, wwwroot=config.wwwroot)
        body = renderer.render_page(course_id, section, section or None)
    except LookupError as exc:
        logger.warning("Course %s: %s", course_id, exc)
        return _private_response({"error": "not_found"}, status_code=404)
    except ValueError as exc:
        logger.warning("Course %s: refused action (%s)", course_id, exc)
        return _private_response({"error": str(exc)}, status_code=400)

    page = CoursePage(course_format.get_course().fullname, body, editing=editing)
    return HTMLResponse(page.render(), headers={"Cache-Control": "private, no-store"})
