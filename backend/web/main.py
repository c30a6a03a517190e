"Flexsections course format"
from __future__ import annotations

import logging
import os
import sys

from fastapi import FastAPI


def _should_load_dotenv() -> bool:
    """Decide if we should load a local .env file.

    - Never load under pytest to avoid contaminating test env.
    - Allow explicit opt-out via FLEXSECTIONS_ENABLE_DOTENV (default true
      outside pytest).
    """
    if "pytest" in sys.modules or os.getenv("PYTEST_CURRENT_TEST"):
        return False
    flag = (os.getenv("FLEXSECTIONS_ENABLE_DOTENV", "true") or "").strip().lower()
    return flag in ("1", "true", "yes")


if _should_load_dotenv():
    from dotenv import load_dotenv

    load_dotenv()

from backend.flexsections.domain import CollapsedState  # noqa: E402
from backend.flexsections.store import CourseStore  # noqa: E402

from .config import ensure_secure_config_on_startup, load_config  # noqa: E402
from .routes.course_format import course_format_router, get_store  # noqa: E402

CONFIG = load_config()
# Minimal production safety checks (fail-fast on insecure config)
ensure_secure_config_on_startup(CONFIG)

logging.basicConfig(
    level=CONFIG.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("flexsections.web")

app = FastAPI(title="Flexsections", description="Hierarchical course sections", version="0.1.0")
app.include_router(course_format_router)


def seed_demo_course(store: CourseStore, course_id: str = "demo") -> None:
    """Create a small nested course so the outline has something to show."""
    if store.has_course(course_id):
        return
    store.create_course(course_id, "Demo course", summary="Welcome to the course.")
    week1 = store.add_section(course_id, 0, name="Week 1", summary="Intro")
    store.add_activity(course_id, week1.number, "Course forum", "forum")
    day1 = store.add_section(course_id, week1.number, name="Day 1", summary="**Getting started**", summary_format="markdown")
    store.add_activity(course_id, day1.number, "Reading list", "page")
    store.add_section(course_id, week1.number, name="Day 2", collapsed=CollapsedState.COLLAPSED)
    store.add_section(course_id, 0, name="Week 2", visible=False)


_demo_course = (os.getenv("FLEXSECTIONS_DEMO_COURSE") or "").strip()
if _demo_course:
    seed_demo_course(get_store(), _demo_course)
    logger.info("Seeded demo course %s", _demo_course)
