"""
Pytest configuration for backend tests.

Why: Force AnyIO to use the asyncio backend and give every test a fresh
course store and a fixed configuration, so tests never depend on the
environment of the machine running them.
"""
import sys
from pathlib import Path

import pytest

# Ensure the repository root is importable (``backend.*`` packages)
REPO_ROOT = Path(__file__).resolve().parents[2]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from backend.flexsections.store import CourseStore  # noqa: E402
from backend.web.config import FlexsectionsConfig  # noqa: E402

WWWROOT = "http://test"
PIX_URL = "http://test/pix"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def config() -> FlexsectionsConfig:
    return FlexsectionsConfig(
        env="test",
        wwwroot=WWWROOT,
        pix_url=PIX_URL,
        log_level="DEBUG",
        summary_format="html",
    )


@pytest.fixture
def store() -> CourseStore:
    return CourseStore()


@pytest.fixture(autouse=True)
def _reset_course_store_between_tests(store, config):
    """Swap in the per-test store and config for the web routes."""
    import backend.web.routes.course_format as course_format

    course_format.set_store(store)
    course_format.set_config(config)
    yield
    course_format.set_store(CourseStore())
    course_format.set_config(None)
