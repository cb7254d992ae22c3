import contextlib
import os
import pathlib

import pytest
from playwright.sync_api import Error as PlaywrightError

from keepcheck.actions import NotesActions
from keepcheck.config import Settings
from keepcheck.session import capture_screenshot, open_session

APP_PAGE = pathlib.Path(__file__).parent / "app" / "keep.html"


@pytest.fixture
def e2e_settings(tmp_path):
    if os.environ.get("KEEPCHECK_BASE_URL"):
        return Settings.from_env(artifacts_dir=str(tmp_path))
    return Settings.from_env(
        base_url=APP_PAGE.resolve().as_uri(),
        artifacts_dir=str(tmp_path),
        timeout=5.0,
        short_timeout=1.5,
        view_timeout=2.0,
        nav_timeout=5.0,
        action_timeout=5.0,
        poll_interval=0.1,
    )


@pytest.fixture
def keep_session(e2e_settings, request):
    with contextlib.ExitStack() as stack:
        try:
            session = stack.enter_context(open_session(e2e_settings))
        except PlaywrightError as e:
            pytest.skip(f"Playwright browser not available: {e}")
        yield session
        report = getattr(request.node, "rep_call", None)
        if report is not None and report.failed:
            capture_screenshot(session, request.node.name)


@pytest.fixture
def notes(keep_session):
    return NotesActions(keep_session)


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    setattr(item, "rep_" + report.when, report)
