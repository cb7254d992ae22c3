import contextlib
import logging
import os
import re
from dataclasses import dataclass
from typing import Any, Iterator, Optional

from playwright.sync_api import sync_playwright

from .config import Settings
from .driver import PlaywrightDriver
from .views import View
from .waiting import Waiter

logger = logging.getLogger(__name__)
browser_logger = logging.getLogger("keepcheck.browser")


@dataclass
class Session:
    """Everything one test case drives: the browser, its settings and the
    view the app is currently showing."""

    driver: Any
    settings: Settings
    waiter: Waiter
    current_view: View = View.MAIN
    page: Optional[Any] = None

    @classmethod
    def attach(cls, driver, settings: Settings, page=None) -> "Session":
        waiter = Waiter(
            clock=driver.now,
            sleep=driver.pause,
            timeout=settings.timeout,
            short_timeout=settings.short_timeout,
            poll_interval=settings.poll_interval,
        )
        return cls(driver, settings, waiter, View.MAIN, page)


def capture_screenshot(session: Session, name: str) -> Optional[str]:
    if session.page is None:
        return None
    os.makedirs(session.settings.artifacts_dir, exist_ok=True)
    safe = re.sub(r"[^A-Za-z0-9_.-]+", "_", name)
    path = os.path.join(session.settings.artifacts_dir, f"{safe}.png")
    session.page.screenshot(path=path)
    logger.info("Screenshot saved to %s", path)
    return path


def wait_for_page_load(session: Session) -> None:
    session.waiter.until(
        lambda: session.driver.ready_state() == "complete",
        "document.readyState to be complete",
        session.settings.timeout,
    )


@contextlib.contextmanager
def open_session(settings: Optional[Settings] = None) -> Iterator[Session]:
    """Launch a browser on the app's main view and yield a ``Session``.

    A configured user data dir launches a persistent context so a signed-in
    profile can be reused. If the block raises, a screenshot is saved into
    the artifacts directory before the browser closes.
    """
    settings = settings or Settings.from_env()
    with sync_playwright() as p:
        browser_type = getattr(p, settings.browser)
        if settings.user_data_dir:
            context = browser_type.launch_persistent_context(
                settings.user_data_dir, headless=settings.headless
            )
            browser = None
            page = context.pages[0] if context.pages else context.new_page()
        else:
            browser = browser_type.launch(headless=settings.headless)
            context = browser.new_context()
            page = context.new_page()
        try:
            page.set_default_timeout(settings.action_timeout * 1000)
            page.on("console", lambda msg: browser_logger.debug("Browser Console: %s", msg.text))

            session = Session.attach(PlaywrightDriver(page), settings, page)
            logger.info("Navigating to %s", settings.base_url)
            page.goto(settings.base_url, wait_until="domcontentloaded")
            wait_for_page_load(session)
            try:
                yield session
            except Exception:
                capture_screenshot(session, "error_screenshot")
                raise
        finally:
            context.close()
            if browser is not None:
                browser.close()
