import enum
import logging
from dataclasses import dataclass
from typing import Tuple

from . import locators
from .errors import NavigationFailed, TimedOut
from .locators import Query

logger = logging.getLogger(__name__)


class View(enum.Enum):
    MAIN = "main"
    ARCHIVE = "archive"


@dataclass(frozen=True)
class ViewSpec:
    nav: Query
    # Any one of these being present means the view has rendered.
    arrival: Tuple[Query, ...]


VIEWS = {
    View.MAIN: ViewSpec(locators.NOTES_NAV, (locators.NEW_NOTE_INPUT,)),
    View.ARCHIVE: ViewSpec(locators.ARCHIVE_NAV, (locators.ARCHIVE_TITLE, locators.ARCHIVE_LANDMARK)),
}


class ViewNavigator:
    """Moves the session between views.

    The session's ``current_view`` is only ever changed here, and only after
    the target view's arrival signal has been seen.
    """

    def __init__(self, session):
        self.session = session

    @property
    def current(self) -> View:
        return self.session.current_view

    def arrived(self, view: View) -> bool:
        driver = self.session.driver
        return any(driver.find_all(query) for query in VIEWS[view].arrival)

    def go_to(self, view: View, force: bool = False) -> None:
        """Navigate to ``view`` and wait for it to render.

        Without ``force`` this is a no-op when the session is already there.
        ``force`` clicks through anyway, for when an earlier navigation may
        still be in flight and the visible page cannot be trusted.
        """
        if not force and self.session.current_view is view and self.arrived(view):
            return
        spec = VIEWS[view]
        driver = self.session.driver
        waiter = self.session.waiter
        timeout = self.session.settings.nav_timeout
        logger.info("Navigating %s -> %s", self.session.current_view.value, view.value)

        def clickable():
            for ref in driver.find_all(spec.nav):
                if driver.is_visible(ref):
                    return ref
            return None

        try:
            nav = waiter.until(clickable, f"{spec.nav} to be clickable", timeout)
            driver.click(nav)
            waiter.until(lambda: self.arrived(view), f"{view.value} view to load", timeout)
        except TimedOut as e:
            raise NavigationFailed(view, e) from e
        self.session.current_view = view
