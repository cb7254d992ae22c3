"""Where is a note, and in what state?

The reconciler answers questions about a note by looking in the current
view first and, only when it is not there, visiting the other views. A
visit always returns to the view it started from, on success and on
failure alike, so one check never strands later operations in the wrong
view.
"""

import contextlib
import logging
from dataclasses import dataclass
from typing import Any, Iterator, Optional

from . import locators
from .components import NoteCard
from .errors import EntityNotFound, NavigationFailed, TimedOut
from .views import VIEWS, View, ViewNavigator

logger = logging.getLogger(__name__)


@dataclass
class NoteHandle:
    """A located note card.

    Only good until the list re-renders. Callers locate again after any
    action that can move, remove or restore a note.
    """

    root: Any
    view: View
    text: str


class StateReconciler:
    def __init__(self, session, navigator: Optional[ViewNavigator] = None):
        self.session = session
        self.navigator = navigator or ViewNavigator(session)

    @property
    def driver(self):
        return self.session.driver

    @property
    def waiter(self):
        return self.session.waiter

    def card(self, handle: NoteHandle) -> NoteCard:
        return NoteCard(self.driver, handle.root, self.waiter)

    def find(self, text: str) -> Optional[NoteHandle]:
        """Look for the note in the current view without waiting."""
        matches = self.driver.find_all(locators.note_card(text))
        if not matches:
            return None
        # The first structural match is the note.
        return NoteHandle(matches[0], self.session.current_view, text)

    def locate(self, text: str, timeout: Optional[float] = None) -> Optional[NoteHandle]:
        """Wait a bounded time for the note; None if it never shows."""
        if timeout is None:
            timeout = self.session.settings.short_timeout
        try:
            return self.waiter.until(lambda: self.find(text), f"note {text!r}", timeout)
        except TimedOut:
            logger.debug("Note %r not found in %s view", text, self.session.current_view.value)
            return None

    def resolve(self, text: str, timeout: Optional[float] = None) -> NoteHandle:
        handle = self.locate(text, timeout)
        if handle is None:
            raise EntityNotFound(text)
        return handle

    @contextlib.contextmanager
    def visiting(self, view: View) -> Iterator[None]:
        """Go to ``view`` for the duration of the block, then come back.

        The way back always clicks the origin's navigation when the visit
        went somewhere else. An outbound click can land after its arrival
        wait gave up, while the origin still looks rendered.
        """
        origin = self.session.current_view
        try:
            self.navigator.go_to(view)
            yield
        finally:
            try:
                self.navigator.go_to(origin, force=view is not origin)
            except NavigationFailed:
                logger.warning("Could not return to %s view", origin.value)
                raise

    def find_view(self, text: str) -> Optional[View]:
        """Return the view holding the note, checking the current one first."""
        current = self.session.current_view
        if self.find(text) is not None:
            return current
        timeout = self.session.settings.view_timeout
        for view in VIEWS:
            if view is current:
                continue
            with self.visiting(view):
                found = self.waiter.holds_within(
                    lambda: self.find(text), f"note {text!r} in {view.value} view", timeout
                )
            if found:
                return view
        return None

    def is_archived(self, text: str) -> bool:
        # Anything visible in the main list is not archived; that check is
        # free, so it happens before any navigation.
        if self.session.current_view is View.MAIN and self.find(text) is not None:
            return False
        with self.visiting(View.ARCHIVE):
            return self.waiter.holds_within(
                lambda: self.find(text),
                f"note {text!r} in archive",
                self.session.settings.view_timeout,
            )

    def is_present(self, text: str) -> bool:
        return self.find(text) is not None

    def is_pinned(self, text: str) -> bool:
        handle = self.locate(text)
        return handle is not None and self.card(handle).is_pinned()

    def note_count(self) -> int:
        return len(self.driver.find_all(locators.ALL_NOTE_CARDS))
