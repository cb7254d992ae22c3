"""User-level flows against the notes app.

Each flow resolves a fresh handle (global controls such as search need
none), performs a fixed sequence of inputs through the components, and then
waits for the effect the user would see. A wait that expires raises
``TimedOut`` naming the step; a note that cannot be found raises
``EntityNotFound``.
"""

import logging
from typing import Optional, Sequence

from . import locators
from .components import NoteEditor
from .reconciler import NoteHandle, StateReconciler
from .views import ViewNavigator

logger = logging.getLogger(__name__)


class NotesActions:
    def __init__(self, session):
        self.session = session
        self.navigator = ViewNavigator(session)
        self.reconciler = StateReconciler(session, self.navigator)
        self.editor = NoteEditor(session.driver, session.waiter)

    @property
    def driver(self):
        return self.session.driver

    @property
    def waiter(self):
        return self.session.waiter

    def _wait(self, predicate, step: str, timeout: Optional[float] = None):
        return self.waiter.until(predicate, step, timeout)

    def _first_visible(self, query):
        for ref in self.driver.find_all(query):
            if self.driver.is_visible(ref):
                return ref
        return None

    def _visible_card(self, text: str):
        return self._first_visible(locators.note_card(text))

    def _pinned_now(self, text: str) -> bool:
        handle = self.reconciler.find(text)
        return handle is not None and self.reconciler.card(handle).is_pinned()

    def _matching(self, text: str) -> int:
        return len(self.driver.find_all(locators.note_card(text)))

    def _card(self, text: str):
        return self.reconciler.card(self.reconciler.resolve(text))

    # Creating

    def create_empty_note(self) -> None:
        logger.info("Creating empty note")
        self.editor.start()
        self.editor.close()

    def create_note(self, title: str) -> NoteHandle:
        logger.info("Creating note %r", title)
        self.editor.start()
        self.editor.set_title(title)
        self.editor.close()
        return self.wait_until_note_appears(title, "create note")

    def create_checklist_note(self, title: str, items: Sequence[str]) -> NoteHandle:
        logger.info("Creating checklist note %r with %d item(s)", title, len(items))
        self.editor.start()
        self.editor.switch_to_list()
        self.editor.set_title(title)
        for item in items:
            self.editor.add_list_item(item)
        self.editor.close()
        return self.wait_until_note_appears(title, "create checklist note")

    def wait_until_note_appears(self, title: str, step: str = "note to appear") -> NoteHandle:
        root = self._wait(lambda: self._visible_card(title), f"{step}: note {title!r} visible")
        return NoteHandle(root, self.session.current_view, title)

    # Changing

    def pin_note(self, title: str) -> None:
        logger.info("Pinning note %r", title)
        self._card(title).pin()
        self._wait(lambda: self._pinned_now(title), f"pin note: {title!r} pinned")

    def unpin_note(self, title: str) -> None:
        logger.info("Unpinning note %r", title)
        self._card(title).unpin()

        def unpinned():
            handle = self.reconciler.find(title)
            return handle is not None and self.driver.find_one(handle.root, locators.PIN_BUTTON) is not None

        self._wait(unpinned, f"unpin note: {title!r} unpinned")

    def archive_note(self, title: str) -> None:
        logger.info("Archiving note %r", title)
        before = self._matching(title)
        self._card(title).archive()
        self._wait(lambda: self._matching(title) < before, f"archive note: {title!r} leaves the list")

    def delete_note(self, title: str, undo: bool = False) -> None:
        logger.info("Deleting note %r%s", title, " with undo" if undo else "")
        before = self._matching(title)
        self._card(title).delete_via_menu()
        if not undo:
            self._wait(lambda: self._matching(title) < before, f"delete note: {title!r} removed")
            return
        self.undo_delete()
        self.wait_until_note_appears(title, "undo delete")

    def undo_delete(self) -> None:
        undo = self._wait(
            lambda: self._first_visible(locators.UNDO_BUTTON), "undo delete: undo button visible"
        )
        self.driver.click(undo)

    def add_label(self, title: str, label: str) -> None:
        logger.info("Adding label %r to note %r", label, title)
        self._card(title).add_label(label)
        self._wait(lambda: self.is_label_attached(title, label), f"add label: {label!r} on {title!r}")

    def edit_title(self, current_title: str, new_title: str) -> NoteHandle:
        logger.info("Renaming note %r to %r", current_title, new_title)
        self._card(current_title).open()
        field = self._wait(
            lambda: self.driver.find_one(None, locators.open_note_title(current_title)),
            f"edit title: title field {current_title!r}",
        )
        self.driver.clear(field)
        self.driver.type_text(field, new_title)
        close = self._wait(
            lambda: self.driver.find_one(None, locators.OPEN_NOTE_CLOSE),
            "edit title: close button",
        )
        self.driver.click(close)
        return self.wait_until_note_appears(new_title, "edit title")

    def search_by_title(self, title: str) -> None:
        logger.info("Searching for %r", title)
        box = self._wait(
            lambda: self._first_visible(locators.SEARCH_INPUT), "search: search box visible"
        )
        # The results replace the list, so every card shown now detaches.
        before = self.driver.find_all(locators.ALL_NOTE_CARDS)
        self.driver.click(box)
        self.driver.type_text(box, title)
        self.driver.press(box, "Enter")

        def results_shown():
            if before and self.driver.is_attached(before[0]):
                return None
            return self.reconciler.find(title)

        self._wait(results_shown, f"search: results for {title!r}")

    def change_color(self, title: str, color: str) -> None:
        logger.info("Changing color of note %r to %s", title, color)
        self._card(title).change_color(color)

        def selected():
            option = self._first_visible(locators.color_option(color))
            return option is not None and self.driver.get_attribute(option, "aria-checked") == "true"

        self._wait(selected, f"change color: {locators.color_label(color)} selected")

    # Checking

    def note_count(self) -> int:
        return self.reconciler.note_count()

    def is_note_saved(self, previous_count: int) -> bool:
        """Whether the list grew past ``previous_count`` within the short timeout.

        False here is a bounded-absence result: nothing appeared in time.
        """
        return self.waiter.holds_within(
            lambda: self.note_count() > previous_count, "note count to grow"
        )

    def is_note_present(self, title: str) -> bool:
        return self.reconciler.is_present(title)

    def is_note_pinned(self, title: str) -> bool:
        return self.reconciler.is_pinned(title)

    def is_note_archived(self, title: str) -> bool:
        return self.reconciler.is_archived(title)

    def is_label_attached(self, title: str, label: str) -> bool:
        handle = self.reconciler.find(title)
        return handle is not None and self.reconciler.card(handle).has_label(label)

    def is_checklist_present(self, title: str, items: Sequence[str]) -> bool:
        handle = self.reconciler.locate(title)
        return handle is not None and self.reconciler.card(handle).has_checklist_items(items)
