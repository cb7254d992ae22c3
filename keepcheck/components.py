"""Operations on one piece of the Keep UI.

A component holds an element it was handed and knows how to operate it.
It does not find itself and does not wait for what its operations cause;
``keepcheck.actions`` does both.
"""

import logging
from typing import Iterable

from . import locators
from .errors import AffordanceNotFound, TimedOut

logger = logging.getLogger(__name__)


def _popup(driver, waiter, query):
    """Find a control rendered outside the current subtree.

    Menus, palettes and editor fields show up a moment after the click that
    opens them, so they get a short bounded wait.
    """
    def visible():
        for ref in driver.find_all(query):
            if driver.is_visible(ref):
                return ref
        return None

    try:
        return waiter.until(visible, f"{query} to be visible", waiter.short_timeout)
    except TimedOut as e:
        raise AffordanceNotFound(query.name, query.text) from e


class NoteCard:
    """One note card in the list."""

    def __init__(self, driver, root, waiter):
        self.driver = driver
        self.root = root
        self.waiter = waiter

    def _child(self, query):
        # No retry: if the card re-rendered, only a fresh locate helps.
        ref = self.driver.find_one(self.root, query)
        if ref is None:
            raise AffordanceNotFound(query.name, query.text)
        return ref

    def _click(self, query):
        self.driver.click(self._child(query))

    def pin(self):
        self._click(locators.PIN_BUTTON)

    def unpin(self):
        self._click(locators.UNPIN_BUTTON)

    def is_pinned(self) -> bool:
        button = self.driver.find_one(self.root, locators.UNPIN_BUTTON)
        return button is not None and self.driver.get_attribute(button, "aria-pressed") == "true"

    def archive(self):
        self._click(locators.ARCHIVE_BUTTON)

    def open(self):
        self.driver.click(self.root)

    def open_menu(self):
        self._click(locators.MORE_BUTTON)

    def delete_via_menu(self):
        self.open_menu()
        self.driver.click(_popup(self.driver, self.waiter, locators.MENU_DELETE))

    def add_label(self, label: str):
        self.open_menu()
        self.driver.click(_popup(self.driver, self.waiter, locators.MENU_ADD_LABEL))
        field = _popup(self.driver, self.waiter, locators.LABEL_INPUT)
        self.driver.clear(field)
        self.driver.type_text(field, label)
        self.driver.press(field, "Enter")
        self.driver.press(field, "Escape")

    def has_label(self, label: str) -> bool:
        chip = self.driver.find_one(self.root, locators.label_chip(label))
        return chip is not None and self.driver.is_visible(chip)

    def has_checklist_items(self, items: Iterable[str]) -> bool:
        return all(
            self.driver.find_one(self.root, locators.checklist_item(item)) is not None
            for item in items
        )

    def change_color(self, name: str):
        self._click(locators.COLOR_BUTTON)
        option = _popup(self.driver, self.waiter, locators.color_option(name))
        self.driver.click(option)
        return option


class NoteEditor:
    """The take-a-note editor at the top of the main list."""

    def __init__(self, driver, waiter):
        self.driver = driver
        self.waiter = waiter

    def _find(self, query):
        return _popup(self.driver, self.waiter, query)

    def start(self):
        self.driver.click(self._find(locators.NEW_NOTE_INPUT))

    def switch_to_list(self):
        self.driver.click(self._find(locators.NEW_LIST_TOGGLE))

    def set_title(self, title: str):
        self.driver.type_text(self._find(locators.EDITOR_TITLE), title)

    def set_body(self, body: str):
        self.driver.type_text(self._find(locators.EDITOR_BODY), body)

    def add_list_item(self, item: str):
        field = self._find(locators.LIST_ITEM_INPUT)
        self.driver.type_text(field, item)
        self.driver.press(field, "Enter")

    def close(self):
        self.driver.click(self._find(locators.EDITOR_CLOSE))
