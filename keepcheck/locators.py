"""XPath queries for the Keep UI.

Everything the harness looks up in the page is built here. Text that comes
from a test (titles, labels, checklist items) is only ever embedded through
``xpath_literal``; the matching itself stays plain substring containment.
"""

from dataclasses import dataclass
from typing import Optional

NOTE_CARD_CLASS = "IZ65Hb-n0tgWb"
SIDEBAR_CLASS = "PvRhvb"


@dataclass(frozen=True)
class Query:
    name: str
    xpath: str
    text: Optional[str] = None

    def __str__(self):
        if self.text is None:
            return self.name
        return f"{self.name} {self.text!r}"


def xpath_literal(text: str) -> str:
    """Quote ``text`` as an XPath 1.0 string literal.

    XPath 1.0 has no escape sequences, so a value holding both quote kinds
    is split into a ``concat()`` of pieces.
    """
    if "'" not in text:
        return f"'{text}'"
    if '"' not in text:
        return f'"{text}"'
    parts = []
    for i, chunk in enumerate(text.split("'")):
        if i:
            parts.append('"\'"')
        if chunk:
            parts.append(f"'{chunk}'")
    return "concat(" + ", ".join(parts) + ")"


def color_label(name: str) -> str:
    if name == "default":
        return "Default color"
    return name[:1].upper() + name[1:]


# Note list

ALL_NOTE_CARDS = Query("note cards", f"//div[contains(@class,'{NOTE_CARD_CLASS}')]")


def note_card(text: str) -> Query:
    # An empty string matches every card.
    return Query(
        "note card",
        f"//div[contains(@class,'{NOTE_CARD_CLASS}')]"
        f"[.//div[@role='textbox' and contains(.,{xpath_literal(text)})]]",
        text,
    )


# Inside a note card

PIN_BUTTON = Query("pin button", ".//div[@role='button'][contains(@aria-label,'Pin note')]")
UNPIN_BUTTON = Query("unpin button", ".//div[@role='button'][contains(@aria-label,'Unpin note')]")
ARCHIVE_BUTTON = Query("archive button", ".//div[@role='button'][@aria-label='Archive']")
MORE_BUTTON = Query("more button", ".//div[@role='button'][@aria-label='More']")
COLOR_BUTTON = Query("background options", ".//div[@aria-label='Background options']")


def label_chip(label: str) -> Query:
    return Query(
        "label chip",
        f".//div[contains(@class,'bQfzdd') and contains(text(),{xpath_literal(label)})]",
        label,
    )


def checklist_item(item: str) -> Query:
    return Query(
        "checklist item",
        f".//div[contains(@class,'e5WBfd') and contains(text(),{xpath_literal(item)})]",
        item,
    )


# Popups rendered outside the card

MENU_DELETE = Query("delete note menu item", "//div[@role='menu']//div[text()='Delete note']")
MENU_ADD_LABEL = Query(
    "add label menu item", "//div[@role='menuitem'][.//div[contains(text(),'Add label')]]"
)
LABEL_INPUT = Query("label name input", "//input[@aria-label='Enter label name']")
UNDO_BUTTON = Query(
    "undo button", "//div[@role='alertdialog']//div[@role='button'][contains(.,'Undo')]"
)


def color_option(name: str) -> Query:
    label = color_label(name)
    return Query("color option", f"//div[@aria-label={xpath_literal(label)}]", label)


# New note editor

NEW_NOTE_INPUT = Query("new note input", "//div[contains(@class,'fmcmS-h1U9Be-LS81yb')]")
NEW_LIST_TOGGLE = Query("new list toggle", "//div[@aria-label='New list']")
EDITOR_TITLE = Query("title field", "//div[@role='textbox'][@aria-label='Title']")
EDITOR_BODY = Query("body field", "//div[@role='textbox'][@aria-label='Take a note…']")
LIST_ITEM_INPUT = Query("list item input", "//div[@aria-label='List item']")
EDITOR_CLOSE = Query("close button", "//div[@role='button' and text()='Close']")


# Opened note dialog

def open_note_title(title: str) -> Query:
    return Query(
        "open note title",
        "//div[contains(@class,'IZ65Hb-r4nke-haAclf')]"
        f"//div[@contenteditable='true' and text()={xpath_literal(title)}]",
        title,
    )


OPEN_NOTE_CLOSE = Query(
    "open note close button",
    "//div[contains(@class, 'IZ65Hb-yePe5c')]//div[@role='button' and normalize-space(text())='Close']",
)


# Global

SEARCH_INPUT = Query("search input", "//input[@aria-label='Search']")

NOTES_NAV = Query(
    "notes navigation",
    f"//div[contains(@class,'{SIDEBAR_CLASS}')]"
    "//*[contains(text(),'Notes') or contains(@aria-label,'Notes')]",
)
ARCHIVE_NAV = Query("archive navigation", f"//div[contains(@class,'{SIDEBAR_CLASS}')]//*[@aria-label='Archive']")

ARCHIVE_TITLE = Query("archive title", "//*[contains(text(),'Archived')]")
ARCHIVE_LANDMARK = Query("archive landmark", "//div[contains(@aria-label,'Archived')]")
