"""
keepcheck - browser acceptance tests for a Keep-style notes app.

Example:
    from keepcheck import NotesActions, open_session

    with open_session() as session:
        notes = NotesActions(session)
        notes.create_note("Groceries")
        notes.archive_note("Groceries")
        assert notes.is_note_archived("Groceries")
"""

from .actions import NotesActions
from .components import NoteCard, NoteEditor
from .config import Settings, configure_logging
from .driver import Driver, PlaywrightDriver
from .errors import (
    AffordanceNotFound,
    EntityNotFound,
    HarnessError,
    NavigationFailed,
    StaleElementError,
    TimedOut,
)
from .locators import Query, note_card, xpath_literal
from .reconciler import NoteHandle, StateReconciler
from .session import Session, capture_screenshot, open_session
from .views import View, ViewNavigator
from .waiting import Waiter, wait_until

__all__ = [
    "AffordanceNotFound",
    "Driver",
    "EntityNotFound",
    "HarnessError",
    "NavigationFailed",
    "NoteCard",
    "NoteEditor",
    "NoteHandle",
    "NotesActions",
    "PlaywrightDriver",
    "Query",
    "Session",
    "Settings",
    "StaleElementError",
    "StateReconciler",
    "TimedOut",
    "View",
    "ViewNavigator",
    "Waiter",
    "capture_screenshot",
    "configure_logging",
    "note_card",
    "open_session",
    "wait_until",
    "xpath_literal",
]
