import pytest

from keepcheck.actions import NotesActions
from keepcheck.config import Settings
from keepcheck.session import Session

from tests.fakes import FakeKeep


@pytest.fixture
def settings():
    return Settings(poll_interval=0.1)


@pytest.fixture
def app():
    return FakeKeep()


@pytest.fixture
def session(app, settings):
    return Session.attach(app, settings)


@pytest.fixture
def notes(session):
    return NotesActions(session)
