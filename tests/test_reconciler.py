import pytest

from keepcheck.errors import EntityNotFound, NavigationFailed
from keepcheck.reconciler import StateReconciler
from keepcheck.views import View


@pytest.fixture
def reconciler(session):
    return StateReconciler(session)


def test_find_takes_first_structural_match(app, reconciler):
    app.add_note("Note A1")
    app.add_note("Note A2")
    handle = reconciler.find("Note A")
    # Newest first in the list.
    assert handle.root.note.title == "Note A2"
    assert handle.view is View.MAIN


def test_locate_waits_for_late_render(app, reconciler):
    app.later(lambda: app.add_note("Late"))
    handle = reconciler.locate("Late")
    assert handle is not None
    assert handle.text == "Late"


def test_locate_missing_note_returns_none_by_deadline(app, reconciler, session):
    start = app.clock
    assert reconciler.locate("Nobody") is None
    assert app.clock - start <= session.settings.short_timeout + 1e-9


def test_resolve_missing_note_raises(reconciler):
    with pytest.raises(EntityNotFound) as info:
        reconciler.resolve("Nobody", timeout=0.5)
    assert info.value.text == "Nobody"


def test_note_in_main_is_not_archived_without_navigating(app, reconciler):
    app.add_note("Here")
    assert reconciler.is_archived("Here") is False
    assert app.clicks == []


def test_archived_note_found_in_archive_and_main_restored(app, reconciler, session):
    app.add_note("Old stuff", archived=True)
    assert reconciler.is_archived("Old stuff") is True
    assert session.current_view is View.MAIN
    assert app.view is View.MAIN


def test_is_archived_is_idempotent(app, reconciler, session):
    app.add_note("Old stuff", archived=True)
    first = reconciler.is_archived("Old stuff")
    second = reconciler.is_archived("Old stuff")
    assert first is second is True
    assert session.current_view is View.MAIN
    assert app.clicks == ["archive navigation", "notes navigation"] * 2


def test_unknown_note_is_not_archived_and_main_restored(app, reconciler, session):
    # The archive poll times out; that is the negative answer.
    assert reconciler.is_archived("Ghost") is False
    assert session.current_view is View.MAIN
    assert app.view is View.MAIN


def test_visiting_restores_view_when_body_raises(app, reconciler, session):
    with pytest.raises(RuntimeError):
        with reconciler.visiting(View.ARCHIVE):
            assert session.current_view is View.ARCHIVE
            raise RuntimeError("check blew up")
    assert session.current_view is View.MAIN
    assert app.view is View.MAIN


def test_failed_navigation_leaves_session_in_main(app, reconciler, session):
    app.broken_nav.add(View.ARCHIVE)
    with pytest.raises(NavigationFailed):
        reconciler.is_archived("Ghost")
    assert session.current_view is View.MAIN
    assert app.view is View.MAIN


def test_late_archive_arrival_does_not_strand_session(app, reconciler, session):
    # The archive shows up only after the navigation wait has given up.
    app.nav_delay[View.ARCHIVE] = session.settings.nav_timeout + 5
    with pytest.raises(NavigationFailed):
        reconciler.is_archived("Ghost")
    assert app.clicks == ["archive navigation", "notes navigation"]
    app.pause(session.settings.nav_timeout + 10)
    assert app.view is View.MAIN
    assert session.current_view is View.MAIN


def test_find_view(app, reconciler, session):
    app.add_note("Kept")
    app.add_note("Shelved", archived=True)
    assert reconciler.find_view("Kept") is View.MAIN
    assert reconciler.find_view("Shelved") is View.ARCHIVE
    assert reconciler.find_view("Ghost") is None
    assert session.current_view is View.MAIN


def test_is_pinned(app, reconciler):
    app.add_note("Top", pinned=True)
    app.add_note("Bottom")
    assert reconciler.is_pinned("Top") is True
    assert reconciler.is_pinned("Bottom") is False
    assert reconciler.is_pinned("Ghost") is False


def test_note_count_only_counts_current_view(app, reconciler):
    app.add_note("One")
    app.add_note("Two")
    app.add_note("Three", archived=True)
    assert reconciler.note_count() == 2
