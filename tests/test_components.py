import pytest

from keepcheck.components import NoteCard, NoteEditor
from keepcheck.errors import AffordanceNotFound, StaleElementError
from keepcheck.locators import note_card


def card_for(app, session, title):
    root = app.find_all(note_card(title))[0]
    return NoteCard(app, root, session.waiter)


def test_pin_clicks_pin_button_without_waiting(app, session):
    app.add_note("Shopping")
    card_for(app, session, "Shopping").pin()
    assert app.clicks == ["pin button"]
    # The effect is someone else's business: nothing has rendered yet.
    assert app.note("Shopping").pinned is False
    assert app.clock == 0


def test_unpin_on_unpinned_note_is_missing_affordance(app, session):
    app.add_note("Shopping")
    with pytest.raises(AffordanceNotFound) as info:
        card_for(app, session, "Shopping").unpin()
    assert info.value.name == "unpin button"


def test_is_pinned_reads_aria_pressed(app, session):
    app.add_note("Pinned", pinned=True)
    app.add_note("Loose")
    assert card_for(app, session, "Pinned").is_pinned() is True
    assert card_for(app, session, "Loose").is_pinned() is False


def test_delete_via_menu_waits_for_menu_popup(app, session):
    app.add_note("Trash me")
    card_for(app, session, "Trash me").delete_via_menu()
    assert app.clicks == ["more button", "delete note menu item"]


def test_menu_that_never_opens_is_missing_affordance(app, session, monkeypatch):
    app.add_note("Stuck")
    monkeypatch.setattr(app, "_click_more_button", lambda ref: None)
    with pytest.raises(AffordanceNotFound) as info:
        card_for(app, session, "Stuck").delete_via_menu()
    assert info.value.name == "delete note menu item"
    assert app.clock == pytest.approx(session.settings.short_timeout)


def test_stale_card_is_not_retried(app, session):
    app.add_note("Old")
    card = card_for(app, session, "Old")
    app.rerender()
    with pytest.raises(StaleElementError):
        card.archive()
    assert app.clicks == []


def test_label_chip_and_checklist_lookup(app, session):
    app.add_note("Trip", labels=["Travel"], items=["Passport", "Tickets"])
    card = card_for(app, session, "Trip")
    assert card.has_label("Travel")
    assert not card.has_label("Work")
    assert card.has_checklist_items(["Tickets", "Passport"])
    assert not card.has_checklist_items(["Passport", "Sunscreen"])


def test_change_color_returns_clicked_option(app, session):
    app.add_note("Paint")
    option = card_for(app, session, "Paint").change_color("coral")
    assert option.text == "Coral"
    assert app.clicks == ["background options", "color option"]


def test_editor_types_title_and_closes(app, session):
    editor = NoteEditor(app, session.waiter)
    editor.start()
    editor.set_title("Draft")
    editor.set_body("body text")
    editor.close()
    session.driver.pause(1)
    note = app.note("Draft")
    assert note.body == "body text"
