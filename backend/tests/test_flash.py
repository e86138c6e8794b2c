from types import SimpleNamespace

from app.services.flash import flash, get_flashed_messages


def make_request():
    return SimpleNamespace(session={})


def test_messages_are_consumed_once():
    request = make_request()
    flash(request, "loginMessage", "No User Found")

    assert get_flashed_messages(request, "loginMessage") == ["No User Found"]
    assert get_flashed_messages(request, "loginMessage") == []
    assert request.session == {}


def test_other_categories_stay_queued():
    request = make_request()
    flash(request, "loginMessage", "first")
    flash(request, "cartMessage", "kept")
    flash(request, "loginMessage", "second")

    assert get_flashed_messages(request, "loginMessage") == ["first", "second"]
    assert get_flashed_messages(request, "cartMessage") == ["kept"]
