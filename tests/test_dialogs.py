import pytest

from yomine.dialogs import (
    ErrorData,
    ErrorModal,
    MessageOverlay,
    RestartModal,
    calculate_modal_width,
)


def test_error_modal_starts_closed():
    modal = ErrorModal()
    assert modal.is_open is False
    assert modal.data == ErrorData()


def test_error_modal_show_error_sets_data():
    modal = ErrorModal()
    modal.show_error("File Load Error", "Unable to load file: a.srt", "boom")
    assert modal.is_open is True
    assert modal.data == ErrorData("File Load Error", "Unable to load file: a.srt", "boom")


def test_error_modal_details_optional():
    modal = ErrorModal()
    modal.show_error("T", "M")
    assert modal.data.details is None


def test_error_modal_close_resets():
    modal = ErrorModal()
    modal.show_error("T", "M", "D")
    assert modal.close() is True
    assert modal.is_open is False
    assert modal.data == ErrorData()
    assert modal.close() is False


def test_restart_modal_respond_when_closed():
    assert RestartModal().respond(True) is None


@pytest.mark.parametrize("answer", [True, False])
def test_restart_dialog_returns_answer(answer):
    modal = RestartModal()
    modal.show_restart_dialog("Please restart")
    assert modal.is_open is True
    assert modal.requires_restart is True
    assert modal.message == "Please restart"
    assert modal.respond(answer) is answer
    assert modal.is_open is False
    assert modal.message == ""


def test_info_dialog_never_restarts():
    modal = RestartModal()
    modal.show_info_dialog("No changes were made.")
    assert modal.requires_restart is False
    assert modal.respond(True) is False
    assert modal.respond(True) is None


def test_message_overlay_initial_state():
    overlay = MessageOverlay()
    assert overlay.active is True
    assert overlay.text() == "Loading language tools..."


def test_message_overlay_set_and_clear():
    overlay = MessageOverlay()
    overlay.clear_message()
    assert overlay.active is False
    assert overlay.message is None
    assert overlay.text() == "Loading..."
    overlay.set_message("Processing file...")
    assert overlay.active is True
    assert overlay.text() == "Processing file..."


def test_modal_width_full_at_small_window():
    assert calculate_modal_width(400.0) == pytest.approx(400.0)
    assert calculate_modal_width(300.0) == pytest.approx(300.0)


def test_modal_width_capped():
    assert calculate_modal_width(5000.0) == pytest.approx(800.0)


@pytest.mark.parametrize("width", [200.0, 450.0, 600.0, 800.0, 1000.0, 1500.0])
def test_modal_width_bounds(width):
    result = calculate_modal_width(width)
    assert result <= width
    assert result <= 800.0
    assert result >= min(width * 0.65, 800.0) - 1e-9


def test_modal_width_monotonic():
    widths = [100.0 * i for i in range(1, 30)]
    results = [calculate_modal_width(w) for w in widths]
    assert results == sorted(results)