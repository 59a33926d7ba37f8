"""State behind the application's modal dialogs and the busy overlay."""

from __future__ import annotations

from dataclasses import dataclass, field

_MODAL_MIN_WIDTH = 400.0
_MODAL_MAX_WIDTH = 800.0
_MODAL_MIN_PERCENT = 0.65
_MODAL_MAX_PERCENT = 1.00

_INITIAL_OVERLAY_MESSAGE = "Loading language tools..."
_FALLBACK_OVERLAY_MESSAGE = "Loading..."


@dataclass
class ErrorData:
    title: str = ""
    message: str = ""
    details: str | None = None


@dataclass
class ErrorModal:
    """An error dialog with a title, a message and optional technical details."""

    is_open: bool = False
    data: ErrorData = field(default_factory=ErrorData)

    def show_error(self, title: str, message: str, details: str | None = None) -> None:
        """Open the dialog with the given content."""
        self.data = ErrorData(title=str(title), message=str(message),
                              details=None if details is None else str(details))
        self.is_open = True

    def close(self) -> bool:
        """Dismiss the dialog; return True if it was open."""
        if not self.is_open:
            return False
        self.is_open = False
        self.data = ErrorData()
        return True


@dataclass
class _RestartData:
    message: str = ""
    requires_restart: bool = False


@dataclass
class RestartModal:
    """Asks whether to restart, or just informs the user."""

    is_open: bool = False
    message: str = ""
    requires_restart: bool = False

    def _open(self, message: str, requires_restart: bool) -> None:
        self.message = str(message)
        self.requires_restart = requires_restart
        self.is_open = True

    def show_restart_dialog(self, message: str) -> None:
        """Open a dialog offering "Restart Now" and "Cancel"."""
        self._open(message, True)

    def show_info_dialog(self, message: str) -> None:
        """Open a dialog with a single "OK" button."""
        self._open(message, False)

    def respond(self, restart: bool) -> bool | None:
        """Close the dialog with the user's answer.

        Returns None when no dialog is open. For an informational dialog the
        only answer is "OK", which never asks for a restart.
        """
        if not self.is_open:
            return None
        result = bool(restart) if self.requires_restart else False
        self.is_open = False
        self.message = ""
        self.requires_restart = False
        return result


@dataclass
class MessageOverlay:
    """A dimming overlay with a status message shown while work is running."""

    active: bool = True
    message: str | None = _INITIAL_OVERLAY_MESSAGE

    def set_message(self, message: str) -> None:
        self.message = message
        self.active = True

    def clear_message(self) -> None:
        self.message = None
        self.active = False

    def text(self) -> str:
        """Return the text the overlay displays."""
        return _FALLBACK_OVERLAY_MESSAGE if self.message is None else self.message


def calculate_modal_width(window_width: float) -> float:
    """Width of the file dialog for a window of the given width.

    Narrow windows get the full width; the share shrinks towards 65% as the
    window grows, and the dialog never exceeds 800 units.
    """
    t = (window_width - _MODAL_MIN_WIDTH) / (_MODAL_MAX_WIDTH - _MODAL_MIN_WIDTH)
    interpolated = _MODAL_MAX_PERCENT + (_MODAL_MIN_PERCENT - _MODAL_MAX_PERCENT) * t
    percent = min(max(interpolated, _MODAL_MIN_PERCENT), _MODAL_MAX_PERCENT)
    return min(_MODAL_MAX_WIDTH, window_width * percent)