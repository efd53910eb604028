import pytest

pytest.importorskip("PySide6.QtSvg")

from core.models import MergedViewState, PlaybackState, PlaybackStatus
from ui.transport_bar import state_text


@pytest.mark.parametrize(
    "state, attempt, text",
    [
        (PlaybackState.CONNECTING, 0, "Connecting…"),
        (PlaybackState.LIVE, 0, "Live"),
        (PlaybackState.PAUSED, 0, "Paused"),
        (PlaybackState.RECONNECTING, 2, "Reconnecting (2)…"),
        (PlaybackState.FAILED, 5, "Offline"),
    ],
)
def test_state_text(state, attempt, text):
    assert state_text(MergedViewState(playback=PlaybackStatus(state, attempt))) == text
