import pytest

from core.models import (
    ListenerSnapshot,
    MergedViewState,
    PlaybackState,
    PlaybackStatus,
    SearchState,
    SourceMode,
    TrackStatus,
    basename,
    progress_percent,
)


class TestProgress:
    def test_quarter(self):
        assert progress_percent(30, 120) == 25.0

    @pytest.mark.parametrize("elapsed", [0, 5, 1000])
    def test_zero_duration_is_zero(self, elapsed):
        assert progress_percent(elapsed, 0) == 0.0

    def test_never_above_hundred(self):
        assert progress_percent(500, 120) == 100.0


class TestMergedViewState:
    def test_derived_values(self):
        view = MergedViewState(
            track=TrackStatus(source_mode=SourceMode.QUEUE, elapsed_s=30, duration_s=120),
            listeners=ListenerSnapshot("Artist - Song.mp3", 2),
            playback=PlaybackStatus(PlaybackState.LIVE, 0),
            search=SearchState("a", tuple(f"/s/{i}.mp3" for i in range(30))),
        )
        assert view.progress == 25.0
        assert view.is_live
        assert not view.is_offline
        assert view.source_badge == "REQUEST"
        assert len(view.search_results) == 20

    def test_defaults(self):
        view = MergedViewState()
        assert view.source_badge == "RANDOM"
        assert not view.is_live
        assert view.search_results == ()


def test_basename():
    assert basename("/music/Artist - Song.mp3") == "Artist - Song.mp3"
    assert basename("plain.mp3") == "plain.mp3"
