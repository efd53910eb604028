# core/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class SourceMode(str, Enum):
    QUEUE = "queue"
    RANDOM = "random"


class PlaybackState(Enum):
    IDLE = auto()
    CONNECTING = auto()
    LIVE = auto()
    PAUSED = auto()
    RECONNECTING = auto()
    FAILED = auto()


@dataclass(frozen=True)
class TrackStatus:
    # None means the queue field arrived but could not be decoded;
    # AppState keeps the previously committed queue in that case.
    queue: tuple[str, ...] | None = ()
    source_mode: SourceMode = SourceMode.RANDOM
    elapsed_s: float = 0.0
    remaining_s: float = 0.0
    duration_s: float = 0.0


@dataclass(frozen=True)
class ListenerSnapshot:
    now_playing: str = ""
    listener_count: int = 0


@dataclass(frozen=True)
class PlaybackStatus:
    state: PlaybackState = PlaybackState.IDLE
    attempt: int = 0


@dataclass(frozen=True)
class SearchState:
    query: str = ""
    matches: tuple[str, ...] = ()


@dataclass(frozen=True)
class MergedViewState:
    track: TrackStatus = field(default_factory=TrackStatus)
    listeners: ListenerSnapshot = field(default_factory=ListenerSnapshot)
    library: tuple[str, ...] = ()
    search: SearchState = field(default_factory=SearchState)
    playback: PlaybackStatus = field(default_factory=PlaybackStatus)
    search_result_limit: int = 20

    @property
    def progress(self) -> float:
        return progress_percent(self.track.elapsed_s, self.track.duration_s)

    @property
    def is_live(self) -> bool:
        return self.playback.state is PlaybackState.LIVE

    @property
    def is_offline(self) -> bool:
        return self.playback.state is PlaybackState.FAILED

    @property
    def source_badge(self) -> str:
        return "REQUEST" if self.track.source_mode is SourceMode.QUEUE else "RANDOM"

    @property
    def search_results(self) -> tuple[str, ...]:
        return self.search.matches[: self.search_result_limit]


def progress_percent(elapsed: float, duration: float) -> float:
    if duration <= 0:
        return 0.0
    return max(0.0, min(100.0, (elapsed / duration) * 100))


def basename(path: str) -> str:
    return path.split("/")[-1]
