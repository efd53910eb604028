import ui.workers.feed_worker as fw


class SlowWorker:
    """Never finishes; each wait() burns the whole budget it is given."""

    def __init__(self, clock, tag):
        self.clock = clock
        self.tag = tag
        self.waits: list[int] = []

    def wait(self, ms):
        self.waits.append(ms)
        self.clock.now += ms / 1000
        return False


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


class TestWaitForWorkers:
    def test_one_deadline_for_all_workers(self, monkeypatch, caplog):
        clock = FakeClock()
        workers = [SlowWorker(clock, ("cycle", i)) for i in range(3)]
        monkeypatch.setattr(fw, "_active", set(workers))

        stuck = fw.wait_for_workers(timeout_ms=2000, clock=clock)

        assert clock.now - 100.0 <= 2.0
        assert sum(sum(w.waits) for w in workers) <= 2000
        assert len(stuck) == 3
        assert "still running" in caplog.text

    def test_finished_workers_return_quickly(self, monkeypatch):
        class DoneWorker:
            tag = "skip"

            def wait(self, ms):
                return True

        monkeypatch.setattr(fw, "_active", {DoneWorker()})
        assert fw.wait_for_workers(timeout_ms=2000) == []
