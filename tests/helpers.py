"""Shared test helpers for FocusDeck."""

from focusdeck.timer.engine import TimerEngine

START_MS = 1_700_000_000_000


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeClock:
    """Hand-cranked epoch-millisecond clock."""

    def __init__(self, start_ms: int = START_MS):
        self.start_ms = start_ms
        self.now_ms = start_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, seconds: float) -> None:
        self.now_ms += int(seconds * 1000)

    def set(self, seconds: float) -> None:
        """Jump to *seconds* after the starting instant."""
        self.now_ms = self.start_ms + int(seconds * 1000)


class FailingStore:
    """Store whose reads and writes always blow up."""

    def __init__(self):
        self.get_calls = 0
        self.set_calls = 0

    def get(self, keys):
        self.get_calls += 1
        raise OSError("disk unavailable")

    def set(self, record):
        self.set_calls += 1
        raise OSError("disk unavailable")


def complete_phase(engine: TimerEngine, clock: FakeClock) -> None:
    """Run the current phase to its deadline and let the loop notice."""
    engine.start()
    clock.now_ms = engine.deadline
    engine.check()
