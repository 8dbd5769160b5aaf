"""Shared test helpers for Timekeeper."""

from datetime import datetime, timedelta

from timekeeper.timer.types import Time, TimeType

T0 = datetime(2024, 1, 1, 9, 0, 0)


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


def at(ms: int) -> datetime:
    """Timestamp *ms* milliseconds after the shared test epoch."""
    return T0 + timedelta(milliseconds=ms)


def events(*pairs: tuple[TimeType, int]) -> list[Time]:
    """Build a history from ``(type, ms_offset)`` pairs."""
    return [Time(type=t, date=at(ms)) for t, ms in pairs]
