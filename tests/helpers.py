"""Shared test helpers"""

from datetime import datetime, timedelta


class FakeClock:
    """Deterministic stand-in for ``datetime.now``"""

    def __init__(self, start=None):
        self.current = start or datetime(2024, 1, 15, 8, 0, 0)

    def __call__(self):
        return self.current

    def advance(self, **kwargs):
        self.current = self.current + timedelta(**kwargs)
        return self.current
