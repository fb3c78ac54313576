import pytest

from asyncstatus.settings import get_settings


class FakeClock:
    """Manually driven millisecond clock so timing tests never sleep."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached process-wide; drop the cache around every test."""
    get_settings.cache_clear()
    try:
        yield
    finally:
        get_settings.cache_clear()
