from plate_lookup.rate_limit import RateLimitStore


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_hit_rejects_over_limit_until_window_expires() -> None:
    clock = FakeClock()
    store = RateLimitStore(limit=2, window_seconds=60, clock=clock)

    assert store.hit("10.0.0.1")
    assert store.hit("10.0.0.1")
    assert not store.hit("10.0.0.1")
    assert store.hit("10.0.0.2")

    clock.now += 61
    assert store.hit("10.0.0.1")


def test_sweep_removes_only_expired_windows() -> None:
    clock = FakeClock()
    store = RateLimitStore(limit=5, window_seconds=60, clock=clock)
    store.hit("old")
    clock.now += 30
    store.hit("recent")
    clock.now += 31

    assert store.sweep() == 1
    assert len(store) == 1
    assert store.hit("recent")
