from concurrent.futures import ThreadPoolExecutor

from coin_gateway.usage_counter import UsageCounter


def test_starts_empty():
    assert UsageCounter().snapshot() == {}


def test_increment_creates_and_accumulates():
    counter = UsageCounter()
    counter.increment("fetch")
    counter.increment("fetch")
    counter.increment("coins")
    assert counter.snapshot() == {"fetch": 2, "coins": 1}


def test_snapshot_is_a_copy():
    counter = UsageCounter()
    counter.increment("fetch")
    snap = counter.snapshot()
    snap["fetch"] = 100
    counter.increment("fetch")
    assert counter.snapshot() == {"fetch": 2}


def test_concurrent_increments_are_not_lost():
    counter = UsageCounter()
    with ThreadPoolExecutor(max_workers=16) as pool:
        for _ in range(2000):
            pool.submit(counter.increment, "trending")
    assert counter.snapshot()["trending"] == 2000
