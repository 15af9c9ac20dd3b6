import threading

from moleboard.services.scores.rate_limit import InMemoryRateLimitStore


def test_first_attempt_allowed():
    store = InMemoryRateLimitStore()
    assert store.last_seen('u1') is None
    assert store.try_acquire('u1', 20000, 10000)
    assert store.last_seen('u1') == 20000


def test_cooldown_window():
    store = InMemoryRateLimitStore()
    assert store.try_acquire('u1', 20000, 10000)
    assert not store.try_acquire('u1', 29999, 10000)
    assert store.last_seen('u1') == 20000
    assert store.try_acquire('u1', 30000, 10000)


def test_earlier_timestamp_never_moves_entry_back():
    store = InMemoryRateLimitStore()
    assert store.try_acquire('u1', 50000, 10000)
    assert not store.try_acquire('u1', 1000, 10000)
    assert store.last_seen('u1') == 50000


def test_reset():
    store = InMemoryRateLimitStore()
    store.try_acquire('u1', 20000, 10000)
    store.reset()
    assert store.last_seen('u1') is None
    assert store.try_acquire('u1', 20001, 10000)


def test_concurrent_attempts_only_one_wins():
    store = InMemoryRateLimitStore()
    results = []
    barrier = threading.Barrier(8)

    def attempt():
        barrier.wait()
        results.append(store.try_acquire('u1', 20000, 10000))

    threads = [threading.Thread(target=attempt) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert results.count(True) == 1
