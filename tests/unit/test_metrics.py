from concurrent.futures import ThreadPoolExecutor
from middleware.metrics import FileserverMetrics


def test_increment_and_reset():
    metrics = FileserverMetrics()
    assert metrics.hits == 0

    metrics.increment()
    metrics.increment()
    assert metrics.hits == 2

    metrics.reset()
    assert metrics.hits == 0


def test_concurrent_increments_are_not_lost():
    metrics = FileserverMetrics()

    with ThreadPoolExecutor(max_workers=8) as pool:
        for _ in range(1000):
            pool.submit(metrics.increment)

    assert metrics.hits == 1000
