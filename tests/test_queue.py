from __future__ import annotations

import threading
import time

import pytest

from tokenapi.execution.queue import SequentialRequestQueue


class TestSequentialRequestQueue:
    def test_run_returns_task_result(self):
        with SequentialRequestQueue() as queue:
            assert queue.run(lambda: {"data": []}) == {"data": []}

    def test_run_reraises_task_exception(self):
        def boom():
            raise ConnectionError("network down")

        with SequentialRequestQueue() as queue, pytest.raises(ConnectionError, match="network down"):
            queue.run(boom)

    def test_tasks_start_in_enqueue_order(self):
        started: list[int] = []

        with SequentialRequestQueue() as queue:
            futures = [queue.enqueue(lambda i=i: started.append(i)) for i in range(10)]
            for future in futures:
                future.result()

        assert started == list(range(10))

    def test_at_most_one_task_in_flight(self):
        lock = threading.Lock()
        active = 0
        peak = 0

        def task():
            nonlocal active, peak
            with lock:
                active += 1
                peak = max(peak, active)
            time.sleep(0.005)
            with lock:
                active -= 1

        with SequentialRequestQueue() as queue:
            futures = [queue.enqueue(task) for _ in range(8)]
            for future in futures:
                future.result()

        assert peak == 1

    def test_failure_does_not_block_later_tasks(self):
        def boom():
            raise ValueError("first task fails")

        with SequentialRequestQueue() as queue:
            failing = queue.enqueue(boom)
            following = queue.enqueue(lambda: "second task ran")

            with pytest.raises(ValueError):
                failing.result()
            assert following.result() == "second task ran"

    def test_concurrent_submitters_are_serialized(self):
        lock = threading.Lock()
        active = 0
        peak = 0
        finished: list[str] = []

        def task(name):
            nonlocal active, peak
            with lock:
                active += 1
                peak = max(peak, active)
            time.sleep(0.002)
            with lock:
                active -= 1
            return name

        queue = SequentialRequestQueue()

        def submitter(name):
            for i in range(5):
                finished.append(queue.run(lambda: task(f"{name}-{i}")))

        threads = [threading.Thread(target=submitter, args=(n,)) for n in ("a", "b", "c")]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        queue.close()

        assert peak == 1
        assert len(finished) == 15

    def test_enqueue_after_close_raises(self):
        queue = SequentialRequestQueue()
        queue.close()

        assert queue.closed
        with pytest.raises(RuntimeError, match="closed"):
            queue.enqueue(lambda: None)

    def test_close_is_idempotent(self):
        queue = SequentialRequestQueue()
        queue.close()
        queue.close()
        assert queue.closed

    def test_close_waits_for_admitted_tasks(self):
        done = threading.Event()

        def slow():
            time.sleep(0.01)
            done.set()

        queue = SequentialRequestQueue()
        queue.enqueue(slow)
        queue.close()

        assert done.is_set()
