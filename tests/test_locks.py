"""Shared/exclusive lock behaviour."""
import threading
import time

from workloads.net.locks import RWLock


class TestRWLock:
    def test_readers_share(self):
        lock = RWLock()
        inside = threading.Barrier(3, timeout=2.0)

        def reader():
            with lock.read_locked():
                # All three must be inside together or the barrier times out.
                inside.wait()

        threads = [threading.Thread(target=reader) for _ in range(3)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=3.0)
        assert not inside.broken

    def test_writer_excludes_readers(self):
        lock = RWLock()
        events = []
        lock.acquire_write()

        def reader():
            with lock.read_locked():
                events.append("read")

        t = threading.Thread(target=reader)
        t.start()
        time.sleep(0.05)
        assert events == []
        events.append("write-done")
        lock.release_write()
        t.join(timeout=2.0)
        assert events == ["write-done", "read"]

    def test_writers_serialize(self):
        lock = RWLock()
        counter = {"n": 0}

        def writer():
            for _ in range(200):
                with lock.write_locked():
                    v = counter["n"]
                    counter["n"] = v + 1

        threads = [threading.Thread(target=writer) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert counter["n"] == 1000

    def test_release_on_exception(self):
        lock = RWLock()
        try:
            with lock.write_locked():
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        with lock.read_locked():
            pass
