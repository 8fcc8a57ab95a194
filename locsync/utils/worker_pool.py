"""
Bounded thread pool used by the sync orchestrators
"""
import threading
from contextlib import contextmanager
from queue import Empty, Queue
from typing import Callable, Iterable, List, TypeVar

from .logger import get_logger

log = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_MAX_WORKERS = 8


def run_parallel(items: Iterable[T], worker_fn: Callable[[T], R],
                 max_workers: int = DEFAULT_MAX_WORKERS) -> List[R]:
    """
    Run *worker_fn* over *items* on at most *max_workers* threads.

    Work items are queued up front and consumed by a fixed set of worker
    threads. Once any unit raises, workers stop taking new items from the
    queue; units already running are not interrupted and may still finish
    their side effects. After every worker has exited the first exception
    is re-raised.

    Args:
        items: Work items, one unit of work each
        worker_fn: Callable applied to every item
        max_workers: Concurrency ceiling (at least 1)

    Returns:
        Results in the same order as *items*

    Raises:
        Exception: The first exception raised by any unit
    """
    items = list(items)
    if not items:
        return []

    work_queue = Queue()
    for index, item in enumerate(items):
        work_queue.put((index, item))

    results = [None] * len(items)
    errors = []
    failed = threading.Event()
    error_lock = threading.Lock()

    def worker():
        while not failed.is_set():
            try:
                index, item = work_queue.get_nowait()
            except Empty:
                break

            try:
                results[index] = worker_fn(item)
            except Exception as e:  # noqa: BLE001 - re-raised by the caller thread
                with error_lock:
                    errors.append(e)
                failed.set()
                log.debug("Work item %r failed: %s", item, e)

    threads = []
    num_workers = max(1, min(max_workers, len(items)))

    for _ in range(num_workers):
        t = threading.Thread(target=worker, daemon=True)
        t.start()
        threads.append(t)

    for t in threads:
        t.join()

    if errors:
        skipped = work_queue.qsize()
        if skipped:
            log.debug("Skipped %d queued work item(s) after failure", skipped)
        raise errors[0]

    return results


class KeyedLocks:
    """
    One lock per key, alive only while someone holds or waits for it.

    Serializes work on the same key while different keys proceed
    independently. Entries are reference counted and dropped when the
    last holder leaves, so a long-lived owner does not accumulate locks.

    Example:
        >>> locks = KeyedLocks()
        >>> with locks.hold("fr-FR:app.json"):
        ...     pass
        >>> len(locks)
        0
    """

    def __init__(self):
        self._entries = {}
        self._guard = threading.Lock()

    @contextmanager
    def hold(self, key):
        """Hold the lock for *key* for the duration of the ``with`` block."""
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = [threading.Lock(), 0]
            entry[1] += 1

        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._entries[key]

    def __len__(self):
        with self._guard:
            return len(self._entries)
