"""
Unique id generation for participants, matches and tournaments.
"""
import itertools
import threading
import time


class IdGenerator:
    """Callable producing ids unique within the life of the instance.

    Ids look like ``id_1718000000000_7``: a millisecond timestamp plus a
    counter, so two generators created in different processes are very
    unlikely to collide either.
    """

    def __init__(self, prefix: str = 'id'):
        self.prefix = prefix
        self._counter = itertools.count()
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            n = next(self._counter)
        return f"{self.prefix}_{int(time.time() * 1000)}_{n}"

    def __repr__(self):
        return f"IdGenerator(prefix={self.prefix})"


default_ids = IdGenerator()
